"""Unit tests for data models."""

import pydantic
import pytest

from pagescore.models.common import ErrorDetail
from pagescore.models.config import (
    AuditRef,
    Pass,
    ScoringClass,
    Settings,
    id_from_path,
    infer_scoring_class,
)
from pagescore.models.results import (
    AuditResult,
    CategoryScoreResult,
    Contribution,
    ScoreDisplayMode,
    ScoreReport,
)


class TestPathHelpers:
    """Tests for id and scoring class derivation."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("viewport", "viewport"),
            ("metrics/speed-index", "speed-index"),
            ("accessibility/manual/focus-traps", "focus-traps"),
            ("seo/", "seo"),
        ],
    )
    def test_id_from_path(self, path, expected):
        """Test that the id is the last path segment."""
        assert id_from_path(path) == expected

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("metrics/interactive", ScoringClass.NUMERIC),
            ("byte-efficiency/unminified-css", ScoringClass.NUMERIC),
            ("manual/pwa-cross-browser", ScoringClass.MANUAL),
            ("seo/manual/structured-data", ScoringClass.MANUAL),
            ("dobetterweb/doctype", ScoringClass.BINARY),
            ("manualish-audit", ScoringClass.BINARY),
        ],
    )
    def test_infer_scoring_class(self, path, expected):
        """Test scoring class inference."""
        assert infer_scoring_class(path) == expected


class TestConfigModels:
    """Tests for configuration records."""

    def test_audit_ref_aliases(self):
        """Test that refs use id and group on the wire."""
        ref = AuditRef.model_validate({"id": "viewport", "weight": 2, "group": "seo-mobile"})

        assert ref.audit_id == "viewport"
        assert ref.group_id == "seo-mobile"
        assert ref.key == ("viewport", "seo-mobile")
        assert ref.model_dump(by_alias=True) == {"id": "viewport", "weight": 2.0, "group": "seo-mobile"}

    def test_audit_ref_rejects_negative_weight(self):
        """Test that the model itself rejects negative weights."""
        with pytest.raises(pydantic.ValidationError):
            AuditRef(audit_id="a", weight=-1)

    def test_models_are_frozen(self):
        """Test that records cannot be mutated."""
        ref = AuditRef(audit_id="a", weight=1)

        with pytest.raises(pydantic.ValidationError):
            ref.weight = 2

    def test_pass_default_alias(self):
        """Test the default pass marker."""
        pass_ = Pass.model_validate({"passName": "p", "default": True})

        assert pass_.is_default
        assert pass_.gatherers == ()

    def test_settings_filters(self):
        """Test filter detection on settings."""
        assert not Settings().has_filters
        assert Settings(skip_audits=("a",)).has_filters
        assert Settings.model_validate({"onlyAudits": []}).has_filters


class TestAuditResult:
    """Tests for AuditResult."""

    def test_defaults(self):
        """Test default display mode."""
        result = AuditResult(audit_id="a", score=0.5)

        assert result.score_display_mode == ScoreDisplayMode.BINARY
        assert not result.is_error

    def test_constructors(self):
        """Test the convenience constructors."""
        assert AuditResult.passed("a").score == 1.0
        assert AuditResult.failed("a").score == 0.0
        errored = AuditResult.errored("a", "boom")
        assert errored.is_error
        assert errored.score is None

    @pytest.mark.parametrize("score", [1.01, -0.5, float("nan")])
    def test_score_range(self, score):
        """Test that scores outside [0, 1] are rejected."""
        with pytest.raises(pydantic.ValidationError):
            AuditResult(audit_id="a", score=score)

    @pytest.mark.parametrize(
        "mode",
        [
            ScoreDisplayMode.MANUAL,
            ScoreDisplayMode.INFORMATIVE,
            ScoreDisplayMode.NOT_APPLICABLE,
            ScoreDisplayMode.ERROR,
        ],
    )
    def test_null_modes_reject_score(self, mode):
        """Test that modes without a score refuse one."""
        with pytest.raises(pydantic.ValidationError):
            AuditResult(audit_id="a", score=1.0, score_display_mode=mode)

    def test_carries_score(self):
        """Test which display modes carry a score."""
        assert ScoreDisplayMode.BINARY.carries_score
        assert ScoreDisplayMode.NUMERIC.carries_score
        assert not ScoreDisplayMode.MANUAL.carries_score


class TestScoreReport:
    """Tests for ScoreReport."""

    @pytest.fixture
    def report(self) -> ScoreReport:
        return ScoreReport(
            results={
                "good": CategoryScoreResult(category_id="good", score=0.95),
                "bad": CategoryScoreResult(
                    category_id="bad",
                    score=0.4,
                    has_errors=True,
                    errored_audits=("x",),
                ),
                "empty": CategoryScoreResult(category_id="empty"),
            }
        )

    def test_partitions(self, report):
        """Test scored and unscored partitions."""
        assert report.scored_categories == ["good", "bad"]
        assert report.not_scored_categories == ["empty"]
        assert report.degraded_categories == ["bad"]

    def test_below(self, report):
        """Test threshold checks ignore unscored categories."""
        assert report.below(0.5) == ["bad"]
        assert report.below(0.0) == []

    def test_contribution_totals(self):
        """Test contribution partitions on a category result."""
        result = CategoryScoreResult(
            category_id="c",
            score=1.0,
            contributions=(
                Contribution(audit_id="a", weight=2, effective_weight=2, score=1.0),
                Contribution(audit_id="b", weight=1, effective_weight=0),
            ),
        )

        assert result.total_weight == 2
        assert [c.audit_id for c in result.scored_contributions] == ["a"]
        assert [c.audit_id for c in result.excluded_contributions] == ["b"]


class TestErrorDetail:
    """Tests for ErrorDetail."""

    def test_str(self):
        """Test the string form."""
        detail = ErrorDetail(code="MISSING_RESULT", message="No result for audit: a")

        assert str(detail) == "[MISSING_RESULT] No result for audit: a"
        assert detail.details == {}
