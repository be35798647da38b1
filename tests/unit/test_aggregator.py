"""Unit tests for ScoreAggregator."""

import pytest

from pagescore.core.aggregator import ScoreAggregator, score_config
from pagescore.core.store import AuditResultStore
from pagescore.core.validation import validate
from pagescore.models.config import AuditRef, Category
from pagescore.models.results import AuditResult, ScoreDisplayMode


def _category(*refs: tuple[str, float]) -> Category:
    return Category(
        id="test",
        title="Test",
        audit_refs=tuple(AuditRef(audit_id=audit_id, weight=weight) for audit_id, weight in refs),
    )


class TestScoreAggregator:
    """Tests for ScoreAggregator."""

    @pytest.fixture
    def aggregator(self) -> ScoreAggregator:
        return ScoreAggregator()

    def test_sample_scores(self, aggregator, sample_config, sample_store):
        """Test the weighted mean on the sample configuration."""
        report = aggregator.score(sample_config, sample_store)

        assert report.results["quality"].score == pytest.approx(0.75)
        assert report.results["speed"].score == pytest.approx(2.5 / 3)
        assert list(report.results) == ["quality", "speed"]

    def test_weighted_mean(self, aggregator):
        """Test a weighted mean of mixed scores."""
        category = _category(("a", 3), ("b", 1))
        store = AuditResultStore([AuditResult.passed("a"), AuditResult.failed("b")])

        result = aggregator.score_category(category, store)

        assert result.score == pytest.approx(0.75)
        assert result.total_weight == pytest.approx(4)

    def test_zero_weight_does_not_change_score(self, aggregator):
        """Test that adding a weight-0 ref leaves the score unchanged."""
        store = AuditResultStore(
            [AuditResult.passed("a"), AuditResult.failed("b"), AuditResult.failed("c")]
        )
        base = aggregator.score_category(_category(("a", 3), ("b", 1)), store)
        extended = aggregator.score_category(_category(("a", 3), ("b", 1), ("c", 0)), store)

        assert extended.score == base.score
        contribution = extended.contributions[2]
        assert contribution.audit_id == "c"
        assert contribution.effective_weight == 0
        assert contribution.score == 0.0

    def test_all_zero_weights_not_scored(self, aggregator):
        """Test that a category with only weight-0 refs has a null score."""
        store = AuditResultStore([AuditResult.passed("a")])

        result = aggregator.score_category(_category(("a", 0)), store)

        assert result.score is None
        assert not result.is_scored

    def test_empty_category_not_scored(self, aggregator):
        """Test that a category without refs has a null score."""
        result = aggregator.score_category(_category(), AuditResultStore())

        assert result.score is None
        assert result.contributions == ()

    def test_missing_result_shrinks_denominator(self, aggregator, caplog):
        """Test that an audit without a result is excluded and reported."""
        category = _category(("a", 3), ("b", 1))
        store = AuditResultStore([AuditResult.passed("a")])

        with caplog.at_level("WARNING", logger="pagescore"):
            result = aggregator.score_category(category, store)

        assert result.score == pytest.approx(1.0)
        assert result.missing_audits == ("b",)
        assert result.issues[0].code == "MISSING_RESULT"
        assert result.contributions[1].score_display_mode is None
        assert "No result for audit: b" in caplog.text

    def test_all_results_missing(self, aggregator):
        """Test that a category whose results are all missing is not scored."""
        result = aggregator.score_category(_category(("a", 1)), AuditResultStore())

        assert result.score is None
        assert result.missing_audits == ("a",)

    def test_manual_result_excluded(self, aggregator):
        """Test that a manual result carries no score even with weight."""
        category = _category(("a", 1), ("m", 5))
        store = AuditResultStore(
            [
                AuditResult.failed("a"),
                AuditResult(audit_id="m", score_display_mode=ScoreDisplayMode.MANUAL),
            ]
        )

        result = aggregator.score_category(category, store)

        assert result.score == 0.0
        assert result.score is not None
        assert result.excluded_contributions[0].audit_id == "m"

    @pytest.mark.parametrize(
        "mode",
        [ScoreDisplayMode.INFORMATIVE, ScoreDisplayMode.NOT_APPLICABLE],
    )
    def test_unscored_modes_excluded(self, aggregator, mode):
        """Test that informative and not-applicable results are excluded."""
        category = _category(("a", 1), ("b", 1))
        store = AuditResultStore(
            [AuditResult.passed("a"), AuditResult(audit_id="b", score_display_mode=mode)]
        )

        result = aggregator.score_category(category, store)

        assert result.score == pytest.approx(1.0)
        assert not result.has_errors

    def test_errored_audit_flags_category(self, aggregator):
        """Test that an errored audit is excluded and flagged."""
        category = _category(("a", 1), ("b", 1))
        store = AuditResultStore(
            [AuditResult.failed("a"), AuditResult.errored("b", "Protocol timeout")]
        )

        result = aggregator.score_category(category, store)

        assert result.score == 0.0
        assert result.has_errors
        assert result.errored_audits == ("b",)
        assert result.issues[0].code == "AUDIT_ERROR"
        assert "Protocol timeout" in result.issues[0].message

    def test_all_errored(self, aggregator):
        """Test that a fully errored category is null but still flagged."""
        store = AuditResultStore([AuditResult.errored("a", "boom")])

        result = aggregator.score_category(_category(("a", 1)), store)

        assert result.score is None
        assert result.has_errors

    def test_fractional_weights(self, aggregator):
        """Test non-integer weights."""
        category = _category(("a", 0.5), ("b", 1.5))
        store = AuditResultStore(
            [
                AuditResult(audit_id="a", score=0.2, score_display_mode=ScoreDisplayMode.NUMERIC),
                AuditResult(audit_id="b", score=0.6, score_display_mode=ScoreDisplayMode.NUMERIC),
            ]
        )

        result = aggregator.score_category(category, store)

        assert result.score == pytest.approx((0.5 * 0.2 + 1.5 * 0.6) / 2.0)

    def test_score_in_range(self, aggregator):
        """Test that the score stays within [0, 1] for extreme weights."""
        category = _category(("a", 1e-9), ("b", 1e9))
        store = AuditResultStore([AuditResult.passed("a"), AuditResult.passed("b")])

        result = aggregator.score_category(category, store)

        assert 0.0 <= result.score <= 1.0
        assert result.score == pytest.approx(1.0)

    def test_idempotent(self, aggregator, sample_config, sample_store):
        """Test that scoring twice gives equal reports."""
        first = aggregator.score(sample_config, sample_store)
        second = aggregator.score(sample_config, sample_store)

        assert first == second

    def test_contributions_follow_ref_order(self, aggregator, sample_config, sample_store):
        """Test that the breakdown lists every ref in order."""
        result = aggregator.score(sample_config, sample_store).results["quality"]

        assert [c.audit_id for c in result.contributions] == ["audit-a", "audit-b", "manual-check"]
        assert [c.group_id for c in result.contributions] == ["group-one", "group-two", None]
        assert [c.scored for c in result.contributions] == [True, True, False]

    def test_shared_audit_scored_per_category(self, aggregator, sample_config, sample_store):
        """Test that an audit shared between categories uses each category's weight."""
        report = aggregator.score(sample_config, sample_store)

        quality_a = report.results["quality"].contributions[0]
        speed_a = report.results["speed"].contributions[1]
        assert quality_a.weight == 3
        assert speed_a.weight == 2

    def test_report_metadata(self, aggregator, sample_config, sample_store):
        """Test that the report carries category and group metadata."""
        report = aggregator.score(sample_config, sample_store)

        assert report.get_category("quality").title == "Quality"
        assert report.get_group("group-two").description == "The second group"
        assert report.scored_categories == ["quality", "speed"]
        assert report.degraded_categories == []

    def test_score_config_helper(self, sample_config, sample_store):
        """Test the module-level helper."""
        report = score_config(sample_config, sample_store)

        assert report.results["quality"].score == pytest.approx(0.75)

    def test_only_weight_matters_not_class(self, aggregator):
        """Test that a numeric audit and a binary audit combine by weight alone."""
        document = {
            "audits": ["metrics/speed-index", "viewport"],
            "categories": {
                "mixed": {
                    "title": "Mixed",
                    "auditRefs": [
                        {"id": "speed-index", "weight": 1},
                        {"id": "viewport", "weight": 1},
                    ],
                }
            },
        }
        store = AuditResultStore(
            [
                AuditResult(
                    audit_id="speed-index", score=0.4, score_display_mode=ScoreDisplayMode.NUMERIC
                ),
                AuditResult.passed("viewport"),
            ]
        )

        report = aggregator.score(validate(document), store)

        assert report.results["mixed"].score == pytest.approx(0.7)
