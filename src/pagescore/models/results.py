"""Audit result and category score data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel

from pagescore.models.common import ErrorDetail
from pagescore.models.config import Category, Group


class ScoreDisplayMode(str, Enum):
    """How an audit result should be displayed and whether it can be scored."""

    BINARY = "binary"
    NUMERIC = "numeric"
    MANUAL = "manual"
    INFORMATIVE = "informative"
    NOT_APPLICABLE = "not-applicable"
    ERROR = "error"

    @property
    def carries_score(self) -> bool:
        return self in (ScoreDisplayMode.BINARY, ScoreDisplayMode.NUMERIC)


class AuditResult(BaseModel):
    """Outcome of a single audit in one run."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    audit_id: str = Field(alias="id", description="Id of the audit that produced this result")
    score: float | None = Field(default=None, ge=0, le=1, allow_inf_nan=False)
    score_display_mode: ScoreDisplayMode = Field(default=ScoreDisplayMode.BINARY)
    error_message: str | None = Field(default=None)

    @model_validator(mode="after")
    def _score_matches_mode(self) -> "AuditResult":
        if self.score is not None and not self.score_display_mode.carries_score:
            raise ValueError(
                f"score must be null for {self.score_display_mode.value} results "
                f"(audit {self.audit_id})"
            )
        return self

    @property
    def is_error(self) -> bool:
        return self.score_display_mode == ScoreDisplayMode.ERROR

    @classmethod
    def passed(cls, audit_id: str) -> "AuditResult":
        """Create a passing binary result."""
        return cls(audit_id=audit_id, score=1.0)

    @classmethod
    def failed(cls, audit_id: str) -> "AuditResult":
        """Create a failing binary result."""
        return cls(audit_id=audit_id, score=0.0)

    @classmethod
    def errored(cls, audit_id: str, message: str) -> "AuditResult":
        """Create a result for an audit that threw."""
        return cls(
            audit_id=audit_id,
            score_display_mode=ScoreDisplayMode.ERROR,
            error_message=message,
        )


class Contribution(BaseModel):
    """One audit reference's share of a category score."""

    model_config = {"frozen": True}

    audit_id: str
    group_id: str | None = None
    weight: float = Field(description="Weight configured on the audit reference")
    effective_weight: float = Field(description="Weight actually used; 0 when excluded")
    score: float | None = Field(default=None, description="Audit score, null when unavailable")
    score_display_mode: ScoreDisplayMode | None = Field(
        default=None,
        description="Display mode of the result, null when the result is missing",
    )

    @property
    def scored(self) -> bool:
        return self.effective_weight > 0


class CategoryScoreResult(BaseModel):
    """Computed score of one category with its per-audit breakdown."""

    model_config = {"frozen": True}

    category_id: str
    score: float | None = Field(default=None, ge=0, le=1, description="Null when nothing was scorable")
    contributions: tuple[Contribution, ...] = Field(default=())
    has_errors: bool = Field(default=False, description="At least one constituent audit errored")
    errored_audits: tuple[str, ...] = Field(default=())
    missing_audits: tuple[str, ...] = Field(default=())
    issues: tuple[ErrorDetail, ...] = Field(default=())

    @property
    def is_scored(self) -> bool:
        return self.score is not None

    @property
    def scored_contributions(self) -> list[Contribution]:
        return [c for c in self.contributions if c.scored]

    @property
    def excluded_contributions(self) -> list[Contribution]:
        return [c for c in self.contributions if not c.scored]

    @property
    def total_weight(self) -> float:
        return sum(c.effective_weight for c in self.contributions)


class ScoreReport(BaseModel):
    """Scores of every category plus the metadata needed to render them."""

    model_config = {"frozen": True}

    results: dict[str, CategoryScoreResult] = Field(default_factory=dict)
    categories: tuple[Category, ...] = Field(default=(), description="Category metadata in config order")
    groups: tuple[Group, ...] = Field(default=(), description="Group metadata")

    def get_result(self, category_id: str) -> CategoryScoreResult | None:
        return self.results.get(category_id)

    def get_category(self, category_id: str) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def get_group(self, group_id: str) -> Group | None:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    @property
    def scored_categories(self) -> list[str]:
        return [cid for cid, result in self.results.items() if result.is_scored]

    @property
    def not_scored_categories(self) -> list[str]:
        return [cid for cid, result in self.results.items() if not result.is_scored]

    @property
    def degraded_categories(self) -> list[str]:
        """Categories with at least one errored audit."""
        return [cid for cid, result in self.results.items() if result.has_errors]

    def below(self, threshold: float) -> list[str]:
        """Scored categories whose score is under a threshold."""
        return [
            cid
            for cid, result in self.results.items()
            if result.score is not None and result.score < threshold
        ]
