"""Weighted aggregation of audit results into category scores."""

from __future__ import annotations

import math

from pagescore.core.store import AuditResultStore
from pagescore.models.common import ErrorDetail
from pagescore.models.config import Category, ConfigModel
from pagescore.models.results import CategoryScoreResult, Contribution, ScoreReport
from pagescore.utils.errors import MissingResultError
from pagescore.utils.logging import get_logger_with_context


class ScoreAggregator:
    """
    Combines audit results into one score per category.

    The category score is the weighted arithmetic mean over scorable refs:
        Score = Σ(weight_i × score_i) / Σ(weight_i)

    A ref is scorable when its weight is above zero and its result carries
    a score. Weight-0 refs, manual, informative, not-applicable and errored
    results, and refs without any result are kept in the breakdown with an
    effective weight of 0. A category with nothing scorable has a null
    score, never 0.

    The aggregator holds no state; the same config and store always give
    the same report.
    """

    def score(self, config: ConfigModel, store: AuditResultStore) -> ScoreReport:
        """
        Score every category of a configuration.

        Args:
            config: Resolved configuration.
            store: Results of the run; every referenced audit should have
                finished or failed.

        Returns:
            ScoreReport with one result per category, in config order.
        """
        results = {
            category.id: self.score_category(category, store)
            for category in config.categories
        }
        return ScoreReport(
            results=results,
            categories=config.categories,
            groups=config.groups,
        )

    def score_category(
        self,
        category: Category,
        store: AuditResultStore,
    ) -> CategoryScoreResult:
        """
        Score a single category.

        Missing results are logged and contribute nothing; they never abort
        the category.

        Args:
            category: Category with its weighted audit refs.
            store: Results of the run.

        Returns:
            CategoryScoreResult with the breakdown of every ref.
        """
        log = get_logger_with_context("aggregator", category=category.id)

        contributions: list[Contribution] = []
        weights: list[float] = []
        weighted_scores: list[float] = []
        errored: list[str] = []
        missing: list[str] = []
        issues: list[ErrorDetail] = []

        for ref in category.audit_refs:
            try:
                result = store.require(ref.audit_id, category.id)
            except MissingResultError as e:
                log.warning(e.message)
                missing.append(ref.audit_id)
                issues.append(e.to_error_detail())
                contributions.append(
                    Contribution(
                        audit_id=ref.audit_id,
                        group_id=ref.group_id,
                        weight=ref.weight,
                        effective_weight=0.0,
                    )
                )
                continue

            if result.is_error:
                errored.append(ref.audit_id)
                issues.append(
                    ErrorDetail(
                        code="AUDIT_ERROR",
                        message=f"Audit {ref.audit_id} errored: {result.error_message or 'unknown error'}",
                        details={"audit_id": ref.audit_id, "category_id": category.id},
                    )
                )
                log.info(f"Audit {ref.audit_id} errored; excluded from score")

            scored = ref.weight > 0 and result.score is not None
            if scored:
                weights.append(ref.weight)
                weighted_scores.append(ref.weight * result.score)

            contributions.append(
                Contribution(
                    audit_id=ref.audit_id,
                    group_id=ref.group_id,
                    weight=ref.weight,
                    effective_weight=ref.weight if scored else 0.0,
                    score=result.score,
                    score_display_mode=result.score_display_mode,
                )
            )

        score = None
        if weights:
            score = _clamp(math.fsum(weighted_scores) / math.fsum(weights))
        else:
            log.debug("No scorable audits; category is not scored")

        return CategoryScoreResult(
            category_id=category.id,
            score=score,
            contributions=tuple(contributions),
            has_errors=bool(errored),
            errored_audits=tuple(dict.fromkeys(errored)),
            missing_audits=tuple(dict.fromkeys(missing)),
            issues=tuple(issues),
        )


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def score_config(config: ConfigModel, store: AuditResultStore) -> ScoreReport:
    """Score every category of a configuration with a default aggregator."""
    return ScoreAggregator().score(config, store)
