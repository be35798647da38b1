"""Core scoring logic for pagescore.

This module provides the main library API: configuration validation and
resolution, the per-run result store, and the score aggregator.
"""

from pagescore.core.aggregator import ScoreAggregator, score_config
from pagescore.core.ordering import AuditSection, group_order, ordered_sections
from pagescore.core.resolver import (
    ConfigResolver,
    MergeStrategy,
    filter_config,
    resolve,
    resolve_document,
)
from pagescore.core.store import AuditResultStore, load_results
from pagescore.core.validation import validate

__all__ = [
    "ScoreAggregator",
    "score_config",
    "AuditSection",
    "group_order",
    "ordered_sections",
    "ConfigResolver",
    "MergeStrategy",
    "filter_config",
    "resolve",
    "resolve_document",
    "AuditResultStore",
    "load_results",
    "validate",
]
