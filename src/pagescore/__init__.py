"""pagescore: weighted category scoring for web page audits.

This package turns independently produced audit results into one score per
category, driven by a declarative configuration:

- **Validation**: Parse a configuration document into immutable typed records
- **Resolution**: Compose a base configuration with override fragments
- **Aggregation**: Weighted mean of audit scores per category, with
  manual, missing and errored audits kept out of the math
- **Ordering**: Stable display order of groups within a category

Usage:
    from pagescore import AuditResult, AuditResultStore, ScoreAggregator, resolve_document

    config = resolve_document({"extends": "default"})
    store = AuditResultStore([AuditResult.passed("viewport"), ...])
    report = ScoreAggregator().score(config, store)
    print(report.results["seo"].score)

CLI:
    pagescore score results.json
    pagescore config validate custom.yaml
    pagescore config show --format json
"""

__version__ = "0.1.0"

# Core classes
from pagescore.core.aggregator import ScoreAggregator
from pagescore.core.ordering import AuditSection, ordered_sections
from pagescore.core.resolver import ConfigResolver, MergeStrategy, filter_config, resolve, resolve_document
from pagescore.core.store import AuditResultStore
from pagescore.core.validation import validate

# Models (commonly used)
from pagescore.models.config import Audit, AuditRef, Category, ConfigModel, Group, Pass, Settings
from pagescore.models.results import (
    AuditResult,
    CategoryScoreResult,
    Contribution,
    ScoreDisplayMode,
    ScoreReport,
)

# Built-in data
from pagescore.knowledge import get_default_config, get_ui_strings

# Errors
from pagescore.utils.errors import (
    ConfigValidationError,
    DanglingReferenceError,
    DuplicateIdError,
    InvalidConfigError,
    InvalidWeightError,
    MissingResultError,
    PageScoreError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "ScoreAggregator",
    "AuditSection",
    "ordered_sections",
    "ConfigResolver",
    "MergeStrategy",
    "filter_config",
    "resolve",
    "resolve_document",
    "AuditResultStore",
    "validate",
    # Models - Config
    "Audit",
    "AuditRef",
    "Category",
    "ConfigModel",
    "Group",
    "Pass",
    "Settings",
    # Models - Results
    "AuditResult",
    "CategoryScoreResult",
    "Contribution",
    "ScoreDisplayMode",
    "ScoreReport",
    # Built-in data
    "get_default_config",
    "get_ui_strings",
    # Errors
    "ConfigValidationError",
    "DanglingReferenceError",
    "DuplicateIdError",
    "InvalidConfigError",
    "InvalidWeightError",
    "MissingResultError",
    "PageScoreError",
]
