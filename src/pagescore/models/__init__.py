"""Data models for pagescore.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from pagescore.models.common import ErrorDetail
from pagescore.models.config import (
    Audit,
    AuditRef,
    Category,
    ConfigModel,
    Gatherer,
    Group,
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

__all__ = [
    # Common
    "ErrorDetail",
    # Config
    "Audit",
    "AuditRef",
    "Category",
    "ConfigModel",
    "Gatherer",
    "Group",
    "Pass",
    "ScoringClass",
    "Settings",
    "id_from_path",
    "infer_scoring_class",
    # Results
    "AuditResult",
    "CategoryScoreResult",
    "Contribution",
    "ScoreDisplayMode",
    "ScoreReport",
]
