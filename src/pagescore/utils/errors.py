"""Error types for pagescore.

Configuration errors are fatal: they abort resolution before any audit runs.
Result errors are recoverable: they degrade a single contribution and are
reported on the category instead of propagating.
"""

from __future__ import annotations

from typing import Any

from pagescore.models.common import ErrorDetail


class PageScoreError(Exception):
    """Base exception for pagescore."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_error_detail(self) -> ErrorDetail:
        """Convert to ErrorDetail model."""
        return ErrorDetail(code=self.code, message=self.message, details=self.details)


class ConfigValidationError(PageScoreError):
    """A scoring configuration is structurally invalid."""


class DuplicateIdError(ConfigValidationError):
    """Two entities of the same kind share an id."""

    def __init__(self, kind: str, entity_id: str, scope: str | None = None):
        where = f" in {scope}" if scope else ""
        details: dict[str, Any] = {"kind": kind, "id": entity_id}
        if scope:
            details["scope"] = scope
        super().__init__(
            f"Duplicate {kind} id{where}: {entity_id}",
            code="DUPLICATE_ID",
            details=details,
        )
        self.kind = kind
        self.entity_id = entity_id


class DanglingReferenceError(ConfigValidationError):
    """A reference points at an id that is not defined."""

    def __init__(self, kind: str, entity_id: str, referrer: str):
        super().__init__(
            f"{referrer} references unknown {kind}: {entity_id}",
            code="DANGLING_REFERENCE",
            details={"kind": kind, "id": entity_id, "referrer": referrer},
        )
        self.kind = kind
        self.entity_id = entity_id
        self.referrer = referrer


class InvalidWeightError(ConfigValidationError):
    """An audit reference carries a negative, non-finite or non-numeric weight."""

    def __init__(self, audit_id: str, category_id: str, weight: Any):
        super().__init__(
            f"Invalid weight {weight!r} for audit {audit_id} in category {category_id}",
            code="INVALID_WEIGHT",
            details={"audit_id": audit_id, "category_id": category_id, "weight": repr(weight)},
        )
        self.audit_id = audit_id
        self.category_id = category_id
        self.weight = weight


class InvalidConfigError(ConfigValidationError):
    """The configuration document has the wrong shape."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="INVALID_CONFIG", details=details)
        self.field = field


class MissingResultError(PageScoreError):
    """No result was produced for a referenced audit."""

    def __init__(self, audit_id: str, category_id: str | None = None):
        details: dict[str, Any] = {"audit_id": audit_id}
        if category_id:
            details["category_id"] = category_id
        super().__init__(
            f"No result for audit: {audit_id}",
            code="MISSING_RESULT",
            details=details,
        )
        self.audit_id = audit_id


class InvalidResultError(PageScoreError):
    """An audit result record is malformed."""

    def __init__(self, message: str, audit_id: str | None = None):
        details = {"audit_id": audit_id} if audit_id else {}
        super().__init__(message, code="INVALID_RESULT", details=details)


class ConfigurationError(PageScoreError):
    """The tool settings file could not be loaded."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)
