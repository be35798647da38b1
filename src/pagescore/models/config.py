"""Scoring configuration data models.

A ConfigModel is the validated, immutable form of a configuration document.
Build one with ``pagescore.core.validation.validate`` (or the resolver);
constructing models directly skips the cross-reference checks.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

NUMERIC_AUDIT_PREFIXES = ("metrics/", "byte-efficiency/")


class ScoringClass(str, Enum):
    """How an audit's raw outcome maps to a score."""

    BINARY = "binary"
    NUMERIC = "numeric"
    MANUAL = "manual"


def id_from_path(path: str) -> str:
    """Derive an entity id from its module path (last path segment)."""
    return path.rstrip("/").rsplit("/", 1)[-1]


def infer_scoring_class(path: str) -> ScoringClass:
    """Guess the scoring class of an audit from where it lives."""
    if "manual" in path.split("/"):
        return ScoringClass.MANUAL
    if path.startswith(NUMERIC_AUDIT_PREFIXES):
        return ScoringClass.NUMERIC
    return ScoringClass.BINARY


class ConfigEntity(BaseModel):
    """Base for configuration records: frozen, camelCase on the wire."""

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class Audit(ConfigEntity):
    """A single automated check."""

    id: str = Field(description="Unique audit id")
    path: str = Field(description="Module path the audit was declared with")
    scoring_class: ScoringClass = Field(default=ScoringClass.BINARY, description="Scoring function class")

    @property
    def is_manual(self) -> bool:
        return self.scoring_class == ScoringClass.MANUAL


class Gatherer(ConfigEntity):
    """A raw-signal collector run during a pass."""

    id: str = Field(description="Gatherer id, unique within its pass")
    path: str = Field(description="Module path the gatherer was declared with")


class Pass(ConfigEntity):
    """An ordered group of gatherers sharing collection parameters."""

    pass_name: str = Field(description="Unique pass name")
    is_default: bool = Field(default=False, alias="default", description="Primary pass marker")
    record_trace: bool = Field(default=False, description="Record a performance trace")
    use_throttling: bool = Field(default=False, description="Apply network/CPU throttling")
    pause_after_load_ms: int = Field(default=0, ge=0)
    network_quiet_threshold_ms: int = Field(default=0, ge=0)
    cpu_quiet_threshold_ms: int = Field(default=0, ge=0)
    blocked_url_patterns: tuple[str, ...] = Field(default=(), description="URL patterns blocked during the pass")
    gatherers: tuple[Gatherer, ...] = Field(default=())


class Settings(ConfigEntity):
    """Run settings carried by a configuration."""

    model_config = {**ConfigEntity.model_config, "extra": "allow"}

    output: str = Field(default="json")
    locale: str = Field(default="en-US")
    max_wait_for_load: int = Field(default=45000, ge=0)
    throttling_method: str = Field(default="devtools")
    emulated_form_factor: str = Field(default="mobile")
    disable_storage_reset: bool = Field(default=False)
    only_categories: tuple[str, ...] | None = Field(default=None)
    only_audits: tuple[str, ...] | None = Field(default=None)
    skip_audits: tuple[str, ...] | None = Field(default=None)

    @property
    def has_filters(self) -> bool:
        """Whether the settings narrow the audit set."""
        return any(
            value is not None
            for value in (self.only_categories, self.only_audits, self.skip_audits)
        )


class Group(ConfigEntity):
    """Display-only clustering of audits within a category."""

    id: str
    title: str
    description: str | None = None


class AuditRef(ConfigEntity):
    """Weighted link from a category to an audit."""

    audit_id: str = Field(alias="id")
    weight: float = Field(ge=0, allow_inf_nan=False)
    group_id: str | None = Field(default=None, alias="group")

    @property
    def is_informational(self) -> bool:
        """Weight-0 refs are displayed but never scored."""
        return self.weight == 0

    @property
    def key(self) -> tuple[str, str | None]:
        """Identity used when merging refs."""
        return (self.audit_id, self.group_id)


class Category(ConfigEntity):
    """Top-level scored rollup of weighted audit references."""

    id: str
    title: str
    description: str | None = None
    manual_description: str | None = None
    audit_refs: tuple[AuditRef, ...] = Field(default=())

    @property
    def audit_ids(self) -> list[str]:
        return [ref.audit_id for ref in self.audit_refs]


class ConfigModel(ConfigEntity):
    """Validated scoring configuration."""

    settings: Settings = Field(default_factory=Settings)
    passes: tuple[Pass, ...] = Field(default=())
    audits: tuple[Audit, ...] = Field(default=())
    groups: tuple[Group, ...] = Field(default=())
    categories: tuple[Category, ...] = Field(default=())

    def get_audit(self, audit_id: str) -> Audit | None:
        for audit in self.audits:
            if audit.id == audit_id:
                return audit
        return None

    def get_group(self, group_id: str) -> Group | None:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def get_category(self, category_id: str) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def get_pass(self, pass_name: str) -> Pass | None:
        for pass_ in self.passes:
            if pass_.pass_name == pass_name:
                return pass_
        return None

    @property
    def default_pass(self) -> Pass | None:
        for pass_ in self.passes:
            if pass_.is_default:
                return pass_
        return None

    @property
    def audit_ids(self) -> list[str]:
        return [audit.id for audit in self.audits]

    @property
    def category_ids(self) -> list[str]:
        return [category.id for category in self.categories]

    def to_document(self) -> dict[str, Any]:
        """Convert back to the raw configuration document form.

        The result validates to an equal ConfigModel.
        """
        return {
            "settings": self.settings.model_dump(mode="json", by_alias=True, exclude_none=True),
            "passes": [_pass_document(p) for p in self.passes],
            "audits": [_audit_document(a) for a in self.audits],
            "groups": {
                g.id: g.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
                for g in self.groups
            },
            "categories": {
                c.id: {
                    **c.model_dump(by_alias=True, exclude={"id", "audit_refs"}, exclude_none=True),
                    "auditRefs": [
                        ref.model_dump(by_alias=True, exclude_none=True) for ref in c.audit_refs
                    ],
                }
                for c in self.categories
            },
        }


def _audit_document(audit: Audit) -> str | dict[str, Any]:
    if audit.id == id_from_path(audit.path) and audit.scoring_class == infer_scoring_class(audit.path):
        return audit.path
    return {"path": audit.path, "id": audit.id, "scoringClass": audit.scoring_class.value}


def _pass_document(pass_: Pass) -> dict[str, Any]:
    data = pass_.model_dump(mode="json", by_alias=True, exclude={"gatherers"})
    data["gatherers"] = [
        g.path if g.id == id_from_path(g.path) else {"path": g.path, "id": g.id}
        for g in pass_.gatherers
    ]
    return data
