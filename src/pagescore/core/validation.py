"""Validation of raw configuration documents into a ConfigModel."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping
from typing import Any

import pydantic

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
from pagescore.utils.errors import (
    DanglingReferenceError,
    DuplicateIdError,
    InvalidConfigError,
    InvalidWeightError,
)
from pagescore.utils.logging import get_logger

logger = get_logger("validation")

# Keys handled by the resolver; a document still carrying them is not final.
MERGE_DIRECTIVES = ("extends", "merge")


def validate(raw: Mapping[str, Any]) -> ConfigModel:
    """Validate a raw configuration document.

    Args:
        raw: Document with ``settings``, ``passes``, ``audits``, ``groups``
            and ``categories`` keys. Missing keys default to empty.

    Returns:
        The validated ConfigModel

    Raises:
        DuplicateIdError: Two audits, groups, categories or passes share an id
        DanglingReferenceError: An audit ref names an undefined audit or group
        InvalidWeightError: An audit ref weight is negative or non-finite
        InvalidConfigError: The document has the wrong shape
    """
    if not isinstance(raw, Mapping):
        raise InvalidConfigError(
            f"Configuration must be a mapping, got {type(raw).__name__}"
        )

    for directive in MERGE_DIRECTIVES:
        if directive in raw:
            raise InvalidConfigError(
                f"'{directive}' must be resolved before validation; use resolve_document()",
                field=directive,
            )

    settings = _parse_settings(raw.get("settings"))
    passes = _parse_passes(raw.get("passes"))
    audits = _parse_audits(raw.get("audits"))
    groups = _parse_groups(raw.get("groups"))

    audits_by_id = {audit.id: audit for audit in audits}
    group_ids = {group.id for group in groups}
    categories = _parse_categories(raw.get("categories"), audits_by_id, group_ids)

    return ConfigModel(
        settings=settings,
        passes=tuple(passes),
        audits=tuple(audits),
        groups=tuple(groups),
        categories=tuple(categories),
    )


def check_weight(weight: Any, audit_id: str, category_id: str) -> float:
    """Check that a weight is a finite, non-negative number.

    Raises:
        InvalidWeightError: If it is not
    """
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise InvalidWeightError(audit_id, category_id, weight)
    if not math.isfinite(weight) or weight < 0:
        raise InvalidWeightError(audit_id, category_id, weight)
    return float(weight)


def iter_entries(collection: Any, kind: str) -> Iterator[tuple[str, Mapping[str, Any]]]:
    """Yield ``(id, body)`` pairs from a mapping or a list of ``{id: ...}`` entries."""
    if collection is None:
        return
    if isinstance(collection, Mapping):
        for entry_id, body in collection.items():
            yield str(entry_id), _require_mapping(body, f"{kind} {entry_id}")
        return
    if isinstance(collection, (list, tuple)):
        for index, body in enumerate(collection):
            body = _require_mapping(body, f"{kind}[{index}]")
            entry_id = body.get("id")
            if not isinstance(entry_id, str) or not entry_id:
                raise InvalidConfigError(f"{kind}[{index}] is missing an id", field=kind)
            yield entry_id, {k: v for k, v in body.items() if k != "id"}
        return
    raise InvalidConfigError(
        f"{kind} must be a mapping or a list, got {type(collection).__name__}",
        field=kind,
    )


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidConfigError(f"{where} must be a mapping", field=where)
    return value


def _require_list(value: Any, field: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidConfigError(f"{field} must be a list", field=field)
    return list(value)


def _require_text(body: Mapping[str, Any], key: str, where: str, required: bool = False) -> str | None:
    value = body.get(key)
    if value is None:
        if required:
            raise InvalidConfigError(f"{where} is missing '{key}'", field=key)
        return None
    if not isinstance(value, str):
        raise InvalidConfigError(f"{where}: '{key}' must be a string", field=key)
    return value


def _parse_settings(raw: Any) -> Settings:
    if raw is None:
        return Settings()
    _require_mapping(raw, "settings")
    try:
        return Settings.model_validate(raw)
    except pydantic.ValidationError as e:
        raise InvalidConfigError(f"Invalid settings: {e}", field="settings") from e


def _parse_module_ref(entry: Any, where: str) -> tuple[str, str, Mapping[str, Any]]:
    """Parse a ``path`` string or ``{path, id?}`` mapping into (id, path, body)."""
    if isinstance(entry, str):
        return id_from_path(entry), entry, {}
    body = _require_mapping(entry, where)
    path = _require_text(body, "path", where, required=True)
    entry_id = _require_text(body, "id", where) or id_from_path(path)
    return entry_id, path, body


def _parse_audits(raw: Any) -> list[Audit]:
    audits: list[Audit] = []
    seen: set[str] = set()

    for index, entry in enumerate(_require_list(raw, "audits")):
        audit_id, path, body = _parse_module_ref(entry, f"audits[{index}]")
        if audit_id in seen:
            raise DuplicateIdError("audit", audit_id)
        seen.add(audit_id)

        scoring_class = body.get("scoringClass", body.get("scoring_class"))
        try:
            audits.append(
                Audit(
                    id=audit_id,
                    path=path,
                    scoring_class=ScoringClass(scoring_class) if scoring_class else infer_scoring_class(path),
                )
            )
        except ValueError as e:
            raise InvalidConfigError(f"Invalid audit {audit_id}: {e}", field="audits") from e

    return audits


def _parse_passes(raw: Any) -> list[Pass]:
    entries = _require_list(raw, "passes")
    passes: list[Pass] = []
    seen: set[str] = set()

    explicit_defaults = [
        index
        for index, body in enumerate(entries)
        if isinstance(body, Mapping) and body.get("default") is True
    ]
    if len(explicit_defaults) > 1:
        raise InvalidConfigError(
            f"Only one pass may be marked default, found {len(explicit_defaults)}",
            field="passes",
        )
    default_index = explicit_defaults[0] if explicit_defaults else 0

    for index, body in enumerate(entries):
        where = f"passes[{index}]"
        body = _require_mapping(body, where)
        pass_name = _require_text(body, "passName", where, required=True)
        if pass_name in seen:
            raise DuplicateIdError("pass", pass_name)
        seen.add(pass_name)

        gatherers: list[Gatherer] = []
        gatherer_ids: set[str] = set()
        for g_index, entry in enumerate(_require_list(body.get("gatherers"), f"{where}.gatherers")):
            gatherer_id, path, _ = _parse_module_ref(entry, f"{where}.gatherers[{g_index}]")
            if gatherer_id in gatherer_ids:
                raise DuplicateIdError("gatherer", gatherer_id, scope=f"pass {pass_name}")
            gatherer_ids.add(gatherer_id)
            gatherers.append(Gatherer(id=gatherer_id, path=path))

        try:
            passes.append(
                Pass.model_validate(
                    {
                        **body,
                        "default": index == default_index,
                        "gatherers": gatherers,
                    }
                )
            )
        except pydantic.ValidationError as e:
            raise InvalidConfigError(f"Invalid pass {pass_name}: {e}", field="passes") from e

    return passes


def _parse_groups(raw: Any) -> list[Group]:
    groups: list[Group] = []
    seen: set[str] = set()

    for group_id, body in iter_entries(raw, "groups"):
        if group_id in seen:
            raise DuplicateIdError("group", group_id)
        seen.add(group_id)
        where = f"group {group_id}"
        groups.append(
            Group(
                id=group_id,
                title=_require_text(body, "title", where, required=True),
                description=_require_text(body, "description", where),
            )
        )

    return groups


def _parse_categories(
    raw: Any,
    audits_by_id: Mapping[str, Audit],
    group_ids: set[str],
) -> list[Category]:
    categories: list[Category] = []
    seen: set[str] = set()

    for category_id, body in iter_entries(raw, "categories"):
        if category_id in seen:
            raise DuplicateIdError("category", category_id)
        seen.add(category_id)
        where = f"category {category_id}"

        refs: list[AuditRef] = []
        for index, ref in enumerate(_require_list(body.get("auditRefs"), f"{where}.auditRefs")):
            ref = _require_mapping(ref, f"{where}.auditRefs[{index}]")
            audit_id = _require_text(ref, "id", f"{where}.auditRefs[{index}]", required=True)
            weight = check_weight(ref.get("weight"), audit_id, category_id)

            audit = audits_by_id.get(audit_id)
            if audit is None:
                raise DanglingReferenceError("audit", audit_id, where)

            group_id = _require_text(ref, "group", f"{where}.auditRefs[{index}]")
            if group_id is not None and group_id not in group_ids:
                raise DanglingReferenceError("group", group_id, where)

            if audit.is_manual and weight > 0:
                logger.warning(
                    f"Manual audit {audit_id} has weight {weight:g} in {where}; "
                    "manual audits never produce a score"
                )

            refs.append(AuditRef(audit_id=audit_id, weight=weight, group_id=group_id))

        categories.append(
            Category(
                id=category_id,
                title=_require_text(body, "title", where, required=True),
                description=_require_text(body, "description", where),
                manual_description=_require_text(body, "manualDescription", where),
                audit_refs=tuple(refs),
            )
        )

    return categories
