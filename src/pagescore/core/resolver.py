"""ConfigResolver: composes configuration documents into one ConfigModel."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import Any

from pydantic.alias_generators import to_camel

from pagescore.core.validation import iter_entries, validate
from pagescore.models.config import ConfigModel, id_from_path
from pagescore.utils.errors import DuplicateIdError, InvalidConfigError
from pagescore.utils.logging import get_logger

logger = get_logger("resolver")

DEFAULT_EXTENDS = ("default", "pagescore:default")

DOCUMENT_KEYS = ("settings", "passes", "audits", "groups", "categories", "extends", "merge")


class MergeStrategy(str, Enum):
    """How a fragment's collection combines with the base collection."""

    REPLACE = "replace"
    APPEND = "append"
    MERGE_BY_ID = "merge-by-id"


DEFAULT_STRATEGIES: dict[str, MergeStrategy] = {
    "audits": MergeStrategy.APPEND,
    "passes": MergeStrategy.APPEND,
    "groups": MergeStrategy.MERGE_BY_ID,
    "categories": MergeStrategy.MERGE_BY_ID,
}

MERGEABLE_BY_ID = ("groups", "categories")

ENTRY_KINDS = {"groups": "group", "categories": "category"}


class ConfigResolver:
    """Resolves a base configuration plus override fragments.

    Fragments are raw documents applied in order; for scalar fields the
    later fragment wins. Each collection merges with a strategy chosen by
    the resolver defaults or by the fragment's own ``merge`` mapping.

    Example:
        resolver = ConfigResolver()
        config = resolver.resolve(
            get_default_config(),
            [{"categories": {"seo": {"auditRefs": [{"id": "viewport", "weight": 3}]}}}],
        )
    """

    def __init__(self, strategies: Mapping[str, MergeStrategy | str] | None = None) -> None:
        self._strategies = dict(DEFAULT_STRATEGIES)
        if strategies:
            self._strategies.update(_parse_strategies(strategies))

    def resolve(
        self,
        base: ConfigModel | Mapping[str, Any],
        overrides: Sequence[Mapping[str, Any]] = (),
    ) -> ConfigModel:
        """Merge overrides onto base and validate the result.

        Settings filters (``onlyCategories``, ``onlyAudits``, ``skipAudits``)
        on the merged document are applied after validation.

        Raises:
            ConfigValidationError: If a merge step or the merged document is invalid
        """
        document = self._as_document(base)
        for index, fragment in enumerate(overrides):
            logger.debug(f"Applying override fragment {index}")
            document = self.merge(document, fragment)

        config = validate(document)
        if config.settings.has_filters:
            config = filter_config(
                config,
                only_categories=config.settings.only_categories,
                only_audits=config.settings.only_audits,
                skip_audits=config.settings.skip_audits,
            )
        return config

    def resolve_document(
        self,
        document: Mapping[str, Any],
        overrides: Sequence[Mapping[str, Any]] = (),
    ) -> ConfigModel:
        """Resolve a document that may ``extends`` the built-in default."""
        if not isinstance(document, Mapping):
            raise InvalidConfigError("Configuration must be a mapping")

        extends = document.get("extends")
        if not extends:
            body = {k: v for k, v in document.items() if k not in ("extends", "merge")}
            return self.resolve(body, overrides)

        if extends is not True and extends not in DEFAULT_EXTENDS:
            raise InvalidConfigError(
                f"Unsupported extends value: {extends!r} (expected one of {', '.join(DEFAULT_EXTENDS)})",
                field="extends",
            )

        from pagescore.knowledge import get_default_config

        fragment = {k: v for k, v in document.items() if k != "extends"}
        return self.resolve(get_default_config(), [fragment, *overrides])

    def merge(self, base: Mapping[str, Any], fragment: Mapping[str, Any]) -> dict[str, Any]:
        """Merge one fragment onto a raw base document.

        Returns:
            A new document; neither input is modified
        """
        if not isinstance(fragment, Mapping):
            raise InvalidConfigError(
                f"Override fragment must be a mapping, got {type(fragment).__name__}"
            )
        if "extends" in fragment:
            raise InvalidConfigError(
                "'extends' is only allowed on the top-level document", field="extends"
            )
        for key in fragment:
            if key not in DOCUMENT_KEYS:
                logger.warning(f"Ignoring unknown configuration key: {key}")

        strategies = dict(self._strategies)
        strategies.update(_parse_strategies(fragment.get("merge") or {}))

        merged = copy.deepcopy(dict(base))
        merged.pop("merge", None)

        if fragment.get("settings") is not None:
            merged["settings"] = _merge_settings(merged.get("settings"), fragment["settings"])

        if fragment.get("audits") is not None:
            merged["audits"] = _merge_list(
                merged.get("audits"),
                fragment["audits"],
                strategies["audits"],
                kind="audit",
                key=_module_id,
            )

        if fragment.get("passes") is not None:
            merged["passes"] = _merge_list(
                merged.get("passes"),
                fragment["passes"],
                strategies["passes"],
                kind="pass",
                key=_pass_name,
            )

        if fragment.get("groups") is not None:
            merged["groups"] = _merge_entries(
                merged.get("groups"),
                fragment["groups"],
                strategies["groups"],
                kind="groups",
                merge_entry=_merge_group,
            )

        if fragment.get("categories") is not None:
            merged["categories"] = _merge_entries(
                merged.get("categories"),
                fragment["categories"],
                strategies["categories"],
                kind="categories",
                merge_entry=_merge_category,
            )

        return merged

    @staticmethod
    def _as_document(base: ConfigModel | Mapping[str, Any]) -> dict[str, Any]:
        if isinstance(base, ConfigModel):
            return base.to_document()
        if not isinstance(base, Mapping):
            raise InvalidConfigError(
                f"Base configuration must be a ConfigModel or mapping, got {type(base).__name__}"
            )
        if base.get("extends"):
            raise InvalidConfigError(
                "Base configuration uses 'extends'; use resolve_document()", field="extends"
            )
        document = copy.deepcopy(dict(base))
        # Strategies only apply to fragments merged onto a base.
        document.pop("merge", None)
        return document


def _parse_strategies(raw: Mapping[str, Any]) -> dict[str, MergeStrategy]:
    if not isinstance(raw, Mapping):
        raise InvalidConfigError("'merge' must be a mapping of collection to strategy", field="merge")

    strategies: dict[str, MergeStrategy] = {}
    for collection, value in raw.items():
        if collection not in DEFAULT_STRATEGIES:
            raise InvalidConfigError(f"Unknown merge collection: {collection}", field="merge")
        try:
            strategy = MergeStrategy(value)
        except ValueError:
            raise InvalidConfigError(
                f"Unknown merge strategy for {collection}: {value!r}", field="merge"
            ) from None
        if strategy == MergeStrategy.MERGE_BY_ID and collection not in MERGEABLE_BY_ID:
            raise InvalidConfigError(
                f"merge-by-id is only supported for {' and '.join(MERGEABLE_BY_ID)}",
                field="merge",
            )
        strategies[collection] = strategy
    return strategies


def _camel_key(key: str) -> str:
    return to_camel(key) if "_" in key else key


def _merge_settings(base: Any, fragment: Any) -> dict[str, Any]:
    if not isinstance(fragment, Mapping):
        raise InvalidConfigError("settings must be a mapping", field="settings")
    merged = {_camel_key(k): v for k, v in (base or {}).items()}
    for key, value in fragment.items():
        merged[_camel_key(key)] = copy.deepcopy(value)
    return merged


def _module_id(entry: Any) -> str:
    if isinstance(entry, str):
        return id_from_path(entry)
    if isinstance(entry, Mapping) and isinstance(entry.get("path"), str):
        return entry.get("id") or id_from_path(entry["path"])
    raise InvalidConfigError(f"Invalid audit entry: {entry!r}", field="audits")


def _pass_name(entry: Any) -> str:
    if isinstance(entry, Mapping) and isinstance(entry.get("passName"), str):
        return entry["passName"]
    raise InvalidConfigError(f"Pass entry is missing passName: {entry!r}", field="passes")


def _merge_list(
    base: Any,
    fragment: Any,
    strategy: MergeStrategy,
    kind: str,
    key: Any,
) -> list[Any]:
    if not isinstance(fragment, (list, tuple)):
        raise InvalidConfigError(f"{kind} overrides must be a list", field=kind)
    fragment = copy.deepcopy(list(fragment))

    if strategy == MergeStrategy.REPLACE:
        return fragment

    merged = list(base or [])
    seen = {key(entry) for entry in merged}
    for entry in fragment:
        entry_id = key(entry)
        if entry_id in seen:
            raise DuplicateIdError(kind, entry_id)
        seen.add(entry_id)
        merged.append(entry)
    return merged


def _merge_entries(
    base: Any,
    fragment: Any,
    strategy: MergeStrategy,
    kind: str,
    merge_entry: Any,
) -> Any:
    singular = ENTRY_KINDS[kind]

    if strategy == MergeStrategy.REPLACE:
        # Keep the fragment's own shape so validation still sees list duplicates.
        return copy.deepcopy(fragment)

    merged: dict[str, dict[str, Any]] = {}
    for entry_id, body in iter_entries(base, kind):
        if entry_id in merged:
            raise DuplicateIdError(singular, entry_id)
        merged[entry_id] = dict(body)

    for entry_id, body in iter_entries(fragment, kind):
        body = copy.deepcopy(dict(body))
        if entry_id not in merged:
            merged[entry_id] = body
        elif strategy == MergeStrategy.APPEND:
            raise DuplicateIdError(singular, entry_id)
        else:
            merged[entry_id] = merge_entry(merged[entry_id], body)

    return merged


def _merge_group(base: dict[str, Any], fragment: dict[str, Any]) -> dict[str, Any]:
    return {**base, **{k: v for k, v in fragment.items() if v is not None}}


def _merge_category(base: dict[str, Any], fragment: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge a category: scalars override, audit refs merge by (id, group)."""
    merged = {**base, **{k: v for k, v in fragment.items() if k != "auditRefs" and v is not None}}

    # Same-key refs in the base collapse onto the first one, later values winning.
    refs: list[Any] = []
    positions: dict[tuple[Any, Any], int] = {}
    for ref in base.get("auditRefs") or []:
        if not isinstance(ref, Mapping):
            refs.append(ref)
            continue
        ref_key = (ref.get("id"), ref.get("group"))
        if ref_key in positions:
            index = positions[ref_key]
            refs[index] = {**refs[index], **ref}
        else:
            positions[ref_key] = len(refs)
            refs.append(dict(ref))

    for ref in fragment.get("auditRefs") or []:
        if not isinstance(ref, Mapping):
            raise InvalidConfigError(f"Invalid audit ref: {ref!r}", field="auditRefs")
        ref_key = (ref.get("id"), ref.get("group"))
        if ref_key in positions:
            index = positions[ref_key]
            refs[index] = {**refs[index], **ref}
        else:
            positions[ref_key] = len(refs)
            refs.append(dict(ref))

    merged["auditRefs"] = refs
    return merged


def filter_config(
    config: ConfigModel,
    only_categories: Iterable[str] | None = None,
    only_audits: Iterable[str] | None = None,
    skip_audits: Iterable[str] | None = None,
    drop_manual: bool = False,
) -> ConfigModel:
    """Narrow a configuration to a subset of categories and audits.

    Categories named in ``only_categories`` are kept along with every
    category that references one of ``only_audits``. Refs to skipped or
    unselected audits are removed; audits and groups that nothing
    references any more are dropped. Passes are kept as they are.

    Args:
        config: Resolved configuration
        only_categories: Category ids to keep
        only_audits: Audit ids to keep
        skip_audits: Audit ids to remove
        drop_manual: Remove audits whose scoring class is manual

    Returns:
        A new ConfigModel; the input is not modified
    """
    only_categories = list(only_categories) if only_categories is not None else None
    only_audits = list(only_audits) if only_audits is not None else None
    skip = set(skip_audits or ())

    known_categories = set(config.category_ids)
    known_audits = set(config.audit_ids)
    for name in only_categories or ():
        if name not in known_categories:
            logger.warning(f"Unrecognized category in onlyCategories: {name}")
    for name in [*(only_audits or ()), *skip]:
        if name not in known_audits:
            logger.warning(f"Unrecognized audit in audit filter: {name}")
    for name in set(only_audits or ()) & skip:
        logger.warning(f"Audit {name} is both selected and skipped; skipping it")

    if only_categories is None and only_audits is None:
        selected_categories = list(config.categories)
        selected_audits = set(known_audits)
    else:
        wanted = set(only_categories or ())
        wanted_audits = set(only_audits or ())
        selected_categories = [
            c
            for c in config.categories
            if c.id in wanted or wanted_audits.intersection(c.audit_ids)
        ]
        selected_audits = set(wanted_audits)
        for category in selected_categories:
            if category.id in wanted:
                selected_audits.update(category.audit_ids)

    selected_audits -= skip
    if drop_manual:
        selected_audits -= {a.id for a in config.audits if a.is_manual}

    categories = []
    for category in selected_categories:
        refs = tuple(r for r in category.audit_refs if r.audit_id in selected_audits)
        if category.audit_refs and not refs:
            logger.debug(f"Dropping category {category.id}: no audits left after filtering")
            continue
        categories.append(category.model_copy(update={"audit_refs": refs}))

    referenced_groups = {
        ref.group_id for c in categories for ref in c.audit_refs if ref.group_id
    }

    return config.model_copy(
        update={
            "audits": tuple(a for a in config.audits if a.id in selected_audits),
            "groups": tuple(g for g in config.groups if g.id in referenced_groups),
            "categories": tuple(categories),
        }
    )


def resolve(
    base: ConfigModel | Mapping[str, Any],
    overrides: Sequence[Mapping[str, Any]] = (),
) -> ConfigModel:
    """Resolve base plus overrides with the default merge strategies."""
    return ConfigResolver().resolve(base, overrides)


def resolve_document(
    document: Mapping[str, Any],
    overrides: Sequence[Mapping[str, Any]] = (),
) -> ConfigModel:
    """Resolve a document, expanding ``extends: default`` when present."""
    return ConfigResolver().resolve_document(document, overrides)
