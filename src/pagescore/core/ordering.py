"""Stable display order of groups within a category."""

from __future__ import annotations

from typing import NamedTuple

from pagescore.models.config import AuditRef, Category


class AuditSection(NamedTuple):
    """A run of audit refs rendered under one group heading.

    ``group_id`` is None for the trailing section of ungrouped refs.
    """

    group_id: str | None
    audit_refs: tuple[AuditRef, ...]


def ordered_sections(category: Category) -> list[AuditSection]:
    """Split a category's refs into display sections.

    Groups appear in the order of their first referencing ref; refs keep
    their relative order inside a section. Ungrouped refs come last.
    """
    sections: dict[str, list[AuditRef]] = {}
    ungrouped: list[AuditRef] = []

    for ref in category.audit_refs:
        if ref.group_id is None:
            ungrouped.append(ref)
        else:
            sections.setdefault(ref.group_id, []).append(ref)

    ordered = [AuditSection(group_id, tuple(refs)) for group_id, refs in sections.items()]
    if ungrouped:
        ordered.append(AuditSection(None, tuple(ungrouped)))
    return ordered


def group_order(category: Category) -> list[str]:
    """Group ids of a category in display order."""
    return [section.group_id for section in ordered_sections(category) if section.group_id]
