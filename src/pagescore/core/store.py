"""AuditResultStore: one run's audit results keyed by audit id."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import pydantic

from pagescore.models.results import AuditResult
from pagescore.utils.documents import load_document
from pagescore.utils.errors import DuplicateIdError, InvalidResultError, MissingResultError


class AuditResultStore:
    """Results collected during a single run.

    A store is created fresh for each run and handed to the aggregator once
    every audit has finished or failed. Result ids must be unique.

    Example:
        store = AuditResultStore([
            AuditResult.passed("viewport"),
            AuditResult(audit_id="speed-index", score=0.62, score_display_mode="numeric"),
        ])
        store.require("viewport").score  # 1.0
    """

    def __init__(self, results: Iterable[AuditResult] = ()) -> None:
        self._results: dict[str, AuditResult] = {}
        for result in results:
            self.add(result)

    def add(self, result: AuditResult) -> None:
        """Add a result.

        Raises:
            DuplicateIdError: If a result for the same audit is already stored
        """
        if result.audit_id in self._results:
            raise DuplicateIdError("result", result.audit_id)
        self._results[result.audit_id] = result

    def get(self, audit_id: str) -> AuditResult | None:
        return self._results.get(audit_id)

    def require(self, audit_id: str, category_id: str | None = None) -> AuditResult:
        """Get the result for an audit.

        Raises:
            MissingResultError: If the audit produced no result
        """
        result = self._results.get(audit_id)
        if result is None:
            raise MissingResultError(audit_id, category_id)
        return result

    @property
    def audit_ids(self) -> list[str]:
        return list(self._results)

    def __contains__(self, audit_id: object) -> bool:
        return audit_id in self._results

    def __iter__(self) -> Iterator[AuditResult]:
        return iter(self._results.values())

    def __len__(self) -> int:
        return len(self._results)

    @classmethod
    def from_document(cls, data: Any) -> "AuditResultStore":
        """Build a store from a results document.

        Accepts a list of result records, or a mapping with an ``audits``
        key holding either such a list or a mapping of audit id to record.
        """
        if isinstance(data, Mapping) and "audits" in data:
            data = data["audits"]

        records: list[tuple[str | None, Any]]
        if isinstance(data, Mapping):
            records = list(data.items())
        elif isinstance(data, (list, tuple)):
            records = [(None, record) for record in data]
        else:
            raise InvalidResultError(
                f"Results must be a list or a mapping, got {type(data).__name__}"
            )

        store = cls()
        for audit_id, record in records:
            store.add(_parse_result(audit_id, record))
        return store

    @classmethod
    def load(cls, path: Path | str) -> "AuditResultStore":
        """Load a store from a JSON or YAML results file."""
        return cls.from_document(load_document(path))


def _parse_result(audit_id: str | None, record: Any) -> AuditResult:
    if not isinstance(record, Mapping):
        raise InvalidResultError(f"Result record must be a mapping: {record!r}", audit_id)

    data = dict(record)
    if audit_id is not None:
        declared = data.setdefault("id", audit_id)
        if declared != audit_id:
            raise InvalidResultError(
                f"Result keyed {audit_id} declares id {declared}", audit_id
            )

    try:
        return AuditResult.model_validate(data)
    except pydantic.ValidationError as e:
        raise InvalidResultError(
            f"Invalid result for {data.get('id', '?')}: {e}", data.get("id")
        ) from e


def load_results(path: Path | str) -> AuditResultStore:
    """Load a results file into a new store."""
    return AuditResultStore.load(path)
