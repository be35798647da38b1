"""JSON renderer for pagescore output."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from pagescore.models.results import ScoreReport
from pagescore.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output format.

    Score reports get their titles and descriptions resolved to text;
    other models are dumped as they are.

    Example:
        renderer = JSONRenderer()
        json_str = renderer.render(report, RenderContext(format=OutputFormat.JSON))
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, ScoreReport):
            dict_data = self._report_dict(data, context)
        elif isinstance(data, BaseModel):
            dict_data = data.model_dump(mode="json")
        else:
            dict_data = data

        return json.dumps(
            dict_data,
            indent=context.indent if context.indent else None,
            default=self._json_serializer,
            ensure_ascii=False,
        )

    def _report_dict(self, report: ScoreReport, context: RenderContext) -> dict[str, Any]:
        """Shape a report as ``{categories: {id: {...}}, groups: {id: {...}}}``."""
        categories: dict[str, Any] = {}
        for category in report.categories:
            result = report.get_result(category.id)
            entry: dict[str, Any] = {
                "title": self.text(category.title, context),
                "description": self.text(category.description, context) or None,
                "manualDescription": self.text(category.manual_description, context) or None,
            }
            if result is not None:
                entry.update(result.model_dump(mode="json", exclude={"category_id"}))
            categories[category.id] = entry

        groups = {
            group.id: {
                "title": self.text(group.title, context),
                "description": self.text(group.description, context) or None,
            }
            for group in report.groups
        }
        return {"categories": categories, "groups": groups}

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """Custom JSON serializer for non-standard types."""
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, (set, frozenset, tuple)):
            return list(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
