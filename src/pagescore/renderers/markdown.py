"""Markdown renderer for pagescore output."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from pagescore.core.ordering import ordered_sections
from pagescore.models.config import Category
from pagescore.models.results import CategoryScoreResult, ScoreReport
from pagescore.renderers.base import (
    BaseRenderer,
    OutputFormat,
    RenderContext,
    format_score,
    format_weight,
)


class MarkdownRenderer(BaseRenderer):
    """Renderer for Markdown output format.

    Example:
        renderer = MarkdownRenderer()
        md_str = renderer.render(report, RenderContext(format=OutputFormat.MARKDOWN))
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.MARKDOWN

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, ScoreReport):
            return self._render_report(data, context)
        return self._render_generic(data, context)

    def _render_report(self, report: ScoreReport, context: RenderContext) -> str:
        lines = [
            "# Page Score Report",
            "",
            "| Category | Score | Notes |",
            "|----------|------:|-------|",
        ]

        for category in report.categories:
            result = report.get_result(category.id)
            if result is None:
                continue
            lines.append(
                f"| {self.text(category.title, context)} | {format_score(result.score)} "
                f"| {self._notes(result)} |"
            )
        lines.append("")

        for category in report.categories:
            result = report.get_result(category.id)
            if result is not None:
                lines.extend(self._render_category(report, category, result, context))

        return "\n".join(lines)

    def _render_category(
        self,
        report: ScoreReport,
        category: Category,
        result: CategoryScoreResult,
        context: RenderContext,
    ) -> list[str]:
        lines = [f"## {self.text(category.title, context)} ({format_score(result.score)})", ""]
        if category.description:
            lines.extend([self.text(category.description, context), ""])

        if result.issues:
            lines.append("> **Warning:** some audits could not be scored.")
            for issue in result.issues:
                lines.append(f"> - {issue.message}")
            lines.append("")

        contributions = {(c.audit_id, c.group_id): c for c in result.contributions}

        for section in ordered_sections(category):
            if section.group_id is None:
                lines.append("### Other audits")
            else:
                group = report.get_group(section.group_id)
                lines.append(f"### {self.text(group.title, context) if group else section.group_id}")
                if group and group.description:
                    lines.extend(["", self.text(group.description, context)])
            lines.append("")
            lines.append("| Audit | Weight | Score | Counted |")
            lines.append("|-------|-------:|------:|:-------:|")
            for ref in section.audit_refs:
                contribution = contributions.get(ref.key)
                if contribution is None:
                    continue
                lines.append(
                    f"| `{contribution.audit_id}` | {format_weight(contribution.weight)} "
                    f"| {format_score(contribution.score)} "
                    f"| {'yes' if contribution.scored else 'no'} |"
                )
            lines.append("")

        if category.manual_description:
            lines.extend([f"_{self.text(category.manual_description, context)}_", ""])

        return lines

    @staticmethod
    def _notes(result: CategoryScoreResult) -> str:
        notes = []
        if not result.is_scored:
            notes.append("not applicable")
        if result.errored_audits:
            notes.append(f"{len(result.errored_audits)} errored")
        if result.missing_audits:
            notes.append(f"{len(result.missing_audits)} missing")
        return ", ".join(notes) or "-"

    def _render_generic(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")

        lines = ["# Report", ""]
        if isinstance(data, dict):
            for key, value in data.items():
                lines.append(f"- **{key}:** {value}")
        else:
            lines.append(str(data))
        return "\n".join(lines)
