"""Terminal renderer for pagescore output."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pagescore.core.ordering import ordered_sections
from pagescore.knowledge.strings import MessageResolver
from pagescore.models.config import Category
from pagescore.models.results import CategoryScoreResult, Contribution, ScoreReport
from pagescore.renderers.base import (
    BaseRenderer,
    OutputFormat,
    RenderContext,
    format_score,
    format_weight,
    score_band,
)

BAND_STYLES = {
    "pass": "green",
    "average": "yellow",
    "fail": "red",
    "na": "dim",
}


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    Prints a summary table of category scores and, in verbose mode, the
    per-audit breakdown of each category grouped in display order.

    Example:
        renderer = TerminalRenderer()
        renderer.render(report, RenderContext(verbose=True))
    """

    def __init__(self, console: Console | None = None, resolver: MessageResolver | None = None) -> None:
        super().__init__(resolver)
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.TERMINAL

    def render(self, data: Any, context: RenderContext) -> str:
        """Print data to the console.

        Returns:
            Empty string (output is printed to the console)
        """
        if isinstance(data, ScoreReport):
            self._render_report(data, context)
        else:
            self._console.print(data)
        return ""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Capture the terminal output and write it to a file."""
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        file_console = Console(record=True, force_terminal=context.color, width=120)
        original_console = self._console
        self._console = file_console

        try:
            self.render(data, context)
            output = file_console.export_text(styles=context.color)
            context.output_path.write_text(output, encoding="utf-8")
        finally:
            self._console = original_console

    def _render_report(self, report: ScoreReport, context: RenderContext) -> None:
        self._console.print()
        table = Table(title="Category Scores")
        table.add_column("Category", style="bold")
        table.add_column("Score", justify="right")
        table.add_column("Scored", justify="right")
        table.add_column("Status")

        for category in report.categories:
            result = report.get_result(category.id)
            if result is None:
                continue
            table.add_row(
                self.text(category.title, context),
                self._styled_score(result.score),
                f"{len(result.scored_contributions)}/{len(result.contributions)}",
                self._status(result),
            )
        self._console.print(table)

        if context.verbose:
            for category in report.categories:
                result = report.get_result(category.id)
                if result is not None:
                    self._render_category(report, category, result, context)
        else:
            for category_id in report.degraded_categories:
                result = report.results[category_id]
                for issue in result.issues:
                    self._console.print(f"  [yellow]![/yellow] {category_id}: {issue.message}")

    def _render_category(
        self,
        report: ScoreReport,
        category: Category,
        result: CategoryScoreResult,
        context: RenderContext,
    ) -> None:
        self._console.print()
        header = f"[bold]Score:[/bold] {self._styled_score(result.score)}"
        if category.description:
            header += f"\n{self.text(category.description, context)}"
        self._console.print(Panel(header, title=self.text(category.title, context)))

        by_audit: dict[tuple[str, str | None], Contribution] = {
            (c.audit_id, c.group_id): c for c in result.contributions
        }

        for section in ordered_sections(category):
            if section.group_id is None:
                title = "Other audits"
            else:
                group = report.get_group(section.group_id)
                title = self.text(group.title, context) if group else section.group_id

            table = Table(title=title, title_justify="left")
            table.add_column("Audit")
            table.add_column("Weight", justify="right")
            table.add_column("Score", justify="right")
            table.add_column("Mode", style="dim")

            for ref in section.audit_refs:
                contribution = by_audit.get(ref.key)
                if contribution is None:
                    continue
                mode = contribution.score_display_mode.value if contribution.score_display_mode else "missing"
                weight = format_weight(contribution.weight)
                if not contribution.scored:
                    weight = f"[dim]{weight}[/dim]"
                table.add_row(
                    contribution.audit_id,
                    weight,
                    self._styled_score(contribution.score),
                    mode,
                )
            self._console.print(table)

        if category.manual_description and any(
            c.score_display_mode is not None and c.score_display_mode.value == "manual"
            for c in result.contributions
        ):
            self._console.print(f"[dim]{self.text(category.manual_description, context)}[/dim]")

        for issue in result.issues:
            self._console.print(f"  [yellow]![/yellow] {issue.message}")

    @staticmethod
    def _styled_score(score: float | None) -> str:
        style = BAND_STYLES[score_band(score)]
        return f"[{style}]{format_score(score)}[/{style}]"

    @staticmethod
    def _status(result: CategoryScoreResult) -> str:
        if not result.is_scored:
            return "[dim]not applicable[/dim]"
        if result.has_errors:
            return "[yellow]WARN[/yellow] audits errored"
        if result.missing_audits:
            return "[yellow]WARN[/yellow] results missing"
        return "[green]OK[/green]"
