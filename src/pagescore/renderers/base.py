"""Base renderer protocol and types."""

from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from pagescore.knowledge.strings import MessageResolver, make_resolver


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    MARKDOWN = "markdown"
    TERMINAL = "terminal"


class RenderContext(BaseModel):
    """Context for rendering operations."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TERMINAL, description="Output format")
    output_path: Path | None = Field(default=None, description="Output file path")
    verbose: bool = Field(default=False, description="Show every audit of every category")
    color: bool = Field(default=True, description="Enable color output (terminal only)")
    locale: str = Field(default="en", description="Locale for titles and descriptions")

    # Formatting options
    indent: int = Field(default=2, description="JSON indentation")


@runtime_checkable
class Renderer(Protocol):
    """Protocol for output renderers.

    Renderers project a ScoreReport into a human- or machine-readable
    form. They are the only place message ids are resolved to text.
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        ...

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to a string."""
        ...

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render data directly to a file.

        Raises:
            ValueError: If context.output_path is not set
        """
        ...


class BaseRenderer:
    """Base implementation with common functionality.

    Subclasses implement the format property and render method.
    """

    def __init__(self, resolver: MessageResolver | None = None) -> None:
        """Initialize the renderer.

        Args:
            resolver: MessageId -> text function for titles. Defaults to the
                built-in string table, bound per render to the context locale.
        """
        self._resolver = resolver

    def text(self, value: str | None, context: RenderContext) -> str:
        """Resolve a title or description for display."""
        if value is None:
            return ""
        resolver = self._resolver or make_resolver(context.locale)
        return resolver(value)

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        content = self.render(data, context)
        context.output_path.write_text(content, encoding="utf-8")

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to a string. Must be implemented by subclasses."""
        raise NotImplementedError


def format_score(score: float | None) -> str:
    """Format a 0-1 score as a 0-100 integer, or ``n/a`` when not scored."""
    if score is None:
        return "n/a"
    return str(round(score * 100))


def format_weight(weight: float) -> str:
    return f"{weight:g}"


def score_band(score: float | None) -> str:
    """Classify a score as pass, average, fail or na."""
    if score is None:
        return "na"
    if score >= 0.9:
        return "pass"
    if score >= 0.5:
        return "average"
    return "fail"
