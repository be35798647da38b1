"""Shared utilities for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from pagescore.models.config import ConfigModel
from pagescore.utils.errors import PageScoreError

# Shared console instance
console = Console()


def fail(message: str, details: Iterable[str] = ()) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(message)}")
    for line in details:
        console.print(f"  {escape(line)}")
    raise typer.Exit(1)


def split_csv(value: str | None) -> list[str] | None:
    """Split a comma separated option value, ignoring blanks."""
    if value is None:
        return None
    items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def build_config(
    config_path: Path | None,
    extend: Iterable[Path] = (),
    only_categories: list[str] | None = None,
    skip_audits: list[str] | None = None,
    drop_manual: bool = False,
) -> ConfigModel:
    """Load, resolve and filter a scoring configuration, exiting on errors.

    Without a config path the built-in default configuration is used.
    """
    from pagescore.core.resolver import filter_config, resolve_document
    from pagescore.utils.documents import load_document

    try:
        document = load_document(config_path) if config_path else {"extends": "default"}
        overrides = [load_document(path) for path in extend]
        config = resolve_document(document, overrides)
    except FileNotFoundError as e:
        fail(f"File not found: {e.filename}")
    except PageScoreError as e:
        fail("Invalid configuration", [str(e.to_error_detail())])

    if only_categories is not None or skip_audits is not None or drop_manual:
        config = filter_config(
            config,
            only_categories=only_categories,
            skip_audits=skip_audits,
            drop_manual=drop_manual,
        )
    return config


def write_or_echo(content: str, output: Path | None) -> None:
    """Write content to a file, or print it unformatted to stdout."""
    if output:
        output.write_text(content, encoding="utf-8")
        console.print(f"Report written to {output}")
    else:
        typer.echo(content)
