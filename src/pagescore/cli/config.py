"""CLI commands for inspecting scoring configurations."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from pagescore.cli.utils import build_config, console, fail, write_or_echo

app = typer.Typer(help="Validate and inspect scoring configurations.", no_args_is_help=True)


@app.command("validate")
def validate_cmd(
    config: Path = typer.Argument(..., help="Scoring configuration file"),
    extend: Optional[List[Path]] = typer.Option(
        None,
        "--extend",
        "-e",
        help="Override fragment applied on top of the configuration (repeatable)",
    ),
) -> None:
    """
    Validate a scoring configuration.

    Example:
        pagescore config validate custom.yaml
    """
    resolved = build_config(config, extend or [])

    default_pass = resolved.default_pass
    table = Table(title="Configuration", show_header=False)
    table.add_column("Item", style="bold")
    table.add_column("Value")
    table.add_row("Passes", str(len(resolved.passes)))
    table.add_row("Default pass", default_pass.pass_name if default_pass else "-")
    table.add_row("Audits", str(len(resolved.audits)))
    table.add_row("Groups", str(len(resolved.groups)))
    table.add_row("Categories", ", ".join(resolved.category_ids) or "-")

    console.print("[green]Configuration is valid[/green]")
    console.print(table)


@app.command("show")
def show_cmd(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Scoring configuration file (defaults to the built-in configuration)",
    ),
    extend: Optional[List[Path]] = typer.Option(
        None,
        "--extend",
        "-e",
        help="Override fragment applied on top of the configuration (repeatable)",
    ),
    format: str = typer.Option(
        "yaml",
        "--format",
        "-f",
        help="Output format (yaml, json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
) -> None:
    """
    Print the fully resolved configuration document.

    Example:
        pagescore config show --extend reweight.yaml --format json
    """
    from pagescore.utils.documents import dump_document

    if format not in ("yaml", "json"):
        fail(f"Invalid format: {format}")

    resolved = build_config(config, extend or [])
    write_or_echo(dump_document(resolved.to_document(), format), output)
