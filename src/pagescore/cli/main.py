"""Main CLI entry point for pagescore."""

import typer
from rich.console import Console

from pagescore.cli import config, score

app = typer.Typer(
    name="pagescore",
    help="Weighted category scoring for web page audit results.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="score")(score.score_cmd)
app.add_typer(config.app, name="config")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    """
    pagescore: weighted category scoring for web page audits.

    - [bold]score[/bold]: Score a run's audit results
    - [bold]config[/bold]: Validate and inspect scoring configurations
    """
    from pagescore.utils.logging import configure_logging

    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging(level="INFO")


@app.command()
def version() -> None:
    """Show the pagescore version."""
    from pagescore import __version__

    console.print(f"pagescore version {__version__}")


if __name__ == "__main__":
    app()
