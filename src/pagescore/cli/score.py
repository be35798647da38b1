"""CLI command for scoring a run."""

from pathlib import Path
from typing import List, Optional

import typer

from pagescore.cli.utils import build_config, console, fail, split_csv, write_or_echo


def score_cmd(
    results: Path = typer.Argument(..., help="Audit results file (JSON or YAML)"),
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
    only_categories: Optional[str] = typer.Option(
        None,
        "--only-categories",
        help="Comma separated categories to score",
    ),
    skip_audits: Optional[str] = typer.Option(
        None,
        "--skip-audits",
        help="Comma separated audits to leave out",
    ),
    drop_manual: bool = typer.Option(
        False,
        "--drop-manual",
        help="Drop manual audits before scoring",
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json, markdown)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    details: bool = typer.Option(
        False,
        "--details",
        "-d",
        help="Show the per-audit breakdown of every category",
    ),
    fail_under: Optional[float] = typer.Option(
        None,
        "--fail-under",
        min=0.0,
        max=1.0,
        help="Exit with status 1 when a scored category is below this score (0-1)",
    ),
) -> None:
    """
    Score a run's audit results.

    Resolves the scoring configuration, loads the results and prints one
    weighted score per category.

    Example:
        pagescore score results.json --only-categories seo,accessibility
    """
    from pagescore.core.aggregator import ScoreAggregator
    from pagescore.core.store import AuditResultStore
    from pagescore.renderers import OutputFormat, RenderContext, get_renderer
    from pagescore.utils.config import get_config
    from pagescore.utils.errors import PageScoreError

    settings = get_config()
    scoring = settings.scoring

    config_path = config or (Path(scoring.config) if scoring.config else None)
    extend_paths = [Path(p) for p in scoring.extends] + list(extend or [])

    with console.status("Resolving configuration..."):
        scoring_config = build_config(
            config_path,
            extend_paths,
            only_categories=split_csv(only_categories) or scoring.only_categories,
            skip_audits=split_csv(skip_audits) or scoring.skip_audits,
            drop_manual=drop_manual or scoring.drop_manual,
        )

    try:
        store = AuditResultStore.load(results)
    except FileNotFoundError:
        fail(f"Results file not found: {results}")
    except PageScoreError as e:
        fail("Invalid results", [str(e.to_error_detail())])

    report = ScoreAggregator().score(scoring_config, store)

    try:
        output_format = OutputFormat(format or settings.output.default_format)
    except ValueError:
        fail(f"Invalid format: {format}")

    context = RenderContext(
        format=output_format,
        output_path=output,
        verbose=details or settings.output.verbose,
        color=settings.output.color,
        locale=settings.output.locale,
    )
    renderer = get_renderer(output_format)

    if output_format == OutputFormat.TERMINAL:
        if output:
            renderer.render_to_file(report, context)
            console.print(f"Report written to {output}")
        else:
            renderer.render(report, context)
    else:
        write_or_echo(renderer.render(report, context), output)

    threshold = fail_under if fail_under is not None else scoring.fail_under
    if threshold is not None:
        below = report.below(threshold)
        if below:
            fail(
                f"{len(below)} categor{'y' if len(below) == 1 else 'ies'} below {threshold:g}",
                below,
            )
