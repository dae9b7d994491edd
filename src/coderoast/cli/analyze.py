"""Analyze command: signals, guarded issues and optional verified fixes."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..exceptions import CoderoastError
from ..fixes.models import FixResult
from ..logging_config import setup_logging
from ..pipeline import PipelineResult, run_pipeline
from . import app
from ._common import console, resolve_config


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Project root to analyze",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    fix: bool = typer.Option(
        False,
        "--fix",
        help="Ask the configured model for patches and verify them in memory",
    ),
    max_fixes: Optional[int] = typer.Option(
        None,
        "--max-fixes",
        help="Maximum issues to attempt fixes for",
        min=0,
        hidden=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging and every evidence item",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Report long functions, duplicate blocks, import cycles and missing tests.

    [bold cyan]Examples:[/bold cyan]

      coderoast analyze src

      coderoast analyze . --json

      coderoast analyze . --fix
    """
    try:
        settings = resolve_config(
            config=config, fix=fix, max_fixes=max_fixes, verbose=verbose, quiet=quiet
        )
    except CoderoastError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    logger = setup_logging(settings.verbosity, log_file=settings.log_file)

    try:
        result = run_pipeline(path, settings)

        if json_output:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            _output_rich(result, verbose=settings.verbosity == "verbose")

    except CoderoastError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)


def _output_rich(result: PipelineResult, verbose: bool = False) -> None:
    report = result.report
    metrics = report.analysis.metrics
    summary = report.analysis.dependency_summary

    console.print()
    console.print(
        f"[bold cyan]coderoast[/bold cyan] · {len(report.files)} files · "
        f"{metrics.total_functions} functions · {summary.edges} import edges"
    )

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Max function length", str(metrics.max_function_length))
    table.add_row("Avg function length", f"{metrics.avg_function_length:.2f}")
    table.add_row("Duplicate blocks", str(metrics.duplicate_blocks))
    table.add_row("Import cycles", str(summary.cycles))
    console.print(table)
    console.print()

    if not report.issues:
        console.print("[green]No issues found.[/green]")

    for issue in report.issues:
        color = "red" if issue.confidence == "high" else "yellow"
        console.print(
            f"[{color}]●[/{color}] [bold]{issue.signal}[/bold] "
            f"[dim]({issue.type}, {issue.confidence} confidence)[/dim]"
        )
        if not issue.evidence_complete:
            console.print(f"    [dim]{issue.missing_evidence_reason}[/dim]")
            continue
        items = issue.evidence if verbose else issue.evidence[:3]
        for item in items:
            metric_text = ", ".join(f"{m.type}={m.value}" for m in item.metrics)
            console.print(
                f"    {item.file}:{item.start_line}-{item.end_line}  [dim]{metric_text}[/dim]"
            )
        hidden = len(issue.evidence) - len(items)
        if hidden > 0:
            console.print(f"    [dim]+{hidden} more (use --verbose)[/dim]")

    if result.fixes is not None:
        _output_fixes(result.fixes)
    console.print()


def _output_fixes(fixes: FixResult) -> None:
    console.print()
    if not fixes.suggestions:
        console.print("[dim]No fix suggestions were produced.[/dim]")
        return

    for suggestion in fixes.suggestions:
        status = "[green]verified[/green]" if suggestion.verified else "[red]rejected[/red]"
        title = f"Fix {suggestion.issue_id} · {suggestion.signal} · {status}"
        body = suggestion.message
        if suggestion.details:
            body += f"\n{suggestion.details}"
        console.print(Panel(body, title=title, title_align="left", expand=False))
        if suggestion.patch:
            console.print(Syntax(suggestion.patch, "diff", word_wrap=True))

    if fixes.preview is not None:
        delta = fixes.preview.delta
        console.print(
            f"[bold]Preview (fix {fixes.preview.issue_id}):[/bold] "
            + ", ".join(f"{name} {value:+g}" for name, value in delta.items())
        )
