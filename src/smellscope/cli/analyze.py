"""Main analysis command: load a model, run the kernel, print the report."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..engine import SmellKernel
from ..exceptions import SmellScopeError
from ..findings import AnalysisResult
from ..formatters import get_formatter
from ..logging_config import setup_logging
from ..model import load_program
from . import app
from ._common import console, resolve_config

_HIGH_SEVERITY = 0.6


@app.command()
def analyze(
    model: Path = typer.Argument(
        ...,
        help="Program model to analyze (JSON)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich | json | csv | quiet",
        click_type=click.Choice(["rich", "json", "csv", "quiet"], case_sensitive=False),
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
    max_findings: Optional[int] = typer.Option(
        None,
        "--max-findings",
        "-n",
        help="Maximum findings to report",
        min=1,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: sequential)",
        min=1,
        max=32,
    ),
    fail_on: Optional[str] = typer.Option(
        None,
        "--fail-on",
        help="Exit 1 if findings meet threshold: any | high",
        click_type=click.Choice(["any", "high"], case_sensitive=False),
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also append log records to this file", dir_okay=False
    ),
):
    """
    Detect code smells in a program model and suggest refactorings.

    [bold cyan]Examples:[/bold cyan]

      smellscope analyze model.json

      smellscope analyze model.json --format json --max-findings 20

      smellscope analyze model.json -w 4 --fail-on high
    """
    logger = setup_logging(
        verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file is not None else None
    )

    try:
        settings = resolve_config(
            config=config,
            max_findings=max_findings,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
        program = load_program(model)
        kernel = SmellKernel(settings)
        result = kernel.run(program)

        get_formatter(output_format.lower()).render(result)

        if fail_on is not None and _should_fail(fail_on, result):
            raise typer.Exit(1)

    except typer.Exit:
        raise

    except SmellScopeError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


def _should_fail(fail_on: str, result: AnalysisResult) -> bool:
    if fail_on.lower() == "any":
        return bool(result.findings)
    return any(f.severity >= _HIGH_SEVERITY for f in result.findings)
