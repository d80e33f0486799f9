"""Repository validation command: references, module scope, cycles."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import OntoguardError
from ..graph import build_module_context
from ..logging_config import get_logger, setup_logging
from ..validation import ValidationReport, validate_repository
from . import app
from ._common import console, load_index, print_error, resolve_config

logger = get_logger(__name__)


@app.command()
def validate(
    root: Path = typer.Argument(
        Path("."),
        help="Repository root containing the entity type directories",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Check every entity reference for self-reference, existence and module
    scope, check the module graph for dependency cycles, and warn about
    entities listed by more than one module.

    [bold cyan]Examples:[/bold cyan]

      ontoguard validate .

      ontoguard validate path/to/ontology --format json
    """
    try:
        settings = resolve_config(root, config=config, verbose=verbose, quiet=quiet)
        setup_logging(settings)
        index = load_index(root, settings)
        report = validate_repository(index, build_module_context(index))

        if fmt == "json":
            print(json.dumps(report.to_dict(), indent=2))
        else:
            _output_rich(report, entity_count=len(index))

        failed = not report.ok or (settings.fail_on_warnings and bool(report.warnings))
        if failed:
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except OntoguardError as e:
        print_error(e, fmt)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _output_rich(report: ValidationReport, entity_count: int) -> None:
    """Errors grouped by file."""
    if report.ok and not report.warnings:
        console.print(f"[green]All {entity_count} entities passed reference validation[/green]")
        return

    for warning in report.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")

    if report.ok:
        return

    grouped = report.errors_by_file()
    console.print(
        f"\n[bold red]Found {len(report.errors)} error(s) in {len(grouped)} file(s)[/bold red]"
        f" (out of {entity_count} entities)\n"
    )
    for file, errors in grouped.items():
        console.print(f"[bold]{escape(file or '<unknown>')}[/bold]")
        for error in errors:
            console.print(
                f"  [red]{error.type.value}[/red]  {escape(error.message)}", highlight=False
            )
        console.print()
