"""Version cascade commands: per-level bumps and the next ontology version."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..config import OntoguardConfig
from ..entities import EntityIndex
from ..exceptions import OntoguardError
from ..graph import build_module_context
from ..logging_config import get_logger, setup_logging
from ..versioning import (
    CascadeResult,
    calculate_new_version,
    calculate_version_cascade,
    load_change_records,
    load_overrides,
)
from . import app
from ._common import console, load_index, print_error, resolve_config

logger = get_logger(__name__)

_CHANGES_ARG = typer.Argument(
    ...,
    help="JSON file of classified changes ([{file, entityType, changeType}, ...])",
    exists=True,
    file_okay=True,
    dir_okay=False,
)
_ROOT_OPT = typer.Option(
    Path("."),
    "--root",
    "-r",
    help="Repository root containing the entity type directories",
    exists=True,
    file_okay=False,
    dir_okay=True,
)
_CONFIG_OPT = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
)


def _run_cascade(
    root: Path, changes_file: Path, settings: OntoguardConfig, use_overrides: bool
) -> tuple[EntityIndex, CascadeResult]:
    index = load_index(root, settings)
    changes = load_change_records(changes_file)
    overrides = load_overrides(settings.overrides_path(root)) if use_overrides else {}
    result = calculate_version_cascade(
        index, changes, overrides=overrides, context=build_module_context(index)
    )
    return index, result


@app.command()
def cascade(
    changes_file: Path = _CHANGES_ARG,
    root: Path = _ROOT_OPT,
    fmt: str = typer.Option(
        "rich", "--format", "-f", help="Output format: rich (human-readable) or json"
    ),
    no_overrides: bool = typer.Option(
        False, "--no-overrides", help="Ignore the version override file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    config: Optional[Path] = _CONFIG_OPT,
):
    """
    Compute module, bundle and ontology version bumps for a change set,
    cascading bumps from each module to everything that depends on it.

    [bold cyan]Examples:[/bold cyan]

      ontoguard cascade changes.json --root .

      ontoguard cascade changes.json --format json
    """
    try:
        settings = resolve_config(root, config=config, verbose=verbose, quiet=quiet)
        setup_logging(settings)
        _, result = _run_cascade(root, changes_file, settings, use_overrides=not no_overrides)

        if fmt == "json":
            print(json.dumps(result.to_dict(), indent=2))
        else:
            _output_rich(result)

    except typer.Exit:
        raise
    except OntoguardError as e:
        print_error(e, fmt)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def bump(
    changes_file: Path = _CHANGES_ARG,
    root: Path = _ROOT_OPT,
    no_overrides: bool = typer.Option(
        False, "--no-overrides", help="Ignore the version override file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    config: Optional[Path] = _CONFIG_OPT,
):
    """
    Print the next ontology version for a change set. The VERSION file is
    read, not written.
    """
    try:
        settings = resolve_config(root, config=config, verbose=verbose, quiet=quiet)
        setup_logging(settings)
        version_path = settings.version_path(root)
        if not version_path.exists():
            console.print(f"[red]Error:[/red] VERSION file not found: {escape(str(version_path))}")
            raise typer.Exit(1)
        current = version_path.read_text(encoding="utf-8").strip()

        _, result = _run_cascade(root, changes_file, settings, use_overrides=not no_overrides)
        new_version = calculate_new_version(current, result.ontology_bump)
        if new_version is None:
            console.print(f"[red]Error:[/red] Cannot parse version \"{escape(current)}\"")
            raise typer.Exit(1)

        for warning in result.override_warnings:
            console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
        console.print(f"{current} -> [bold green]{new_version}[/bold green] ({result.ontology_bump})")

    except typer.Exit:
        raise
    except OntoguardError as e:
        print_error(e)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _output_rich(result: CascadeResult) -> None:
    if not result.changes:
        console.print("[dim]No entity changes[/dim]")
        return

    if result.cycle is not None:
        console.print(
            f"[bold red]Module dependency cycle {escape(str(result.cycle))}:[/bold red]"
            " bumps were not cascaded"
        )

    for warning in result.override_warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")

    if result.module_bumps:
        table = Table(title="Module bumps", show_header=True, header_style="bold")
        table.add_column("Module")
        table.add_column("Bump")
        for module_id, level in result.module_bumps.items():
            table.add_row(escape(module_id), level.value)
        console.print(table)

    if result.bundle_bumps:
        table = Table(title="Bundle bumps", show_header=True, header_style="bold")
        table.add_column("Bundle")
        table.add_column("Bump")
        for bundle_id, level in result.bundle_bumps.items():
            table.add_row(escape(bundle_id), level.value)
        console.print(table)

    if result.orphan_changes:
        console.print("[bold yellow]Changes outside any module[/bold yellow]")
        for change in result.orphan_changes:
            console.print(f"  {escape(change.file)} ({change.change_type})")

    console.print(f"\nOntology bump: [bold]{result.ontology_bump}[/bold]")
