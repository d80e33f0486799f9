"""Shared CLI helpers."""

import json
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..config import OntoguardConfig, load_config
from ..entities import EntityIndex, load_entity_index
from ..exceptions import OntoguardError
from ..logging_config import get_logger

console = Console()
logger = get_logger(__name__)


def resolve_config(
    root: Path,
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> OntoguardConfig:
    """Build configuration from CLI options."""
    return load_config(root, config_file=config, verbose=verbose, quiet=quiet)


def load_index(root: Path, config: OntoguardConfig) -> EntityIndex:
    index = load_entity_index(root, config.exclude_patterns)
    logger.info("Indexed %d entities from %s", len(index), root)
    return index


def print_error(error: OntoguardError, fmt: str = "rich") -> None:
    """Report a handled error; JSON output stays machine-readable."""
    if fmt == "json":
        print(json.dumps(error.to_dict(), indent=2))
    else:
        console.print(f"[red]Error:[/red] {escape(str(error))}")
