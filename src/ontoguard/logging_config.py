"""Logging setup for ontoguard commands.

Library modules only ever call ``get_logger(__name__)``; handlers are
installed once per command by ``setup_logging`` from the resolved
``OntoguardConfig``, so ``verbosity`` and ``log_file`` can come from a TOML
file, an ``ONTOGUARD_*`` variable or a CLI flag alike.
"""

import logging
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import OntoguardConfig

ROOT_LOGGER = "ontoguard"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(config: "OntoguardConfig") -> logging.Logger:
    """Route ontoguard logs to stderr through rich, and to ``config.log_file``
    when one is set.

    Returns the package root logger.
    """
    level = LEVELS[config.verbosity]
    verbose = config.verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``ontoguard`` namespace (``name`` is usually ``__name__``)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
