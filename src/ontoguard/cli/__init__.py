"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="ontoguard",
    help="ontoguard - module scope validation and version cascade for ontology repositories",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def main() -> None:
    app()


# Import subcommands to register them
from .validate import validate as _validate  # noqa: F401, E402
from .cascade import bump as _bump, cascade as _cascade  # noqa: F401, E402
