"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from ._common import console

app = typer.Typer(
    name="smellscope",
    help="smellscope - code smell detector and refactoring advisor",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        console.print(f"[bold cyan]smellscope[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Detect code smells in a program model and suggest refactorings."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .catalog import catalog as _catalog  # noqa: F401, E402
