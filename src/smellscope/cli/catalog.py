"""Catalog command: the smell -> refactoring table."""

import json

import typer
from rich.table import Table

from ..suggest import catalogue_rows
from . import app
from ._common import console


@app.command()
def catalog(
    json_output: bool = typer.Option(False, "--json", help="Print the table as JSON"),
):
    """List every detected smell and the refactorings that address it."""
    rows = catalogue_rows()

    if json_output:
        data = [
            {"category": category, "smell": smell, "refactorings": refactorings.split(" | ")}
            for category, smell, refactorings in rows
        ]
        print(json.dumps(data, indent=2))
        return

    table = Table(title="Smell Catalogue", expand=True)
    table.add_column("Category", style="dim")
    table.add_column("Smell", style="cyan")
    table.add_column("Refactorings", style="green", ratio=2)
    for category, smell, refactorings in rows:
        table.add_row(category, smell, refactorings)
    console.print(table)
