"""
Sections command for the doxysearch CLI.
"""

import typer
from rich.table import Table

from doxysearch.cli.common import console, open_catalog

__all__ = ["sections_command"]


def sections_command(
    path: str | None = typer.Option(None, "--path", "-p", help="Doxygen search directory or table file"),
    source: str | None = typer.Option(None, "--source", help="Configured source to use (overrides active source)"),
):
    # type: (...) -> None
    """
    List the search sections of a documentation build.

    Example:
        doxysearch sections --path html/search
    """
    try:
        catalog, opened = open_catalog(path, source)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    try:
        sections = catalog.list_sections()
    finally:
        catalog.close()

    table = Table(title=f"Sections of {opened}")
    table.add_column("Id", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Label", style="white")
    table.add_column("Characters", style="magenta")
    for section in sections:
        table.add_row(str(section.id), section.name, section.label, section.chars)
    console.print(table)
