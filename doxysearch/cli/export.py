"""
Export command for the doxysearch CLI.

Writes a search table as JSON or in Doxygen's JavaScript layout.
"""

from enum import Enum
from pathlib import Path

import typer

from doxysearch import codec
from doxysearch.catalog import SearchCatalog
from doxysearch.cli.common import console

__all__ = ["export_command", "ExportFormat"]


class ExportFormat(str, Enum):
    json = "json"
    js = "js"


def export_command(
    path: str = typer.Argument(..., help="Doxygen search directory or table file"),
    section: str = typer.Option("all", "--section", "-s", help="Section to export when PATH is a directory"),
    fmt: ExportFormat = typer.Option(ExportFormat.json, "--format", "-f", help="Output format"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output file (stdout if omitted)"),
):
    # type: (...) -> None
    """
    Export a search table.

    JSON output is the `[key, [[label, href, scope, title, target_parent], ...]]`
    tuple sequence. JS output is Doxygen's `var searchData=[...];` layout.

    Example:
        doxysearch export html/search/all_b.js
        doxysearch export html/search --section classes --format js -o classes.js
    """
    try:
        if Path(path).is_file():
            table = codec.load(path)
        else:
            table = SearchCatalog(path).table(section)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if fmt is ExportFormat.json:
        data = codec.to_json(table).decode("utf-8")
    else:
        data = codec.dumps(table)

    if output is None:
        typer.echo(data, nl=not data.endswith("\n"))
        return

    Path(output).write_text(data, encoding="utf-8", newline="\n")
    console.print(f"[green]Exported {len(table)} entries to {output}[/green]")
