"""
Search command for the doxysearch CLI.

Looks up symbols in a Doxygen search index.
"""

import json

import typer
from rich.table import Table

from doxysearch.cli.common import console, open_catalog
from doxysearch.lookup import MatchField, MatchMode
from doxysearch.schema import EntryModel

__all__ = ["search_command", "entries_table"]


def entries_table(entries, title=None):
    # type: (list, str|None) -> Table
    """
    Render entries as a rich table with one row per variant.

    :param entries: IndexEntry list
    :param title: Optional table title
    :return: rich Table
    """
    table = Table(title=title)
    table.add_column("Key", style="cyan")
    table.add_column("Label", style="bold")
    table.add_column("Scope", style="magenta")
    table.add_column("Result", style="white")
    table.add_column("Link", style="dim")
    for entry in entries:
        for i, variant in enumerate(entry.variants):
            table.add_row(
                entry.key if i == 0 else "",
                variant.label if i == 0 else "",
                variant.scope or "",
                variant.title or "",
                variant.href,
            )
    return table


def search_command(
    query: str = typer.Argument(..., help="Symbol name or part of it"),
    section: str = typer.Option("all", "--section", "-s", help="Search section (all, classes, functions, ...)"),
    mode: MatchMode = typer.Option(MatchMode.substring, "--mode", "-m", help="Match mode"),
    fields: MatchField = typer.Option(MatchField.both, "--fields", "-f", help="Entry fields compared with the query"),
    scope: str | None = typer.Option(None, "--scope", help="Only show variants owned by this class or namespace"),
    limit: int | None = typer.Option(None, "--limit", "-l", min=0, help="Maximum number of entries"),
    path: str | None = typer.Option(None, "--path", "-p", help="Doxygen search directory or table file"),
    source: str | None = typer.Option(None, "--source", help="Configured source to use (overrides active source)"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
):
    # type: (...) -> None
    """
    Search for symbols.

    Matches the query case-insensitively against search keys and labels and
    prints the matching entries in index order.

    Example:
        doxysearch search "operator*" --path html/search
        doxysearch search operator --scope SGTuple
        doxysearch search oper --mode prefix --json
    """
    try:
        catalog, _ = open_catalog(path, source)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    try:
        entries = catalog.lookup(section, query, mode=mode.value, fields=fields.value, scope=scope, limit=limit)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    finally:
        catalog.close()

    if as_json:
        console.print_json(json.dumps([EntryModel.from_entry(e).model_dump(mode="json") for e in entries]))
        return

    if not entries:
        console.print(f"[yellow]No matches for '{query}'[/yellow]")
        return

    console.print(entries_table(entries, title=f"{len(entries)} matches in '{section}'"))
