"""
Show command for the doxysearch CLI.

Prints one index entry with all of its variants.
"""

import json

import typer

from doxysearch.cli.common import console, open_catalog
from doxysearch.keys import encode_key
from doxysearch.schema import EntryModel

__all__ = ["show_command"]


def show_command(
    name: str = typer.Argument(..., help="Search key (operator_3d_3d) or symbol name (operator==)"),
    section: str = typer.Option("all", "--section", "-s", help="Search section"),
    path: str | None = typer.Option(None, "--path", "-p", help="Doxygen search directory or table file"),
    source: str | None = typer.Option(None, "--source", help="Configured source to use (overrides active source)"),
):
    # type: (...) -> None
    """
    Show the entry filed under a key.

    The argument is tried as a search key first and then as a symbol name.

    Example:
        doxysearch show operator_2a --path html/search
        doxysearch show "operator[]"
    """
    try:
        catalog, _ = open_catalog(path, source)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    try:
        try:
            entry = catalog.get_entry(section, name)
        except FileNotFoundError:
            key = encode_key(name)
            if key == name:
                raise
            entry = catalog.get_entry(section, key)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    finally:
        catalog.close()

    console.print_json(json.dumps(EntryModel.from_entry(entry).model_dump(mode="json")))
