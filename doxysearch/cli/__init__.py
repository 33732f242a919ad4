"""
doxysearch CLI.

Command-line interface for looking up symbols in Doxygen search indexes.
"""

import typer

import doxysearch
from doxysearch.cli.common import configure_logging, console
from doxysearch.cli.export import export_command
from doxysearch.cli.search import search_command
from doxysearch.cli.sections import sections_command
from doxysearch.cli.serve import serve_command
from doxysearch.cli.show import show_command
from doxysearch.cli.source import source_app
from doxysearch.cli.validate import validate_command

__all__ = ["app", "main"]


app = typer.Typer(
    name="doxysearch",
    help="Doxygen search index CLI",
    no_args_is_help=True,
)


@app.callback()
def callback(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    # type: (bool) -> None
    """Look up symbols in Doxygen search indexes."""
    configure_logging(verbose)


# Register commands
app.command(name="search")(search_command)
app.command(name="show")(show_command)
app.command(name="sections")(sections_command)
app.command(name="validate")(validate_command)
app.command(name="export")(export_command)
app.command(name="serve")(serve_command)
app.add_typer(source_app, name="source")


@app.command()
def version():
    # type: () -> None
    """Show version information."""
    console.print(f"doxysearch version {doxysearch.__version__}")


def main():
    # type: () -> None
    """CLI entry point."""
    app()
