"""
Source management CLI commands.

Provides commands for registering documentation builds (local search directories
or remote doxysearch servers), listing them, activating one and removing them.
"""

import os
import sys
from pathlib import Path

import typer
from rich.table import Table

from doxysearch.cli.common import console
from doxysearch.config import (
    LocalSourceConfig,
    RemoteSourceConfig,
    get_config_manager,
)

__all__ = ["source_app"]


source_app = typer.Typer(help="Manage configured search sources", no_args_is_help=True)


@source_app.command("add")
def add_command(
    name: str,
    local: str | None = typer.Option(None, "--local", help="Path of a Doxygen search directory"),
    remote: str | None = typer.Option(None, "--remote", help="URL of a doxysearch server"),
    api_key: str | None = typer.Option(None, "--api-key", help="API key for remote source"),
):
    # type: (...) -> None
    """
    Register a new source.

    For remote sources the API key can be provided via --api-key or the
    DOXYSEARCH_API_KEY environment variable.

    Examples:

        doxysearch source add geometry --local html/search

        doxysearch source add production --remote https://docs.example.com
    """
    if local is None and remote is None:
        console.print("[red]Error: Must specify either --local or --remote[/red]")
        sys.exit(1)

    if local is not None and remote is not None:
        console.print("[red]Error: Cannot specify both --local and --remote[/red]")
        sys.exit(1)

    config_manager = get_config_manager()

    if local is not None:
        local_path = Path(local).resolve()
        if not local_path.exists():
            console.print(f"[red]Error: {local_path} not found[/red]")
            sys.exit(1)
        source_config = LocalSourceConfig(name=name, path=str(local_path))  # type: LocalSourceConfig|RemoteSourceConfig
        console.print(f"[green]Registered local source '{name}'[/green]")
        console.print(f"Path: {source_config.path}")
    else:
        if api_key is None:
            api_key = os.environ.get("DOXYSEARCH_API_KEY")
        source_config = RemoteSourceConfig(name=name, url=remote, api_key=api_key)  # type: ignore
        console.print(f"[green]Registered remote source '{name}'[/green]")
        console.print(f"URL: {source_config.url}")
        if api_key:
            console.print("[dim]API key: configured[/dim]")

    config_manager.add_source(source_config)

    active = config_manager.get_active()
    if active is not None and active.name == name:
        console.print(f"[cyan]'{name}' is now the active source[/cyan]")


@source_app.command("list")
def list_command():
    # type: () -> None
    """
    List all configured sources.

    Example:

        doxysearch source list
    """
    config_manager = get_config_manager()
    sources = config_manager.list_sources()

    if not sources:
        console.print("[yellow]No sources configured[/yellow]")
        console.print("Use 'doxysearch source add' to register a source")
        return

    table = Table(title="Configured Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Location/URL", style="white")
    table.add_column("Active", style="green")

    for name, cfg, is_active in sources:
        location = cfg.path if cfg.type == "local" else cfg.url  # type: ignore
        table.add_row(name, cfg.type, location, "✓" if is_active else "")

    console.print(table)


@source_app.command("use")
def use_command(name: str):
    # type: (...) -> None
    """
    Set the active source.

    Example:

        doxysearch source use production
    """
    config_manager = get_config_manager()

    try:
        config_manager.set_active(name)
        console.print(f"[green]Active source set to '{name}'[/green]")
    except KeyError as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("Use 'doxysearch source list' to see available sources")
        sys.exit(1)


@source_app.command("remove")
def remove_command(name: str):
    # type: (...) -> None
    """
    Remove a source from configuration.

    The documentation files themselves are left untouched.

    Example:

        doxysearch source remove staging
    """
    config_manager = get_config_manager()

    try:
        config_manager.remove_source(name)
    except KeyError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    console.print(f"[green]Removed source '{name}' from configuration[/green]")
    active = config_manager.get_active()
    if active is not None:
        console.print(f"[cyan]Active source: '{active.name}'[/cyan]")
