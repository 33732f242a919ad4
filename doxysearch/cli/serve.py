"""
Serve command for the doxysearch CLI.

Starts the doxysearch REST API server.
"""

import os

import typer

from doxysearch.cli.common import console

__all__ = ["serve_command"]


def serve_command(
    path: str | None = typer.Option(None, "--path", "-p", help="Search directory to serve (DOXYSEARCH_SEARCH_DIR)"),
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind server to"),
    port: int = typer.Option(8000, "--port", help="Port to bind server to"),
    dev: bool = typer.Option(False, "--dev", "-d", help="Run in development mode with auto-reload"),
    workers: int = typer.Option(None, "--workers", "-w", help="Number of worker processes (production only)"),
):
    # type: (...) -> None
    """
    Start the doxysearch REST API server.

    Example:
        doxysearch serve --path html/search
        doxysearch serve --dev
        doxysearch serve --port 9000 --workers 4
    """
    import uvicorn

    from doxysearch.settings import doxy_settings

    if path is not None:
        # In-process server reads the settings object, worker processes the environment
        doxy_settings.search_dir = path
        os.environ["DOXYSEARCH_SEARCH_DIR"] = path

    if dev and workers:
        console.print("[yellow]Warning: --workers is ignored in development mode[/yellow]")
        workers = None

    uvicorn_config = {
        "app": "doxysearch.server:app",
        "host": host,
        "port": port,
        "log_level": "debug" if dev else "info",
        "reload": dev,
    }

    if dev:
        console.print(f"[green]Starting server in development mode at http://{host}:{port}[/green]")
        console.print("[yellow]Auto-reload enabled - code changes will restart server[/yellow]")
    elif workers:
        uvicorn_config["workers"] = workers
        console.print(f"[green]Starting server at http://{host}:{port} with {workers} workers[/green]")
    else:
        console.print(f"[green]Starting server at http://{host}:{port}[/green]")

    uvicorn.run(**uvicorn_config)
