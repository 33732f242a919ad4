"""
Shared utilities for the doxysearch CLI.

Common functionality used across multiple CLI commands.
"""

from typing import TYPE_CHECKING

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from doxysearch.protocols.index import SearchIndexProtocol  # noqa: F401


__all__ = ["console", "configure_logging", "open_catalog"]


# Shared console instance for all CLI commands
console = Console()


def configure_logging(verbose=False):
    # type: (bool) -> None
    """
    Route loguru through rich's console for proper output coordination.

    :param verbose: Log DEBUG messages (WARNING and above otherwise)
    """
    logger.remove()
    logger.add(
        RichHandler(
            console=console,
            rich_tracebacks=True,
            markup=False,
            show_time=False,
            show_level=False,
            show_path=False,
        ),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {module}:{function}:{line} - {message}",
        level="DEBUG" if verbose else "WARNING",
    )


def open_catalog(path=None, source_name=None):
    # type: (str|None, str|None) -> tuple[SearchIndexProtocol, str]
    """
    Open the catalog a command should work on.

    An explicit path wins. Otherwise the named source, or the active source from the
    CLI configuration, is used.

    :param path: Doxygen search directory or table file
    :param source_name: Configured source name overriding the active source
    :return: Tuple of (catalog instance, description of what was opened)
    :raises ValueError: If no source is configured or the source is unknown
    :raises FileNotFoundError: If a local search directory doesn't exist
    """
    from doxysearch.catalog import SearchCatalog
    from doxysearch.config import LocalSourceConfig, RemoteSourceConfig, get_config_manager
    from doxysearch.remote import RemoteCatalog

    if path is not None:
        return SearchCatalog(path), path

    config_manager = get_config_manager()
    if source_name is not None:
        try:
            source = config_manager.get_source(source_name)
        except KeyError as e:
            raise ValueError(str(e).strip("'\""))
    else:
        source = config_manager.get_active()
        if source is None:
            raise ValueError("No active source configured. Pass --path or use 'doxysearch source add'.")

    if isinstance(source, LocalSourceConfig):
        return SearchCatalog(source.path), source.name
    elif isinstance(source, RemoteSourceConfig):
        return RemoteCatalog(url=source.url, api_key=source.api_key), source.name
    else:  # pragma: no cover
        raise ValueError(f"Unknown source type: {type(source)}")
