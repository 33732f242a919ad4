"""Load, validate and query Doxygen client-side search indexes."""

from platformdirs import PlatformDirs
from importlib import metadata

__package_name__ = "doxysearch"
__author__ = "doxysearch"
__version__ = metadata.version(__package_name__)
dirs = PlatformDirs(appname=__package_name__, appauthor=__author__)

from doxysearch.models import IndexEntry, Variant  # noqa: E402
from doxysearch.table import SearchTable  # noqa: E402
from doxysearch.catalog import SearchCatalog  # noqa: E402
from doxysearch.settings import DoxySettings, doxy_settings  # noqa: E402

__all__ = ["IndexEntry", "Variant", "SearchTable", "SearchCatalog", "DoxySettings", "doxy_settings"]
