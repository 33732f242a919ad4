"""
Search Index Protocol Definition

Defines the protocol interface that every search index backend satisfies. The local
SearchCatalog (a Doxygen `search/` directory on disk) and the RemoteCatalog (HTTP
client for a doxysearch server) are used interchangeably through it.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from doxysearch.models import IndexEntry  # noqa: F401
    from doxysearch.models import SectionInfo  # noqa: F401


@runtime_checkable
class SearchIndexProtocol(Protocol):
    """
    Protocol for search index backends.

    All methods are synchronous and read-only. The indexed data is produced offline
    by Doxygen and never changes while a backend is open.

    Exception contract:
    - ValueError: Invalid parameters (unknown match mode, negative limit)
    - FileNotFoundError: Unknown section or key
    """

    def list_sections(self):
        # type: () -> list[SectionInfo]
        """
        List all search sections in id order.

        :return: List of SectionInfo with name, label and leading characters
        """
        ...

    def get_section(self, name):
        # type: (str) -> SectionInfo
        """
        Get section metadata by name.

        :param name: Section name (e.g. "all", "functions")
        :return: SectionInfo
        :raises FileNotFoundError: If section doesn't exist
        """
        ...

    def get_entry(self, section, key):
        # type: (str, str) -> IndexEntry
        """
        Get the entry filed under a normalized search key.

        :param section: Section name
        :param key: Normalized search key (e.g. "operator_2a")
        :return: IndexEntry with all variants in generation order
        :raises FileNotFoundError: If section or key doesn't exist
        """
        ...

    def lookup(self, section, query, mode="substring", fields="both", scope=None, limit=None, empty_query="none"):
        # type: (str, str, str, str, str|None, int|None, str) -> list[IndexEntry]
        """
        Find entries matching a query, in table order.

        :param section: Section name
        :param query: Raw user query (matched case-insensitively)
        :param mode: `substring` or `prefix`
        :param fields: `key`, `label` or `both`
        :param scope: Only keep variants owned by this scope
        :param limit: Maximum number of entries to return
        :param empty_query: Blank query policy, `none` or `all`
        :return: Matching entries (empty list if nothing matches)
        :raises FileNotFoundError: If section doesn't exist
        :raises ValueError: If an option is invalid
        """
        ...

    def close(self):
        # type: () -> None
        """
        Release resources held by the backend.

        Safe to call multiple times.
        """
        ...
