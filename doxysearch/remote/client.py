"""
Remote catalog client implementation.

Provides an HTTP client for a doxysearch server, implementing the
SearchIndexProtocol interface.
"""

from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from loguru import logger

from doxysearch.schema import EntryModel, SearchResult, SectionModel

if TYPE_CHECKING:
    from doxysearch.models import IndexEntry  # noqa: F401
    from doxysearch.models import SectionInfo  # noqa: F401


__all__ = ["RemoteCatalog"]


class RemoteCatalog:
    """
    Remote catalog client implementing SearchIndexProtocol.

    Connects to a doxysearch server via HTTP and provides the same interface
    as the local SearchCatalog.
    """

    def __init__(self, url, api_key=None, timeout=30.0):
        # type: (str, str|None, float) -> None
        """
        Initialize remote catalog client.

        :param url: Base URL of remote server (e.g., "https://docs.example.com")
        :param api_key: Optional API key for authentication
        :param timeout: Request timeout in seconds
        """
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._client = None  # type: httpx.Client|None

    @property
    def client(self):
        # type: () -> httpx.Client
        """
        Get or create HTTP client.

        Lazy initialization of httpx client with authentication headers.

        :return: httpx.Client instance
        """
        if self._client is None:
            headers = {}
            if self.api_key:
                headers["X-API-Key"] = self.api_key
            self._client = httpx.Client(base_url=self.url, headers=headers, timeout=self.timeout)
        return self._client

    def _handle_response_errors(self, response):
        # type: (httpx.Response) -> None
        """
        Convert HTTP error responses to appropriate Python exceptions.

        :param response: httpx Response object
        :raises FileNotFoundError: For 404 Not Found
        :raises ValueError: For 400 Bad Request and 422 validation errors
        :raises PermissionError: For 401 Unauthorized
        :raises RuntimeError: For other HTTP errors
        """
        if response.is_success:
            return

        try:
            error_detail = response.json().get("detail", response.text)
        except ValueError:
            error_detail = response.text

        logger.debug(f"Remote request failed with HTTP {response.status_code}: {error_detail}")
        if response.status_code == 404:
            raise FileNotFoundError(error_detail)
        elif response.status_code in (400, 422):
            raise ValueError(error_detail)
        elif response.status_code == 401:
            raise PermissionError(error_detail)
        else:
            raise RuntimeError(f"HTTP {response.status_code}: {error_detail}")

    def list_sections(self):
        # type: () -> list[SectionInfo]
        """
        List all search sections.

        :return: List of SectionInfo
        """
        response = self.client.get("/sections")
        self._handle_response_errors(response)
        return [SectionModel(**data).to_section() for data in response.json()]

    def get_section(self, name):
        # type: (str) -> SectionInfo
        """
        Get section metadata by name.

        :param name: Section name
        :return: SectionInfo
        :raises FileNotFoundError: If section doesn't exist
        """
        response = self.client.get(f"/sections/{quote(name, safe='')}")
        self._handle_response_errors(response)
        return SectionModel(**response.json()).to_section()

    def get_entry(self, section, key):
        # type: (str, str) -> IndexEntry
        """
        Get the entry filed under a normalized search key.

        :param section: Section name
        :param key: Normalized search key
        :return: IndexEntry
        :raises FileNotFoundError: If section or key doesn't exist
        """
        response = self.client.get(f"/sections/{quote(section, safe='')}/entries/{quote(key, safe='')}")
        self._handle_response_errors(response)
        return EntryModel(**response.json()).to_entry()

    def lookup(self, section, query, mode="substring", fields="both", scope=None, limit=None, empty_query="none"):
        # type: (str, str, str, str, str|None, int|None, str) -> list[IndexEntry]
        """
        Find entries matching a query on the server.

        The blank query policy is decided by the server configuration; `empty_query`
        is accepted for protocol compatibility only.

        :param section: Section name
        :param query: Raw user query
        :param mode: `substring` or `prefix`
        :param fields: `key`, `label` or `both`
        :param scope: Only keep variants owned by this scope
        :param limit: Maximum number of entries
        :param empty_query: Ignored, see above
        :return: Matching entries in table order
        :raises FileNotFoundError: If section doesn't exist
        :raises ValueError: If an option is invalid
        """
        params = {"q": query, "mode": str(getattr(mode, "value", mode)), "fields": str(getattr(fields, "value", fields))}
        if scope is not None:
            params["scope"] = scope
        if limit is not None:
            params["limit"] = str(limit)
        response = self.client.get(f"/sections/{quote(section, safe='')}/search", params=params)
        self._handle_response_errors(response)
        result = SearchResult(**response.json())
        return [entry.to_entry() for entry in result.entries]

    def close(self):
        # type: () -> None
        """
        Close HTTP client connection.

        Safe to call multiple times.
        """
        if self._client is not None:
            self._client.close()
            self._client = None
