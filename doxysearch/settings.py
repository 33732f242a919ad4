"""
Server runtime settings for doxysearch.

Read from `DOXYSEARCH_*` environment variables. They select the `search/`
directory the API serves and the lookup defaults (section, match mode, limit,
blank query policy) applied when a request leaves them out.

Named CLI sources live in `doxysearch.config`.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from doxysearch.lookup import EmptyQuery, MatchMode


__all__ = [
    "DoxySettings",
    "doxy_settings",
    "get_catalog",
]


class DoxySettings(BaseSettings):
    """
    Application settings for doxysearch.

    Settings can be configured via:
    - Environment variables (prefixed with DOXYSEARCH_)
    - Direct instantiation with parameters
    - Runtime override using the override() method

    Attributes:
        search_dir: Doxygen `search/` directory (or single table file) served by the API
        default_section: Section searched when none is given
        match_mode: Default match mode (substring or prefix)
        empty_query: Result for blank queries, `none` (empty) or `all` (whole section)
        limit: Default maximum number of entries per lookup
        api_secret: Optional API secret for authentication (if unset, API is public)
        cors_origins: List of allowed CORS origins (default: ["*"] for all origins)
    """

    search_dir: str = Field("html/search", description="Doxygen search directory or table file")
    default_section: str = Field("all", description="Section searched when none is given")
    match_mode: MatchMode = Field(MatchMode.substring, description="Default match mode")
    empty_query: EmptyQuery = Field(EmptyQuery.none, description="Result for blank queries (none or all)")
    limit: int = Field(100, ge=1, description="Default maximum number of entries per lookup")

    api_secret: str | None = Field(
        None,
        description="Optional API secret for authentication (if unset, API is public)",
    )

    cors_origins: list[str] = Field(
        ["*"],
        description="CORS allowed origins (comma-separated in env var, or '*' for all)",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        # type: (str|list[str]) -> list[str]
        """
        Parse CORS origins from environment variable or config.

        :param v: CORS origins as list or comma-separated string
        :return: List of allowed origin strings
        """
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    model_config = SettingsConfigDict(
        env_prefix="DOXYSEARCH_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    def override(self, update=None):
        # type: (dict|None) -> DoxySettings
        """
        Returns an updated and validated deep copy of the current settings instance.

        :param update: Dictionary of field names and values to override.
        :return: New DoxySettings instance with updated and validated fields.
        """
        update = update or {}

        settings = self.model_copy(deep=True)
        # Set fields individually so validation gets triggered
        for field, value in update.items():
            setattr(settings, field, value)
        return settings


doxy_settings = DoxySettings()


def get_catalog():
    # type: () -> SearchCatalog
    """
    Create the catalog for the configured search directory.

    :return: SearchCatalog over `doxy_settings.search_dir`
    :raises FileNotFoundError: If the directory doesn't exist or holds no search data
    """
    from doxysearch.catalog import SearchCatalog

    return SearchCatalog(doxy_settings.search_dir)
