"""Authentication utilities for the doxysearch API."""

import secrets
from fastapi import Security, HTTPException, status
from fastapi.security import APIKeyHeader
from doxysearch.settings import doxy_settings


api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def verify_api_key(api_key=Security(api_key_header)):
    # type: (str | None) -> None
    """
    Guard the search endpoints with `DOXYSEARCH_API_SECRET` when it is set.

    Without a secret the documentation index is served to anyone. With one, the
    `X-API-Key` header must equal it.

    :param api_key: API key from X-API-Key header (None if not provided)
    :raises HTTPException: 401 Unauthorized if key is invalid or missing
    """
    if doxy_settings.api_secret is None:
        return

    if api_key is None or not secrets.compare_digest(api_key, doxy_settings.api_secret):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
