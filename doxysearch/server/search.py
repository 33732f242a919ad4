"""Search endpoints for the doxysearch API."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from doxysearch.protocols.index import SearchIndexProtocol
from doxysearch.lookup import MatchField, MatchMode
from doxysearch.schema import EntryModel, SearchResult
from doxysearch.server import get_catalog_from_state
from doxysearch.server.auth import verify_api_key
from doxysearch.settings import doxy_settings


router = APIRouter(tags=["search"], dependencies=[Depends(verify_api_key)])


def run_search(catalog, name, q, mode, fields, scope, limit):
    # type: (SearchIndexProtocol, str, str, MatchMode|None, MatchField, str|None, int|None) -> SearchResult
    """
    Run a lookup with server defaults applied and wrap the result.

    :raises HTTPException: 404 if section not found, 400 for invalid options
    """
    mode = mode or doxy_settings.match_mode
    try:
        entries = catalog.lookup(
            name,
            q,
            mode=mode.value,
            fields=fields.value,
            scope=scope,
            limit=doxy_settings.limit if limit is None else limit,
            empty_query=doxy_settings.empty_query.value,
        )
    except FileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:  # pragma: no cover
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SearchResult(
        section=name,
        query=q,
        mode=mode,
        fields=fields,
        scope=scope,
        entries=[EntryModel.from_entry(e) for e in entries],
    )


@router.get("/search", response_model=SearchResult)
def search_default(
    q: str = Query("", description="Search query (case-insensitive)"),
    mode: MatchMode | None = Query(None, description="Match mode (defaults to server setting)"),
    fields: MatchField = Query(MatchField.both, description="Entry fields compared with the query"),
    scope: str | None = Query(None, description="Only return variants owned by this scope"),
    limit: int | None = Query(None, ge=0, description="Maximum number of entries"),
    catalog: SearchIndexProtocol = Depends(get_catalog_from_state),
):
    # type: (...) -> SearchResult
    """
    Search the server's default section (`all` unless configured otherwise).

    Same parameters as the per-section search.
    """
    return run_search(catalog, doxy_settings.default_section, q, mode, fields, scope, limit)


@router.get("/sections/{name}/search", response_model=SearchResult)
def search(
    name: str,
    q: str = Query("", description="Search query (case-insensitive)"),
    mode: MatchMode | None = Query(None, description="Match mode (defaults to server setting)"),
    fields: MatchField = Query(MatchField.both, description="Entry fields compared with the query"),
    scope: str | None = Query(None, description="Only return variants owned by this scope"),
    limit: int | None = Query(None, ge=0, description="Maximum number of entries"),
    catalog: SearchIndexProtocol = Depends(get_catalog_from_state),
):
    # type: (...) -> SearchResult
    """
    Search a section for entries matching a query.

    Entries are returned in table order. Blank queries follow the server's
    `empty_query` policy.

    :param name: Section name
    :param q: Search query
    :param mode: Match mode
    :param fields: Entry fields compared with the query
    :param scope: Scope filter
    :param limit: Maximum number of entries (defaults to server setting)
    :param catalog: Catalog injected from app state
    :return: SearchResult with matching entries
    :raises HTTPException: 404 if section not found, 400 for invalid options
    """
    return run_search(catalog, name, q, mode, fields, scope, limit)
