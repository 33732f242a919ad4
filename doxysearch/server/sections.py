"""Section endpoints for the doxysearch API."""

from fastapi import APIRouter, Depends, HTTPException, status
from doxysearch.protocols.index import SearchIndexProtocol
from doxysearch.schema import EntryModel, SectionModel
from doxysearch.server import get_catalog_from_state
from doxysearch.server.auth import verify_api_key


router = APIRouter(tags=["sections"], dependencies=[Depends(verify_api_key)])


@router.get("/sections", response_model=list[SectionModel])
def list_sections(catalog: SearchIndexProtocol = Depends(get_catalog_from_state)):
    # type: (...) -> list[SectionModel]
    """
    List all search sections.

    :param catalog: Catalog injected from app state
    :return: List of SectionModel objects
    """
    return [SectionModel.from_section(s) for s in catalog.list_sections()]


@router.get("/sections/{name}", response_model=SectionModel)
def get_section(name: str, catalog: SearchIndexProtocol = Depends(get_catalog_from_state)):
    # type: (...) -> SectionModel
    """
    Get metadata for a specific section.

    :param name: Section name
    :param catalog: Catalog injected from app state
    :return: SectionModel
    :raises HTTPException: 404 if section not found
    """
    try:
        return SectionModel.from_section(catalog.get_section(name))
    except FileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/sections/{name}/entries/{key}", response_model=EntryModel)
def get_entry(name: str, key: str, catalog: SearchIndexProtocol = Depends(get_catalog_from_state)):
    # type: (...) -> EntryModel
    """
    Get the entry filed under a normalized search key.

    :param name: Section name
    :param key: Normalized search key (e.g. "operator_3d_3d")
    :param catalog: Catalog injected from app state
    :return: EntryModel with all variants in generation order
    :raises HTTPException: 404 if section or key not found
    """
    try:
        return EntryModel.from_entry(catalog.get_entry(name, key))
    except FileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
