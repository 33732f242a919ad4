"""FastAPI server for the doxysearch API."""

import typing  # noqa: F401
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
import doxysearch
from doxysearch.settings import doxy_settings, get_catalog
from doxysearch.protocols.index import SearchIndexProtocol  # noqa: F401


@asynccontextmanager
async def lifespan(app):  # type: ignore
    # type: (FastAPI) -> typing.AsyncGenerator[None, None]
    """
    Manage catalog lifecycle across FastAPI app startup and shutdown.

    On startup: Opens the configured search directory and stores the catalog in app.state.
    On shutdown: Closes the catalog.

    :param app: FastAPI application instance
    :yield: Control to FastAPI application
    """
    app.state.catalog = get_catalog()
    logger.info(f"Serving search data from {doxy_settings.search_dir}")
    yield
    app.state.catalog.close()


def get_catalog_from_state(request: Request):
    # type: (...) -> SearchIndexProtocol
    """
    Dependency function to inject the catalog from app state.

    :param request: FastAPI request object
    :return: Catalog instance from app.state
    """
    return request.app.state.catalog


app = FastAPI(
    lifespan=lifespan,
    title="doxysearch API",
    description="Lookup service over Doxygen client-side search indexes",
    version=doxysearch.__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=doxy_settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/", include_in_schema=False)
def root():
    # type: () -> dict
    """
    Root endpoint with basic API information.

    :return: API information
    """
    return {
        "title": app.title,
        "description": app.description,
        "version": app.version,
        "docs": "/docs",
    }


# Include API routers
from doxysearch.server import sections, search  # noqa: E402

app.include_router(sections.router)
app.include_router(search.router)
