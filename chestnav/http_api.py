"""FastAPI application for chestnav.

Exposes the privileged navigation operations (search, page lookup, item
contents, sidebar) to the application's own local content, and serves chest
assets under ``/docs/{identifier}/{path}``.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import Response
from loguru import logger
from pydantic import BaseModel, Field

from core.exceptions import ContentEngineError, ModelError, UntrustedOriginError, ValidationError
from core.models import ExtendedItemPath, ItemPath, SearchParameters
from core.types import Theme
from interfaces.content_engine import ContentEngine
from services.outline_service import OutlineService
from services.search_service import SearchService, aggregate_results
from services.url_resolver import UrlResolver

from . import __version__
from .content_protocol import read_content
from .core.config import ChestNavConfig, get_config
from .trust import require_local_origin


class SearchRequest(BaseModel):
    """Request model for search."""
    query: str = Field(..., description="Search query text")
    path: Optional[Dict[str, Any]] = Field(None, description="Item path restricting the search")
    parameters: Optional[Dict[str, Any]] = Field(None, description="Search parameters (resultCount)")


class PageForPathRequest(BaseModel):
    """Request model for locating a chest-relative URL."""
    identifier: str = Field(..., min_length=1, description="Chest identifier")
    url: str = Field(..., description="URL relative to the chest root")
    path: Optional[Dict[str, Any]] = Field(None, description="Current item path used as context")


class PathRequest(BaseModel):
    """Request model for operations on one item path."""
    path: Dict[str, Any] = Field(..., description="Item path")


TOKEN_HEADER = "X-ChestNav-Token"


def _origin(request: Request) -> Optional[str]:
    return request.headers.get("origin") or request.headers.get("referer")


def trusted(operation: str):
    """Build a dependency rejecting callers outside the local content origin."""

    def check(request: Request) -> None:
        config: ChestNavConfig = request.app.state.config
        access_token = config.server.access_token
        try:
            require_local_origin(
                _origin(request),
                operation,
                allow_dev_origin=config.debug,
                token=request.headers.get(TOKEN_HEADER),
                expected_token=access_token.get_secret_value() if access_token else None,
            )
        except UntrustedOriginError as e:
            raise HTTPException(status_code=403, detail=str(e))

    return check


def _item_path(data: Optional[Dict[str, Any]]) -> Optional[ItemPath]:
    if data is None:
        return None
    try:
        return ItemPath.from_dict(data)
    except (ValidationError, ModelError, KeyError, TypeError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid item path: {e}")


def _search_parameters(data: Optional[Dict[str, Any]]) -> Optional[SearchParameters]:
    if data is None:
        return None
    try:
        return SearchParameters.from_dict(data)
    except (ValidationError, TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid search parameters: {e}")


def create_app(
    engine: Optional[ContentEngine] = None,
    config: Optional[ChestNavConfig] = None
) -> FastAPI:
    """Create the chestnav HTTP API.

    Args:
        engine: Content engine; taken from the provider registry when omitted
        config: Configuration; the global configuration when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or get_config()
    if engine is None:
        from registry import configure_registry, get_registry

        configure_registry(config.to_dict())
        engine = get_registry().get_engine()

    resolver = UrlResolver(
        engine,
        placeholder_page=config.content.placeholder_page,
        home_tag=config.content.home_tag,
    )
    outline = OutlineService(engine)
    search = SearchService(engine, SearchParameters(config.search.result_count))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan management."""
        logger.info(f"chestnav API started with {type(engine).__name__}")
        try:
            yield
        finally:
            logger.info("chestnav API shutdown")

    app = FastAPI(
        title="chestnav API",
        description="Navigation core for browsing documentation chests",
        version=__version__,
        lifespan=lifespan
    )
    app.state.config = config
    app.state.engine = engine

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.post("/api/search", dependencies=[Depends(trusted("search"))])
    def search_endpoint(request: SearchRequest) -> List[Dict[str, Any]]:
        """Search all chests, or the subtree of ``path``."""
        results = _run(lambda: search.search(
            request.query, _item_path(request.path), _search_parameters(request.parameters)
        ))
        return [result.to_dict() for result in results]

    @app.post("/api/search/rows", dependencies=[Depends(trusted("search"))])
    def search_rows_endpoint(request: SearchRequest) -> List[Dict[str, Any]]:
        """Search and return the grouped display rows."""
        results = _run(lambda: search.search(
            request.query, _item_path(request.path), _search_parameters(request.parameters)
        ))
        return [row.to_dict() for row in aggregate_results(results)]

    @app.post("/api/page-for-path", dependencies=[Depends(trusted("page-for-path"))])
    def page_for_path_endpoint(request: PageForPathRequest) -> Dict[str, Any]:
        """Locate the item and page a chest-relative URL points to."""
        located = _run(lambda: resolver.locate(
            request.identifier, request.url, _item_path(request.path)
        ))
        return located.to_dict()

    @app.post("/api/item-contents-at-path", dependencies=[Depends(trusted("item-contents-at-path"))])
    def item_contents_endpoint(request: PathRequest) -> Dict[str, Any]:
        """Get the contents of a path with bases expanded."""
        path = _item_path(request.path)
        return _run(lambda: outline.contents_at_path(path)).to_dict()

    @app.post("/api/sidebar", dependencies=[Depends(trusted("sidebar"))])
    def sidebar_endpoint(request: PathRequest) -> Dict[str, Any]:
        """Build the sidebar for a page path."""
        path = _item_path(request.path)
        page_path = ExtendedItemPath.from_dict(request.path) if path is not None else None
        return _run(lambda: outline.sidebar_for(page_path)).to_dict()

    @app.get("/docs/{identifier}/{path:path}")
    def docs_endpoint(identifier: str, path: str, theme: Optional[str] = None) -> Response:
        """Serve a chest asset; failures become a 404 error document."""
        try:
            active_theme = Theme.from_string(theme) if theme else config.content.theme
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

        content = read_content(engine, identifier, path, active_theme)
        return Response(
            content=content.body,
            status_code=content.status,
            media_type=content.content_type,
        )

    return app


def _run(operation):
    try:
        return operation()
    except ContentEngineError as e:
        raise HTTPException(status_code=500, detail=str(e))
