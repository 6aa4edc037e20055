from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.core.errors import PersistenceFailure, SourceUnavailable
from src.pipeline.query import ALL, SearchParams
from src.services.directory import ResourceDirectory, SourceId, create_directory
from src.utils.resource_models import ResourceGroup

logger = logging.getLogger(__name__)

SOURCE_ERROR = "Failed to process resources"
FAVORITES_ERROR = "Failed to update favorites"


class FavoriteToggle(BaseModel):
    name: str = Field(..., min_length=1)


def _groups_payload(groups: List[ResourceGroup]) -> List[Dict[str, Any]]:
    return [group.to_dict() for group in groups]


def get_directory(request: Request) -> ResourceDirectory:
    return request.app.state.directory


def get_search_params(
    query: str = "",
    category: str = ALL,
    type: Literal["all", "internal", "external"] = Query(default=ALL),
) -> SearchParams:
    return SearchParams.from_mapping({"query": query, "category": category, "type": type})


def create_app(directory: Optional[ResourceDirectory] = None) -> FastAPI:
    app = FastAPI(title="USC Entrepreneurship Resource Directory", version="0.1.0")
    app.state.directory = directory or create_directory()

    @app.exception_handler(SourceUnavailable)
    async def source_unavailable_handler(request: Request, exc: SourceUnavailable) -> JSONResponse:
        logger.error("Error processing %s for %s: %s", exc.source, request.url.path, exc)
        return JSONResponse(
            {"error": SOURCE_ERROR},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(PersistenceFailure)
    async def persistence_failure_handler(request: Request, exc: PersistenceFailure) -> JSONResponse:
        logger.error("Favorites store failed for %s: %s", request.url.path, exc)
        return JSONResponse(
            {"error": FAVORITES_ERROR},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.get("/api/internal-resources")
    async def internal_resources(
        params: SearchParams = Depends(get_search_params),
        directory: ResourceDirectory = Depends(get_directory),
    ) -> JSONResponse:
        return JSONResponse(_groups_payload(await directory.grouped(SourceId.INTERNAL, params=params)))

    @app.get("/api/external-resources")
    async def external_resources(
        params: SearchParams = Depends(get_search_params),
        directory: ResourceDirectory = Depends(get_directory),
    ) -> JSONResponse:
        return JSONResponse(_groups_payload(await directory.grouped(SourceId.EXTERNAL, params=params)))

    @app.get("/api/resources")
    async def resource_catalog(
        params: SearchParams = Depends(get_search_params),
        directory: ResourceDirectory = Depends(get_directory),
    ) -> JSONResponse:
        return JSONResponse(_groups_payload(await directory.grouped(SourceId.CATALOG, params=params)))

    @app.get("/api/search")
    async def search(
        params: SearchParams = Depends(get_search_params),
        directory: ResourceDirectory = Depends(get_directory),
    ) -> JSONResponse:
        result = await directory.search(params)
        return JSONResponse(
            {
                "categories": result.categories,
                "active": params.is_active,
                "results": [resource.to_dict() for resource in result.results],
            }
        )

    @app.get("/api/favorites")
    async def list_favorites(
        directory: ResourceDirectory = Depends(get_directory),
    ) -> JSONResponse:
        favorites = await directory.list_favorites()
        return JSONResponse([resource.to_dict() for resource in favorites])

    @app.post("/api/favorites/toggle")
    async def toggle_favorite(
        payload: FavoriteToggle,
        directory: ResourceDirectory = Depends(get_directory),
    ) -> JSONResponse:
        favorite = directory.toggle_favorite(payload.name)
        return JSONResponse({"name": payload.name, "favorite": favorite})

    @app.get("/api/favorites/{name:path}")
    async def favorite_status(
        name: str,
        directory: ResourceDirectory = Depends(get_directory),
    ) -> JSONResponse:
        return JSONResponse({"name": name, "favorite": directory.is_favorite(name)})

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    return app
