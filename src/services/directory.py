"""Per-request orchestration of sources, normalization, grouping and search."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from src.core.config import settings
from src.core.errors import SourceUnavailable
from src.favorites.overlay import FavoritesOverlay
from src.favorites.store import JsonFileStore
from src.pipeline.grouper import KeyFn, by_category, group_resources
from src.pipeline.normalizer import (
    CATALOG_SCHEMA,
    EXTERNAL_SCHEMA,
    INTERNAL_SCHEMA,
    SourceSchema,
    normalize_rows,
)
from src.pipeline.query import (
    SearchParams,
    filter_groups,
    filter_resources,
    unique_categories,
)
from src.tools.base import RawRow, ResourceSource
from src.tools.csv_client import CsvResourceSource
from src.tools.notion_client import NotionResourceSource
from src.utils.resource_models import Resource, ResourceGroup

logger = logging.getLogger(__name__)


class SourceId(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    CATALOG = "catalog"


SCHEMAS: Dict[SourceId, SourceSchema] = {
    SourceId.INTERNAL: INTERNAL_SCHEMA,
    SourceId.EXTERNAL: EXTERNAL_SCHEMA,
    SourceId.CATALOG: CATALOG_SCHEMA,
}

SourceFactory = Callable[[SourceId], ResourceSource]


@dataclass(slots=True)
class SearchResult:
    categories: List[str]
    results: List[Resource]


def build_source(source_id: SourceId) -> ResourceSource:
    """Create the configured adapter for ``source_id``."""

    if source_id is SourceId.EXTERNAL and settings.external_source == "notion":
        try:
            return NotionResourceSource(name=source_id.value)
        except RuntimeError as exc:
            raise SourceUnavailable(source_id.value, str(exc)) from exc

    urls = {
        SourceId.INTERNAL: settings.internal_resources_csv_url,
        SourceId.EXTERNAL: settings.external_resources_csv_url,
        SourceId.CATALOG: settings.resource_catalog_csv_url,
    }
    return CsvResourceSource(name=source_id.value, url=urls[source_id])


class ResourceDirectory:
    """Loads resources fresh for every call; nothing is cached between calls."""

    def __init__(
        self,
        *,
        favorites: FavoritesOverlay,
        source_factory: SourceFactory = build_source,
    ) -> None:
        self._favorites = favorites
        self._source_factory = source_factory

    @property
    def favorites(self) -> FavoritesOverlay:
        return self._favorites

    # --- Ingestion ------------------------------------------------------
    async def fetch_raw_source(self, source_id: SourceId) -> List[RawRow]:
        source = self._source_factory(source_id)
        return await source.fetch_rows()

    async def load(self, source_id: SourceId) -> List[Resource]:
        rows = await self.fetch_raw_source(source_id)
        resources = normalize_rows(rows, SCHEMAS[source_id])
        logger.debug("Loaded %s resources from %s", len(resources), source_id.value)
        return resources

    async def grouped(
        self,
        source_id: SourceId,
        key_fn: KeyFn = by_category,
        params: Optional[SearchParams] = None,
    ) -> List[ResourceGroup]:
        groups = group_resources(await self.load(source_id), key_fn)
        if params is not None and params.is_active:
            groups = filter_groups(groups, params)
        return groups

    async def load_all(self, *, require_description: bool = False) -> List[Resource]:
        """Internal then external resources, fetched concurrently.

        Each source is flattened from its category groups, so resources come
        back in group order rather than raw row order. Either both sources
        load or the first failure is raised.
        """

        internal, external = await asyncio.gather(
            self.grouped(SourceId.INTERNAL),
            self.grouped(SourceId.EXTERNAL),
        )
        resources = [item for group in internal + external for item in group.items]
        if require_description:
            resources = [resource for resource in resources if resource.description]
        return resources

    # --- Views ----------------------------------------------------------
    async def search(self, params: SearchParams) -> SearchResult:
        resources = await self.load_all(require_description=True)
        return SearchResult(
            categories=unique_categories(resources),
            results=filter_resources(resources, params),
        )

    async def list_favorites(self) -> List[Resource]:
        if not self._favorites.names():
            return []
        return self._favorites.materialize(await self.load_all())

    def toggle_favorite(self, name: str) -> bool:
        return self._favorites.toggle(name)

    def is_favorite(self, name: str) -> bool:
        return self._favorites.is_favorite(name)


def create_directory(*, favorites: Optional[FavoritesOverlay] = None) -> ResourceDirectory:
    if favorites is None:
        favorites = FavoritesOverlay(JsonFileStore())
    return ResourceDirectory(favorites=favorites)
