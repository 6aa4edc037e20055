"""High-level helpers for reading external resources from a Notion database."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx
from notion_client import AsyncClient
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from src.core.config import settings
from src.core.errors import ParseFailure, SourceUnavailable
from src.tools.base import RawRow
from src.utils.notion_format import (
    TITLE_PROPERTY,
    build_select_equals_filter,
    parse_page_to_row,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class NotionResourceSource:
    """Wrapper around the Notion API for one provenance-filtered database."""

    def __init__(
        self,
        *,
        name: str = "external",
        client: Optional[Any] = None,
        database_id: Optional[str] = None,
        provenance_property: Optional[str] = None,
        provenance_value: Optional[str] = None,
        page_size: Optional[int] = None,
        title_property: str = TITLE_PROPERTY,
    ) -> None:
        if client is None and not settings.notion_api_key:
            raise RuntimeError(
                "Notion credentials are missing. Ensure NOTION_API_KEY and "
                "NOTION_RESOURCE_DATABASE_ID are set in your environment."
            )
        database_id = database_id or settings.notion_resource_database_id
        if not database_id:
            raise RuntimeError("NOTION_RESOURCE_DATABASE_ID is not configured.")

        self.name = name
        self._client = client or AsyncClient(
            auth=settings.notion_api_key.get_secret_value(),
            timeout_ms=int(settings.http_timeout_seconds * 1000),
        )
        self._database_id = database_id
        self._provenance_property = provenance_property or settings.notion_provenance_property
        self._provenance_value = provenance_value or settings.notion_provenance_value
        self._page_size = min(page_size or settings.notion_page_size, MAX_PAGE_SIZE)
        self._title_property = title_property

    # --- Public API -----------------------------------------------------
    async def fetch_rows(self) -> List[RawRow]:
        """Return the first page of matching records as raw rows."""

        query_args: dict = {
            "database_id": self._database_id,
            "page_size": self._page_size,
            "filter": build_select_equals_filter(
                self._provenance_property, self._provenance_value
            ),
        }

        try:
            response = await self._client.databases.query(**query_args)
        except (HTTPResponseError, RequestTimeoutError, httpx.HTTPError) as exc:
            logger.error("Notion query for %s failed: %s", self.name, exc)
            raise SourceUnavailable(self.name, str(exc) or exc.__class__.__name__) from exc

        results = response.get("results") if isinstance(response, dict) else None
        if not isinstance(results, list):
            raise ParseFailure(self.name, "Notion response has no 'results' list")

        if response.get("has_more"):
            logger.info(
                "Notion database %s has more than %s matching records; only the first page is used",
                self._database_id,
                self._page_size,
            )

        rows: List[RawRow] = []
        for page in results:
            if not isinstance(page, dict):
                raise ParseFailure(self.name, "Notion result entry is not an object")
            row = parse_page_to_row(page, title_property=self._title_property)
            if row is None:
                logger.debug("Skipping Notion page %s without a title", page.get("id"))
                continue
            rows.append(row)
        return rows
