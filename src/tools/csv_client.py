"""CSV export adapter: fetches a delimited-text export and yields header-keyed rows."""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterator, List, Optional

import httpx

from src.core.config import settings
from src.core.errors import ParseFailure, SourceUnavailable
from src.tools.base import RawRow

logger = logging.getLogger(__name__)


def parse_csv(text: str, *, source: str = "csv") -> Iterator[RawRow]:
    """Yield one mapping per data row, keyed by the header row.

    Blank lines are skipped. A row whose column count differs from the
    header raises ``ParseFailure``.
    """

    if text.startswith("\ufeff"):
        text = text[1:]

    reader = csv.reader(io.StringIO(text), strict=True)
    header: Optional[List[str]] = None
    try:
        for values in reader:
            if not values or (len(values) == 1 and not values[0].strip()):
                continue
            if header is None:
                header = [column.strip() for column in values]
                continue
            if len(values) != len(header):
                raise ParseFailure(
                    source,
                    f"line {reader.line_num}: expected {len(header)} columns, got {len(values)}",
                )
            yield dict(zip(header, values))
    except csv.Error as exc:
        raise ParseFailure(source, f"line {reader.line_num}: {exc}") from exc


class CsvResourceSource:
    """Reads one CSV export over HTTP."""

    def __init__(
        self,
        *,
        name: str,
        url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.name = name
        self._url = url
        self._client = client
        self._timeout = timeout or settings.http_timeout_seconds

    async def fetch_text(self) -> str:
        try:
            if self._client is not None:
                response = await self._client.get(self._url)
            else:
                async with httpx.AsyncClient(
                    timeout=self._timeout, follow_redirects=True
                ) as client:
                    response = await client.get(self._url)
        except httpx.HTTPError as exc:
            logger.error("Failed to fetch %s export: %s", self.name, exc)
            raise SourceUnavailable(self.name, str(exc) or exc.__class__.__name__) from exc

        if response.status_code >= 400:
            logger.error(
                "%s export returned %s: %s",
                self.name,
                response.status_code,
                response.text[:200],
            )
            raise SourceUnavailable(self.name, f"HTTP {response.status_code}")

        return response.text

    async def fetch_rows(self) -> List[RawRow]:
        text = await self.fetch_text()
        # Materialise the whole document so a bad row fails the request.
        rows = list(parse_csv(text, source=self.name))
        logger.debug("Parsed %s rows from %s export", len(rows), self.name)
        return rows
