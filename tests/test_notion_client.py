from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import httpx
import pytest
from notion_client.errors import HTTPResponseError

from src.core.errors import ParseFailure, SourceUnavailable
from src.tools.notion_client import NotionResourceSource


def _page(name: str, resource_type: str = "Accelerator") -> Dict[str, Any]:
    return {
        "id": f"page-{name}",
        "properties": {
            "Name": {"type": "title", "title": [{"plain_text": name}] if name else []},
            "Resource Type": {"type": "select", "select": {"name": resource_type}},
            "Link": {"type": "url", "url": "https://example.test"},
        },
    }


class FakeDatabases:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def query(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.response


class FakeNotion:
    def __init__(self, databases: FakeDatabases) -> None:
        self.databases = databases


def _source(databases: FakeDatabases, **kwargs: Any) -> NotionResourceSource:
    return NotionResourceSource(client=FakeNotion(databases), database_id="db-1", **kwargs)


def test_fetch_rows_queries_with_provenance_filter_and_page_bound() -> None:
    databases = FakeDatabases({"results": [_page("Launchpad")], "has_more": False})
    source = _source(
        databases,
        provenance_property="Type",
        provenance_value="External",
        page_size=500,
    )

    rows = asyncio.run(source.fetch_rows())

    assert rows[0]["Name"] == "Launchpad"
    assert rows[0]["Resource Type"] == "Accelerator"
    assert databases.calls == [
        {
            "database_id": "db-1",
            "page_size": 100,
            "filter": {"property": "Type", "select": {"equals": "External"}},
        }
    ]


def test_untitled_records_are_discarded() -> None:
    databases = FakeDatabases({"results": [_page(""), _page("Kept")], "has_more": True})

    rows = asyncio.run(_source(databases).fetch_rows())

    assert [row["Name"] for row in rows] == ["Kept"]
    assert len(databases.calls) == 1


def test_transport_errors_raise_source_unavailable() -> None:
    databases = FakeDatabases(error=httpx.ConnectError("offline"))

    with pytest.raises(SourceUnavailable) as excinfo:
        asyncio.run(_source(databases).fetch_rows())

    assert excinfo.value.source == "external"


def test_malformed_response_raises_parse_failure() -> None:
    with pytest.raises(ParseFailure):
        asyncio.run(_source(FakeDatabases({"object": "error"})).fetch_rows())


def test_missing_credentials_are_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    from src.tools import notion_client

    monkeypatch.setattr(notion_client.settings, "notion_api_key", None)

    with pytest.raises(RuntimeError):
        NotionResourceSource(database_id="db-1")


def test_non_json_gateway_errors_raise_source_unavailable() -> None:
    error = HTTPResponseError(httpx.Response(502, text="<html>Bad Gateway</html>"))
    databases = FakeDatabases(error=error)

    with pytest.raises(SourceUnavailable) as excinfo:
        asyncio.run(_source(databases).fetch_rows())

    assert not isinstance(excinfo.value, ParseFailure)


def test_non_object_result_entries_raise_parse_failure() -> None:
    databases = FakeDatabases({"results": [_page("Kept"), "not-a-page"], "has_more": False})

    with pytest.raises(ParseFailure):
        asyncio.run(_source(databases).fetch_rows())
