from __future__ import annotations

from typing import Dict, List

import pytest

from src.core.errors import SourceUnavailable
from src.favorites.overlay import FavoritesOverlay
from src.favorites.store import JsonFileStore
from src.services.directory import ResourceDirectory, SourceId
from src.tools.base import RawRow

INTERNAL_ROWS: List[RawRow] = [
    {"Category": "Funding", "Name": "Acme Grant", "Description": "funding", "Link": ""},
    {"Category": "", "Name": "Bad Row"},
    {"Category": "Mentoring", "Name": "Office Hours", "Description": "Weekly mentors"},
    {"Category": "Funding", "Name": "www.spam.com", "Description": "x"},
    {"Category": "Events", "Name": "Demo Day", "Description": ""},
]

EXTERNAL_ROWS: List[RawRow] = [
    {"Resource Type": "Grants", "Name": "Beta Fund", "Description": "grant program", "Link": "https://beta.example"},
    {"Resource Type": "Accelerators", "Name": "Launchpad", "Description": "Cohort program"},
]

CATALOG_ROWS: List[RawRow] = [
    {"Category": "Programs", "Name": "Incubator", "Parent item": "Labs", "Sub-item": "Cohort A"},
]


class StaticSource:
    def __init__(self, name: str, rows: List[RawRow]) -> None:
        self.name = name
        self._rows = rows

    async def fetch_rows(self) -> List[RawRow]:
        return [dict(row) for row in self._rows]


class FailingSource:
    def __init__(self, name: str) -> None:
        self.name = name

    async def fetch_rows(self) -> List[RawRow]:
        raise SourceUnavailable(self.name, "upstream offline")


@pytest.fixture
def source_rows() -> Dict[SourceId, List[RawRow]]:
    return {
        SourceId.INTERNAL: INTERNAL_ROWS,
        SourceId.EXTERNAL: EXTERNAL_ROWS,
        SourceId.CATALOG: CATALOG_ROWS,
    }


@pytest.fixture
def favorites(tmp_path) -> FavoritesOverlay:
    return FavoritesOverlay(JsonFileStore(str(tmp_path / "favorites.json")), key="favorites")


@pytest.fixture
def failing_sources() -> set:
    return set()


@pytest.fixture
def directory(source_rows, favorites, failing_sources) -> ResourceDirectory:
    def factory(source_id: SourceId):
        if source_id in failing_sources:
            return FailingSource(source_id.value)
        return StaticSource(source_id.value, source_rows[source_id])

    return ResourceDirectory(favorites=favorites, source_factory=factory)
