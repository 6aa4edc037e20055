from __future__ import annotations

from typing import Dict, List, Optional, Protocol

RawRow = Dict[str, Optional[str]]


class ResourceSource(Protocol):
    """Anything that can produce the raw rows of one upstream source."""

    name: str

    async def fetch_rows(self) -> List[RawRow]:  # pragma: no cover - interface
        ...
