from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from src.core.config import settings
from src.core.errors import PersistenceFailure
from src.favorites.store import KeyValueStore
from src.utils.resource_models import Resource

logger = logging.getLogger(__name__)


class FavoritesOverlay:
    """Favorite resource names kept in an injected key-value store.

    Names are the identifier, so resources sharing a name share a favorite
    flag. State is never cached: each call re-reads the store, and each
    mutation is written before the call returns.
    """

    def __init__(self, store: KeyValueStore, *, key: Optional[str] = None) -> None:
        self._store = store
        self._key = key or settings.favorites_key

    def names(self) -> List[str]:
        raw = self._store.get(self._key, [])
        if not isinstance(raw, list):
            raise PersistenceFailure(f"Stored value for '{self._key}' is not a list")
        names: List[str] = []
        for value in raw:
            if isinstance(value, str) and value not in names:
                names.append(value)
        return names

    def is_favorite(self, name: str) -> bool:
        return name in self.names()

    def add(self, name: str) -> None:
        current = self.names()
        if name in current:
            return
        current.append(name)
        self._store.set(self._key, current)

    def remove(self, name: str) -> None:
        current = self.names()
        if name not in current:
            return
        self._store.set(self._key, [value for value in current if value != name])

    def toggle(self, name: str) -> bool:
        """Flip membership of ``name`` and return the new state."""

        if self.is_favorite(name):
            self.remove(name)
            logger.debug("Removed %r from favorites", name)
            return False
        self.add(name)
        logger.debug("Added %r to favorites", name)
        return True

    def materialize(self, resources: Iterable[Resource]) -> List[Resource]:
        """Favorite resources in the scan order of ``resources``."""

        favorites = set(self.names())
        if not favorites:
            return []
        return [resource for resource in resources if resource.name in favorites]
