"""Local JSON-backed key-value storage for client-side state."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol

from src.core.config import settings
from src.core.errors import PersistenceFailure

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any:  # pragma: no cover - interface
        ...

    def set(self, key: str, value: Any) -> None:  # pragma: no cover - interface
        ...

    def subscribe(self, listener: Listener) -> Callable[[], None]:  # pragma: no cover - interface
        ...


class JsonFileStore:
    """Key-value store persisted as one JSON object on disk.

    Every ``get`` reads the file and every ``set`` rewrites it before
    returning, so independent instances pointed at the same path always see
    the latest write.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self._path = Path(path or settings.favorites_storage_path)
        self._listeners: List[Listener] = []

    @property
    def path(self) -> Path:
        return self._path

    # ----- Public API -------------------------------------------------
    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._write(data)
        for listener in list(self._listeners):
            listener(key, value)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ----- Internal helpers ------------------------------------------
    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            content = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceFailure(f"Unable to read {self._path}: {exc}") from exc
        if not content.strip():
            return {}
        try:
            raw = json.loads(content)
        except json.JSONDecodeError as exc:
            raise PersistenceFailure(f"{self._path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise PersistenceFailure(f"{self._path} does not hold a JSON object")
        return raw

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            logger.error("Failed to write %s: %s", self._path, exc)
            raise PersistenceFailure(f"Unable to write {self._path}: {exc}") from exc
