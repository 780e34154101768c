"""
Key-Value Store

Persistence collaborator for conversation history and the crisis
log. Mirrors the browser local-storage model: string keys, JSON
text blobs.

Stores raise PersistenceUnavailableError on failure. Callers in the
core treat persistence as best-effort and never let it block a turn.
"""

import threading
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable
from urllib.parse import quote, unquote

from counselcare.config.logging_config import get_logger

logger = get_logger(__name__)


class PersistenceUnavailableError(Exception):
    """Raised when a store cannot load or save a blob."""

    def __init__(self, message: str, operation: str, key: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.key = key


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal persistence interface consumed by the core."""

    def load(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key`` or None."""
        ...

    def save(self, key: str, blob: str) -> None:
        """Store ``blob`` under ``key``, replacing any previous value."""
        ...


class InMemoryKeyValueStore:
    """
    Process-local store.

    Default backend for development and tests.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def load(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def save(self, key: str, blob: str) -> None:
        with self._lock:
            self._data[key] = blob

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)


class JsonFileKeyValueStore:
    """
    One JSON file per key under a root directory.

    Keys are percent-encoded into file names, so distinct keys never
    share a file. The directory is created on first save.
    """

    SUFFIX = ".json"

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{quote(key, safe='')}{self.SUFFIX}"

    def keys(self) -> list[str]:
        if not self._directory.is_dir():
            return []
        return sorted(
            unquote(path.name[: -len(self.SUFFIX)])
            for path in self._directory.glob(f"*{self.SUFFIX}")
        )

    def load(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceUnavailableError(
                f"Failed to read {path}: {e}", operation="load", key=key
            ) from e

    def save(self, key: str, blob: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(blob, encoding="utf-8")
            tmp_path.replace(path)
        except (OSError, UnicodeEncodeError) as e:
            raise PersistenceUnavailableError(
                f"Failed to write {path}: {e}", operation="save", key=key
            ) from e

        logger.debug("Blob saved", key=key, size=len(blob))
