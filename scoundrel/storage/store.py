"""
Key-value stores - Where saved games live.

The store:
- Maps string keys to string values
- Knows nothing about games
- Has an in-memory flavour (tests, API sessions) and a file flavour

Design decisions:
- Simple file-based storage, one file per key
- Keys are hashed into file names so any key is safe on disk
"""

from __future__ import annotations
import hashlib
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal string-keyed store."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str):
        ...

    def delete(self, key: str):
        ...


class MemoryStore:
    """Dict-backed store. Contents vanish with the process."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value

    def delete(self, key: str):
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class FileStore:
    """
    File-based store.

    Usage:
        store = FileStore(root_dir="~/.scoundrel/saves")
        store.set("scoundrel-game-state", payload)
        payload = store.get("scoundrel-game-state")
    """

    def __init__(self, root_dir: str | Path | None = None):
        if root_dir is None:
            root_dir = Path.home() / ".scoundrel" / "saves"
        self.root_dir = Path(root_dir).expanduser()

        # Ensure store directory exists
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> str | None:
        path = self._get_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str):
        path = self._get_path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def delete(self, key: str):
        self._get_path(key).unlink(missing_ok=True)

    def _get_path(self, key: str) -> Path:
        """
        Get file path for a key.

        Uses SHA-256 truncated to 16 chars.
        """
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:16]
        return self.root_dir / f"{digest}.json"
