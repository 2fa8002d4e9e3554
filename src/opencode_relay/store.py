"""
Key-value stores for session records.

A record maps a normalized endpoint key to exactly one session ID. The file
store keeps one `<key>.session` file per record whose whole content is the ID,
the same layout the original shell tool wrote, so existing caches keep working.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SESSION_SUFFIX = ".session"


class SessionStore(ABC):
    """Interface: get / put / delete / list_keys."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a record. Returns False when there was nothing to remove."""

    @abstractmethod
    def list_keys(self) -> list[str]:
        ...


class FileSessionStore(SessionStore):
    def __init__(self, directory: Path):
        self._dir = Path(directory).expanduser()

    def path_for(self, key: str) -> Path:
        return self._dir / f"{key}{SESSION_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.path_for(key).read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return value or None

    def put(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        self.path_for(key).write_text(value, encoding="utf-8")
        logger.debug("Wrote %s", self.path_for(key))

    def delete(self, key: str) -> bool:
        try:
            self.path_for(key).unlink()
        except FileNotFoundError:
            return False
        return True

    def list_keys(self) -> list[str]:
        if not self._dir.is_dir():
            return []
        return [p.name[: -len(SESSION_SUFFIX)] for p in self._dir.iterdir()
                if p.is_file() and p.name.endswith(SESSION_SUFFIX)]


class MemorySessionStore(SessionStore):
    def __init__(self, records: Optional[dict[str, str]] = None):
        self.records: dict[str, str] = dict(records or {})

    def get(self, key: str) -> Optional[str]:
        return self.records.get(key)

    def put(self, key: str, value: str) -> None:
        self.records[key] = value

    def delete(self, key: str) -> bool:
        return self.records.pop(key, None) is not None

    def list_keys(self) -> list[str]:
        return list(self.records)
