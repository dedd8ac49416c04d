"""
Match repository — Keyed storage of saved matches.

The engine never enumerates storage itself; everything goes through the
list / load / save / delete interface below.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from volleyscout.config import settings
from volleyscout.engine.errors import (
    InvalidSaveKey,
    MalformedSnapshot,
    SaveNotFound,
    StorageUnavailable,
)
from volleyscout.models.snapshot import MatchSnapshot, SavedGameInfo
from volleyscout.storage.snapshot_codec import dump_snapshot, load_snapshot

logger = logging.getLogger(__name__)


def _check_key(key: str) -> str:
    key = (key or "").strip()
    if not key:
        raise InvalidSaveKey("save name is required")
    if "/" in key or "\\" in key or key in (".", ".."):
        raise InvalidSaveKey(f"invalid save name: {key!r}")
    return key


class MatchRepository(ABC):
    """Storage interface for saved matches."""

    @abstractmethod
    def list(self) -> list[SavedGameInfo]:
        """Saved matches, newest first."""

    @abstractmethod
    def load(self, key: str) -> MatchSnapshot:
        ...

    @abstractmethod
    def save(self, key: str, snapshot: MatchSnapshot) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


def _sort_newest_first(items: list[SavedGameInfo]) -> list[SavedGameInfo]:
    return sorted(items, key=lambda i: i.saved_at or 0, reverse=True)


class InMemoryRepository(MatchRepository):
    """Dict-backed repository, holds the encoded text like a key-value store."""

    def __init__(self):
        self._items: dict[str, str] = {}

    def list(self) -> list[SavedGameInfo]:
        items = []
        for key, text in self._items.items():
            saved_at = None
            try:
                saved_at = load_snapshot(text).saved_at_epoch_millis
            except MalformedSnapshot:
                logger.warning("Unreadable save %s", key)
            items.append(SavedGameInfo(key=key, label=key, saved_at=saved_at))
        return _sort_newest_first(items)

    def load(self, key: str) -> MatchSnapshot:
        text = self._items.get(key)
        if text is None:
            raise SaveNotFound(f"no save named {key!r}")
        return load_snapshot(text)

    def save(self, key: str, snapshot: MatchSnapshot) -> None:
        self._items[_check_key(key)] = dump_snapshot(snapshot)

    def delete(self, key: str) -> None:
        if self._items.pop(key, None) is None:
            raise SaveNotFound(f"no save named {key!r}")


class JsonFileRepository(MatchRepository):
    """One UTF-8 JSON file per save: <directory>/<prefix><key>.json."""

    SUFFIX = ".json"

    def __init__(self, directory: Union[str, Path, None] = None, prefix: Optional[str] = None):
        self.directory = Path(directory or settings.SAVE_DIR)
        self.prefix = settings.SAVE_PREFIX if prefix is None else prefix

    def _path(self, key: str) -> Path:
        return self.directory / f"{self.prefix}{_check_key(key)}{self.SUFFIX}"

    def list(self) -> list[SavedGameInfo]:
        if not self.directory.exists():
            return []
        items = []
        try:
            paths = sorted(self.directory.glob(f"{self.prefix}*{self.SUFFIX}"))
        except OSError as e:
            raise StorageUnavailable(f"cannot list saves: {e}") from e

        for path in paths:
            key = path.name[len(self.prefix):-len(self.SUFFIX)]
            saved_at = None
            try:
                saved_at = load_snapshot(path.read_bytes()).saved_at_epoch_millis
            except (OSError, MalformedSnapshot) as e:
                logger.warning("Unreadable save %s: %s", path.name, e)
            items.append(SavedGameInfo(key=key, label=key, saved_at=saved_at))
        return _sort_newest_first(items)

    def load(self, key: str) -> MatchSnapshot:
        path = self._path(key)
        if not path.exists():
            raise SaveNotFound(f"no save named {key!r}")
        try:
            data = path.read_bytes()
        except OSError as e:
            raise StorageUnavailable(f"cannot read {path.name}: {e}") from e
        return load_snapshot(data)

    def save(self, key: str, snapshot: MatchSnapshot) -> None:
        path = self._path(key)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp.write_text(dump_snapshot(snapshot), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            logger.error("Saving %s failed: %s", path.name, e)
            raise StorageUnavailable(f"cannot write {path.name}: {e}") from e
        logger.info("Saved match to %s", path)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if not path.exists():
            raise SaveNotFound(f"no save named {key!r}")
        try:
            path.unlink()
        except OSError as e:
            raise StorageUnavailable(f"cannot delete {path.name}: {e}") from e
