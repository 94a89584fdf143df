from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

from .constants import DATA_JSON_PATH, DEFAULT_STORAGE_QUOTA


class StorageError(Exception):
    """A write to the persistence provider failed."""


class QuotaExceededError(StorageError):
    def __init__(self, key: str, needed: int, quota: int):
        super().__init__(f"storage quota exceeded writing {key!r}: {needed} > {quota} bytes")
        self.key = key
        self.needed = needed
        self.quota = quota


def _usage(items: dict[str, str]) -> int:
    return sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in items.items())


class MemoryStorage:
    """Dict-backed key/value storage. Values are strings, as in a browser's localStorage."""

    def __init__(self, quota_bytes: int | None = None):
        self.quota_bytes = quota_bytes
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            pending = dict(self._items)
            pending[key] = value
            needed = _usage(pending)
            if needed > self.quota_bytes:
                raise QuotaExceededError(key, needed, self.quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> Iterator[str]:
        return iter(list(self._items))


class JsonFileStorage(MemoryStorage):
    """All keys in one JSON object on disk; the whole file is rewritten on every change."""

    def __init__(self, path: Path = DATA_JSON_PATH, quota_bytes: int | None = DEFAULT_STORAGE_QUOTA):
        super().__init__(quota_bytes)
        self.path = Path(path)
        self._loaded = False

    def invalidate_cache(self) -> None:
        """Force the next operation to re-read the file from disk."""
        self._loaded = False
        self._items = {}

    def _load(self) -> None:
        if self._loaded:
            return
        self._items = {}
        if self.path.exists():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    raw = json.load(f)
            except (OSError, ValueError) as e:
                raise StorageError(f"could not read {self.path}: {e}") from e
            if isinstance(raw, dict):
                self._items = {str(k): v for k, v in raw.items() if isinstance(v, str)}
        self._loaded = True

    def _flush(self, items: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"could not write {self.path}: {e}") from e

    def get_item(self, key: str) -> str | None:
        self._load()
        return super().get_item(key)

    def set_item(self, key: str, value: str) -> None:
        self._load()
        previous = dict(self._items)
        super().set_item(key, value)
        try:
            self._flush(self._items)
        except StorageError:
            self._items = previous
            raise

    def remove_item(self, key: str) -> None:
        self._load()
        if key in self._items:
            super().remove_item(key)
            self._flush(self._items)

    def clear(self) -> None:
        self._loaded = True
        super().clear()
        self._flush(self._items)

    def keys(self) -> Iterator[str]:
        self._load()
        return super().keys()
