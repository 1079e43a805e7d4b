from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    rows: tuple[Any, ...]
    expires_at: float


class ListingCache:
    """In-memory TTL cache of record lists, keyed by endpoint and query params."""

    def __init__(self, ttl_seconds: float = 20.0, now: Callable[[], float] | None = None) -> None:
        self.ttl_seconds = max(1.0, ttl_seconds)
        self._now = now or time.monotonic
        self._entries: dict[str, CacheEntry] = {}

    @staticmethod
    def key_for(endpoint: str, params: Mapping[str, Any] | None = None) -> str:
        query = "&".join(f"{name}={params[name]}" for name in sorted(params or {}) if params[name] is not None)
        return f"{endpoint}?{query}"

    def get(self, key: str) -> list[Any] | None:
        entry = self._entries.get(key)
        if not entry:
            return None
        if entry.expires_at <= self._now():
            self._entries.pop(key, None)
            return None
        return list(entry.rows)

    def set(self, key: str, rows: list[Any]) -> None:
        self._entries[key] = CacheEntry(rows=tuple(rows), expires_at=self._now() + self.ttl_seconds)

    def get_or_load(
        self,
        endpoint: str,
        loader: Callable[[], list[Any]],
        params: Mapping[str, Any] | None = None,
        force_refresh: bool = False,
    ) -> list[Any]:
        key = self.key_for(endpoint, params)
        if not force_refresh:
            cached = self.get(key)
            if cached is not None:
                return cached
        rows = loader()
        self.set(key, rows)
        return list(rows)

    def invalidate(self, endpoint: str) -> int:
        stale_keys = [key for key in self._entries if key.startswith(f"{endpoint}?")]
        for key in stale_keys:
            self._entries.pop(key, None)
        return len(stale_keys)

    def clear(self) -> None:
        self._entries.clear()
