"""site_markdown.cache: in-memory result cache of the HTTP handler, keyed by ``action:url``."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

__all__ = ("ResultCache", "cache_key")


def cache_key(action: str, url: str) -> str:
    return f"{action}:{url}"


@dataclass(slots=True)
class _Entry:
    value: Any
    expires_at: float


class ResultCache:
    """Dictionary with per-entry expiry. ``ttl <= 0`` disables caching."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry.value

    def put(self, key: str, value: Any) -> None:
        if self.ttl <= 0:
            return
        self._purge()
        self._entries[key] = _Entry(value, self._clock() + self.ttl)

    def _purge(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.expires_at <= now]:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)
