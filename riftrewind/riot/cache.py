# riot/cache.py – mini-cache des réponses Riot (mémoire du process)

import time
from typing import Any, Dict, Optional, Tuple

FRESHNESS_WINDOW = 300.0  # 5 minutes

# Sentinelle : une réponse JSON peut valoir None / [] légitimement
MISSING = object()


def fingerprint(kind: str, region: str, identifier: str) -> str:
    """Cache key for one logical lookup; the identifier is case-insensitive."""
    return f"{kind}-{region}-{str(identifier).lower()}"


class ResponseCache:
    """
    In-memory cache of decoded API responses with a freshness window.

    Expiry is lazy: a stale entry is reported as missing by `get` but stays
    in the store until `put` overwrites it.
    """

    def __init__(self, ttl: float = FRESHNESS_WINDOW):
        self.ttl = ttl
        self._store: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str, now: Optional[float] = None) -> Any:
        """Return the cached value, or `MISSING` if absent or stale."""
        entry = self._store.get(key)
        if entry is None:
            return MISSING
        value, fetched_at = entry
        now = time.monotonic() if now is None else now
        if now - fetched_at < self.ttl:
            return value
        return MISSING

    def put(self, key: str, value: Any, now: Optional[float] = None) -> None:
        now = time.monotonic() if now is None else now
        self._store[key] = (value, now)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store
