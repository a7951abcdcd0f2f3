import threading
from typing import Any
from cachetools import TTLCache
from .config import settings

class Cache:
    """
    Small TTL cache for responses fetched from external providers.
    The pure core never reads or writes it.

    cachetools caches are not thread-safe and one instance is shared by the
    threadpool serving requests, so every access goes through the lock.
    """
    def __init__(self, maxsize: int = 1024, ttl: float | None = None):
        self._store = TTLCache(maxsize=maxsize, ttl=ttl if ttl is not None else settings.CACHE_TTL_SECONDS)
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._store[key] = value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
