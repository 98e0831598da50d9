# jobportal/utils/timed_cache.py
import time
from typing import Awaitable, Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_MISS = object()


class TimedCache(Generic[K, V]):
    """
    In-process cache whose entries are valid for `ttl` seconds after they
    were stored. `clock` defaults to time.monotonic and can be swapped in tests.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[K, Tuple[float, V]] = {}

    def _lookup(self, key: K):
        entry = self._entries.get(key)
        if entry is None:
            return _MISS
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl:
            del self._entries[key]
            return _MISS
        return value

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        value = self._lookup(key)
        return default if value is _MISS else value

    def __contains__(self, key: K) -> bool:
        return self._lookup(key) is not _MISS

    def set(self, key: K, value: V) -> None:
        self._entries[key] = (self._clock(), value)

    def delete(self, key: K) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_set(self, key: K, factory: Callable[[], Awaitable[V]]) -> V:
        value = self._lookup(key)
        if value is not _MISS:
            return value
        value = await factory()
        self.set(key, value)
        return value
