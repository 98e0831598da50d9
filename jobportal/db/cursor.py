# jobportal/db/cursor.py
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class Cursor:
    """
    Deferred view over a query result.

    The result list is copied when the cursor is built, so later writes to the
    collection do not show through. skip()/limit() only record settings (the
    last call wins); nothing is sliced until to_list() or async iteration.
    """

    def __init__(self, items: Optional[Iterable[Dict[str, Any]]]):
        self._items: List[Dict[str, Any]] = list(items) if items is not None else []
        self._skip = 0
        self._limit: Optional[int] = None
        self._buffer: Optional[List[Dict[str, Any]]] = None
        self._index = 0

    def skip(self, n: int) -> "Cursor":
        self._skip = max(0, int(n))
        return self

    def limit(self, n: int) -> "Cursor":
        self._limit = max(1, int(n))
        return self

    def _materialize(self) -> List[Dict[str, Any]]:
        result = self._items[self._skip:]
        if self._limit is not None:
            result = result[: self._limit]
        return result

    async def to_list(self) -> List[Dict[str, Any]]:
        try:
            return self._materialize()
        except Exception:
            logger.exception("Error in cursor to_list")
            return []

    def __aiter__(self):
        self._buffer = None
        self._index = 0
        return self

    async def __anext__(self) -> Dict[str, Any]:
        if self._buffer is None:
            self._buffer = await self.to_list()
        if self._index >= len(self._buffer):
            raise StopAsyncIteration
        item = self._buffer[self._index]
        self._index += 1
        await asyncio.sleep(0)
        return item
