# jobportal/db/connection.py
import asyncio
import logging
from typing import Optional

from jobportal.db.backing import BackingStore
from jobportal.db.database import Database

logger = logging.getLogger(__name__)


class Connection:
    """
    Lazily opens one Database for a logical database name.

    The first caller of connect() pays the (simulated) connect delay and the
    hydration from the backing store; every later caller gets the same
    Database until close() drops it.
    """

    def __init__(self, backing: BackingStore, db_name: str, connect_delay: float = 0.0):
        self.backing = backing
        self.db_name = db_name
        self.connect_delay = connect_delay
        self._db: Optional[Database] = None
        self._lock: Optional[asyncio.Lock] = None

    @property
    def connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> Database:
        if self._db is not None:
            return self._db
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            if self._db is None:
                logger.info("Connecting to document store %s (namespace=%s)", self.db_name, self.backing.namespace)
                if self.connect_delay:
                    await asyncio.sleep(self.connect_delay)
                self._db = Database(self.backing, self.db_name)
                logger.info("Connected to document store %s", self.db_name)
        return self._db

    async def get_db(self) -> Database:
        if self._db is None:
            return await self.connect()
        return self._db

    async def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None
            logger.info("Document store connection %s closed", self.db_name)
