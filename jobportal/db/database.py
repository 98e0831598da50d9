# jobportal/db/database.py
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from jobportal.db.backing import BackingStore
from jobportal.db.collection import Collection

logger = logging.getLogger(__name__)

DEFAULT_COLLECTIONS = ("users", "companies", "jobs", "job_categories", "applications")


class Database:
    """
    Root of the document store for one logical database name.

    Holds the in-memory list of every collection and is the only component
    that talks to the BackingStore. Two Database objects over the same
    namespace and name overwrite each other's writes; keep one per process
    (see jobportal.db.connection.Connection).
    """

    def __init__(self, backing: BackingStore, name: str, collections: Iterable[str] = DEFAULT_COLLECTIONS):
        self.backing = backing
        self.name = name
        self._collections: Dict[str, List[Dict[str, Any]]] = {}
        self._closed = False
        for coll in collections:
            self._hydrate(coll)

    def __getitem__(self, name: str) -> Collection:
        return self.collection(name)

    def _hydrate(self, name: str) -> List[Dict[str, Any]]:
        data = self.backing.read_collection(self.name, name)
        self._collections[name] = data
        return data

    def collection(self, name: str) -> Collection:
        if name not in self._collections:
            self._hydrate(name)
        return Collection(name, self)

    def list_collection_names(self) -> List[str]:
        return list(self._collections)

    def get_collection_data(self, name: str) -> List[Dict[str, Any]]:
        data = self._collections.get(name)
        if data is None:
            data = self._hydrate(name)
        return data

    def set_collection_data(self, name: str, data: Optional[List[Dict[str, Any]]]) -> None:
        data = list(data) if isinstance(data, list) else []
        # storage first: a failed write raises and leaves memory untouched.
        # Memory then holds exactly what a reload would read back.
        payload = self.backing.write_collection(self.name, name, data)
        self._collections[name] = json.loads(payload)

    def drop_collection(self, name: str) -> bool:
        self._collections.pop(name, None)
        logger.info("Dropping collection %s.%s", self.name, name)
        return self.backing.remove_collection(self.name, name)

    def ping(self) -> Dict[str, int]:
        return {"ok": 1 if self.backing.probe() else 0}

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Drop in-memory state. Persisted collections are left as they are."""
        self._collections.clear()
        self._closed = True
