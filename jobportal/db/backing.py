# jobportal/db/backing.py
"""
Persistent key-value backing for the document store.

Every collection lives under one key, "{namespace}_{db_name}_{collection}",
holding the JSON-serialized list of its documents. Backends only know about
opaque strings; BackingStore owns the key scheme and the JSON codec.

Read failures (missing key, corrupt JSON, backend errors) degrade to an empty
collection. Write failures raise StorageWriteError.
"""
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import redis

from jobportal.db.errors import StorageWriteError

logger = logging.getLogger(__name__)

PROBE_KEY = "mongodb_connection_test"


class KeyValueBackend(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryBackend(KeyValueBackend):
    """Process-local backend. Survives Database instances, not the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class FileBackend(KeyValueBackend):
    """One file per key under a directory (the on-disk analogue of browser local storage)."""

    def __init__(self, directory):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        # write to a temp file and rename so a crash never leaves half a collection
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp, self._path(key))
        except Exception:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class RedisBackend(KeyValueBackend):
    """Shared persistent backend on top of a synchronous redis client."""

    def __init__(self, client=None, url: Optional[str] = None):
        if client is None:
            client = redis.Redis.from_url(url or "redis://localhost:6379/0", decode_responses=True)
        self._client = client

    def get(self, key: str) -> Optional[str]:
        val = self._client.get(key)
        if isinstance(val, bytes):
            val = val.decode("utf-8")
        return val

    def set(self, key: str, value: str) -> None:
        self._client.set(key, value)

    def remove(self, key: str) -> None:
        self._client.delete(key)


def _json_default(value: Any):
    # same shape JSON.stringify gives dates; callers re-hydrate them
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class BackingStore:
    def __init__(self, backend: KeyValueBackend, namespace: str = "mongodb"):
        self.backend = backend
        self.namespace = namespace

    def key_for(self, db_name: str, collection: str) -> str:
        return f"{self.namespace}_{db_name}_{collection}"

    def read_collection(self, db_name: str, collection: str) -> List[Dict[str, Any]]:
        key = self.key_for(db_name, collection)
        try:
            raw = self.backend.get(key)
        except Exception as exc:
            logger.warning("Failed to read collection %s: %r", key, exc)
            return []
        if raw is None or raw == "":
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            logger.warning("Failed to load collection %s, treating as empty: %s", key, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Collection %s does not hold a list (%s), treating as empty", key, type(data).__name__)
            return []
        return [d for d in data if isinstance(d, dict)]

    def write_collection(self, db_name: str, collection: str, docs: List[Dict[str, Any]]) -> str:
        """Serialize and store the whole collection; returns the stored JSON."""
        key = self.key_for(db_name, collection)
        try:
            payload = json.dumps(docs, ensure_ascii=False, default=_json_default)
            self.backend.set(key, payload)
        except Exception as exc:
            logger.error("Failed to save collection %s: %r", key, exc)
            raise StorageWriteError(key, exc) from exc
        return payload

    def remove_collection(self, db_name: str, collection: str) -> bool:
        key = self.key_for(db_name, collection)
        try:
            self.backend.remove(key)
            return True
        except Exception as exc:
            logger.warning("Failed to remove collection %s: %r", key, exc)
            return False

    def probe(self) -> bool:
        """Check the backend accepts a write and a removal."""
        try:
            self.backend.set(PROBE_KEY, "test")
            self.backend.remove(PROBE_KEY)
            return True
        except Exception as exc:
            logger.error("Storage probe failed: %r", exc)
            return False
