# jobportal/db/store.py
from typing import Optional

from jobportal.core.config import Settings, settings as default_settings
from jobportal.db.backing import BackingStore, FileBackend, KeyValueBackend, MemoryBackend, RedisBackend
from jobportal.db.connection import Connection
from jobportal.db.database import Database

_connection: Optional[Connection] = None


def build_backend(cfg: Settings) -> KeyValueBackend:
    kind = (cfg.STORAGE_BACKEND or "file").lower()
    if kind == "memory":
        return MemoryBackend()
    if kind == "file":
        return FileBackend(cfg.STORAGE_DIR)
    if kind == "redis":
        return RedisBackend(url=cfg.REDIS_URL)
    raise RuntimeError(f"Unknown STORAGE_BACKEND {cfg.STORAGE_BACKEND!r} (expected memory, file or redis)")


def build_connection(cfg: Optional[Settings] = None, backend: Optional[KeyValueBackend] = None) -> Connection:
    cfg = cfg or default_settings
    backing = BackingStore(backend or build_backend(cfg), namespace=cfg.STORAGE_NAMESPACE)
    return Connection(backing, cfg.DB_NAME, connect_delay=cfg.CONNECT_DELAY_SEC)


def get_connection() -> Connection:
    """
    Returns the process-wide connection, built from settings on first use.
    """
    global _connection
    if _connection is None:
        _connection = build_connection()
    return _connection


async def get_db() -> Database:
    return await get_connection().get_db()


async def close_db() -> None:
    global _connection
    if _connection is not None:
        await _connection.close()
        _connection = None
