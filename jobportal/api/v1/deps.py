# jobportal/api/v1/deps.py
from functools import lru_cache

from jobportal.services.database_service import DatabaseService


@lru_cache()
def get_service() -> DatabaseService:
    """
    Returns the process-wide facade bound to the default store connection.
    Tests override this dependency with a service over an isolated store.
    """
    return DatabaseService()
