# jobportal/core/config.py
from typing import Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    APP_NAME: str = "MegaJobNepal"

    # Document store
    DB_NAME: str = "megajobnepal"
    # prefix of every persisted key: "{namespace}_{db}_{collection}"
    STORAGE_NAMESPACE: str = "mongodb"
    # 'memory', 'file' or 'redis'
    STORAGE_BACKEND: str = "file"
    STORAGE_DIR: str = ".jobportal_data"
    CONNECT_DELAY_SEC: float = 0.1

    # Redis (only used by the redis backend)
    REDIS_URL: str = "redis://localhost:6379/0"

    # Facade tuning
    CATEGORIES_CACHE_TTL_SEC: float = 30.0
    # unfiltered category reads are capped; None disables the cap
    CATEGORIES_LIST_LIMIT: Optional[int] = 20
    CONNECTION_CACHE_TTL_SEC: float = 5.0
    SETUP_TIMEOUT_SEC: float = 2.0

    # Accounts
    PASSWORD_HASH_ITERATIONS: int = 100_000

    # Pydantic v2 settings: read from .env file
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

# single shared settings instance
settings = Settings()
