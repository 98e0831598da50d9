# jobportal/services/database_service.py
"""
Typed facade over the document store. Application code talks to this class
instead of touching collections directly.

Reads degrade (None / [] / a cached value) so callers can always render;
writes raise, because a lost job posting or application must be visible to
the caller.
"""
import asyncio
import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from jobportal.core.config import Settings, settings as default_settings
from jobportal.db.connection import Connection
from jobportal.db.database import Database
from jobportal.db.query import FilterLike, is_empty
from jobportal.db.store import get_connection
from jobportal.models.application import Application, ApplicationCreate, ApplicationUpdate
from jobportal.models.company import Company, CompanyCreate, CompanyUpdate
from jobportal.models.job import Job, JobCategory, JobCategoryCreate, JobCreate, JobUpdate
from jobportal.models.user import User, UserCreate, UserUpdate
from jobportal.repositories.applications import ApplicationRepository
from jobportal.repositories.base import Clock, utc_now
from jobportal.repositories.companies import CompanyRepository
from jobportal.repositories.jobs import JobCategoryRepository, JobRepository
from jobportal.repositories.users import UserRepository
from jobportal.utils.timed_cache import TimedCache

logger = logging.getLogger(__name__)

# (collection, keys) created by setup_database
INDEX_SPECS: List[Tuple[str, Dict[str, int]]] = [
    ("users", {"email": 1}),
    ("users", {"user_type": 1}),
    ("jobs", {"company_id": 1}),
    ("jobs", {"category_id": 1}),
    ("jobs", {"status": 1}),
    ("companies", {"name": 1}),
    ("applications", {"job_id": 1}),
]

_ALL_CATEGORIES = "all"
_CONNECTION = "connection"


class DatabaseService:
    def __init__(
        self,
        connection: Optional[Connection] = None,
        now: Clock = utc_now,
        cfg: Optional[Settings] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        cfg = cfg or default_settings
        self.connection = connection or get_connection()
        self.users = UserRepository(self.connection, now)
        self.companies = CompanyRepository(self.connection, now)
        self.jobs = JobRepository(self.connection, now)
        self.categories = JobCategoryRepository(self.connection, now)
        self.applications = ApplicationRepository(self.connection, now)

        self._categories_cache: TimedCache[str, List[JobCategory]] = TimedCache(cfg.CATEGORIES_CACHE_TTL_SEC, monotonic)
        self._connection_cache: TimedCache[str, bool] = TimedCache(cfg.CONNECTION_CACHE_TTL_SEC, monotonic)
        self._categories_limit = cfg.CATEGORIES_LIST_LIMIT
        self._setup_timeout = cfg.SETUP_TIMEOUT_SEC

    async def init(self) -> Database:
        return await self.connection.get_db()

    # User operations
    async def create_user(self, user: Union[UserCreate, Mapping[str, Any]]) -> User:
        return await self.users.create(user)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.users.get_by_email(email)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return await self.users.get_by_id(user_id)

    async def update_user(self, user_id: str, updates: Union[UserUpdate, Mapping[str, Any]]) -> Optional[User]:
        return await self.users.update(user_id, updates)

    # Company operations
    async def create_company(self, company: Union[CompanyCreate, Mapping[str, Any]]) -> Company:
        return await self.companies.create(company)

    async def get_companies(self, filter: FilterLike = None) -> List[Company]:
        return await self.companies.find(filter)

    async def get_company_by_id(self, company_id: str) -> Optional[Company]:
        return await self.companies.get_by_id(company_id)

    async def update_company(
        self, company_id: str, updates: Union[CompanyUpdate, Mapping[str, Any]]
    ) -> Optional[Company]:
        return await self.companies.update(company_id, updates)

    # Job operations
    async def create_job(self, job: Union[JobCreate, Mapping[str, Any]]) -> Job:
        return await self.jobs.create(job)

    async def get_jobs(
        self, filter: FilterLike = None, limit: Optional[int] = None, skip: Optional[int] = None
    ) -> List[Job]:
        return await self.jobs.find(filter, limit=limit, skip=skip)

    async def get_job_by_id(self, job_id: str) -> Optional[Job]:
        return await self.jobs.get_by_id(job_id)

    async def update_job(self, job_id: str, updates: Union[JobUpdate, Mapping[str, Any]]) -> Optional[Job]:
        return await self.jobs.update(job_id, updates)

    async def delete_job(self, job_id: str) -> bool:
        return await self.jobs.delete(job_id)

    # Job category operations
    async def create_job_category(self, category: Union[JobCategoryCreate, Mapping[str, Any]]) -> JobCategory:
        return await self.categories.create(category)

    async def _load_all_categories(self) -> List[JobCategory]:
        coll = await self.categories.collection()
        cursor = coll.find({})
        if self._categories_limit:
            cursor = cursor.limit(self._categories_limit)
        return [self.categories.to_model(d) for d in await cursor.to_list()]

    async def get_job_categories(self, filter: FilterLike = None) -> List[JobCategory]:
        """
        The unfiltered list is cached for CATEGORIES_CACHE_TTL_SEC and is not
        invalidated by writes: categories are near-static reference data.
        """
        if not is_empty(filter):
            return await self.categories.find(filter)
        try:
            cached = await self._categories_cache.get_or_set(_ALL_CATEGORIES, self._load_all_categories)
        except Exception:
            logger.exception("Error fetching job categories")
            return []
        # callers get their own copies; the cached list is shared
        return [c.model_copy(deep=True) for c in cached]

    async def get_job_category_by_id(self, category_id: str) -> Optional[JobCategory]:
        return await self.categories.get_by_id(category_id)

    # Application operations
    async def create_application(self, application: Union[ApplicationCreate, Mapping[str, Any]]) -> Application:
        return await self.applications.create(application)

    async def get_applications(self, filter: FilterLike = None) -> List[Application]:
        return await self.applications.find(filter)

    async def update_application(
        self, application_id: str, updates: Union[ApplicationUpdate, Mapping[str, Any]]
    ) -> Optional[Application]:
        return await self.applications.update(application_id, updates)

    # Utility methods
    async def _probe_connection(self) -> bool:
        try:
            if not self.connection.backing.probe():
                return False
            await self.init()
            return True
        except Exception:
            logger.exception("Document store connection check failed")
            return False

    async def check_connection(self) -> bool:
        # failures are cached too, so a broken backend is not hammered
        return await self._connection_cache.get_or_set(_CONNECTION, self._probe_connection)

    async def _create_index_safely(self, collection: str, keys: Dict[str, int]) -> Optional[str]:
        try:
            db = await self.init()
            return await db.collection(collection).create_index(keys)
        except Exception as exc:
            logger.warning("Failed to create index %s on %s: %r", keys, collection, exc)
            return None

    async def setup_database(self) -> None:
        """
        Idempotent first-run setup. Never raises: a failing index is logged and
        skipped, and a batch that outlives SETUP_TIMEOUT_SEC is abandoned with
        a warning.
        """
        logger.info("Starting database setup...")
        try:
            await self.init()
            await asyncio.wait_for(
                asyncio.gather(*(self._create_index_safely(name, keys) for name, keys in INDEX_SPECS)),
                timeout=self._setup_timeout,
            )
            logger.info("Database setup completed")
        except asyncio.TimeoutError:
            logger.warning("Database setup completed with warnings: index creation timed out after %ss", self._setup_timeout)
        except Exception as exc:
            logger.warning("Database setup completed with warnings: %r", exc)
