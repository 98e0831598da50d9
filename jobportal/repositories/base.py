# jobportal/repositories/base.py
"""
Generic typed CRUD over one collection of the document store.

Entity repositories only pick the collection, the pydantic models and the
name of the creation timestamp; id stamping, timestamps and the id-or-_id
lookup live here once.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from jobportal.db.collection import Collection
from jobportal.db.connection import Connection
from jobportal.db.query import FilterLike, by_id
from jobportal.db.results import ReturnDocument
from jobportal.models.base import CreateModel, DocumentModel, UpdateModel
from jobportal.utils.ids import generate_id

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=DocumentModel)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Repository(Generic[T]):
    collection_name: str
    model: Type[T]
    create_model: Type[CreateModel]
    update_model: Optional[Type[UpdateModel]] = None
    created_field: str = "created_at"

    def __init__(self, connection: Connection, now: Clock = utc_now):
        self.connection = connection
        self._now = now

    @property
    def protected_fields(self):
        return {"id", "_id", self.created_field}

    async def collection(self) -> Collection:
        db = await self.connection.get_db()
        return db.collection(self.collection_name)

    def to_model(self, doc: Optional[Dict[str, Any]]) -> Optional[T]:
        if doc is None:
            return None
        try:
            return self.model.model_validate(doc)
        except ValidationError as exc:
            # legacy documents still render; they are just not validated
            logger.warning("Document %s in %s failed validation: %s", doc.get("id"), self.collection_name, exc)
            return self.model.model_construct(**doc)

    async def create(self, data: Union[CreateModel, Mapping[str, Any]]) -> T:
        payload = data if isinstance(data, CreateModel) else self.create_model.model_validate(dict(data))
        doc = {k: v for k, v in payload.to_document().items() if k not in self.protected_fields}
        stamp = self._now().isoformat()
        doc["id"] = generate_id()
        doc[self.created_field] = stamp
        doc["updated_at"] = stamp

        coll = await self.collection()
        result = await coll.insert_one(doc)
        doc["_id"] = result.inserted_id
        return self.to_model(doc)

    async def get_by_id(self, doc_id: str) -> Optional[T]:
        coll = await self.collection()
        return self.to_model(await coll.find_one(by_id(doc_id)))

    async def find_one(self, filter: FilterLike) -> Optional[T]:
        coll = await self.collection()
        return self.to_model(await coll.find_one(filter))

    async def find(self, filter: FilterLike = None, limit: Optional[int] = None, skip: Optional[int] = None) -> List[T]:
        try:
            coll = await self.collection()
            cursor = coll.find(filter or {})
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list()
        except Exception:
            logger.exception("Error fetching %s", self.collection_name)
            return []
        return [self.to_model(d) for d in docs]

    async def update(self, doc_id: str, updates: Union[UpdateModel, Mapping[str, Any]]) -> Optional[T]:
        if isinstance(updates, UpdateModel):
            changes = updates.changes()
        elif self.update_model is not None:
            changes = self.update_model.model_validate(dict(updates)).changes()
        else:
            changes = dict(updates)
        changes = {k: v for k, v in changes.items() if k not in self.protected_fields}
        changes["updated_at"] = self._now().isoformat()

        coll = await self.collection()
        doc = await coll.find_one_and_update(
            by_id(doc_id),
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        return self.to_model(doc)

    async def delete(self, doc_id: str) -> bool:
        coll = await self.collection()
        result = await coll.delete_one(by_id(doc_id))
        return result.deleted_count > 0
