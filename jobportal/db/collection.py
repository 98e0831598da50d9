# jobportal/db/collection.py
"""
Collection API of the document store, shaped after the async Mongo drivers.

Every call works on the in-memory list owned by the Database and writes the
whole list back through Database.set_collection_data() before returning.
Reads never raise (failures become None / an empty cursor, with a warning).
Writes raise StoreError subclasses, StorageWriteError included.

There is no locking across calls: two coroutines that both read the list
before either writes it race, and the last full-list write wins.
"""
import copy
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from jobportal.db.cursor import Cursor
from jobportal.db.errors import DuplicateKeyError, InvalidUpdateError
from jobportal.db.query import Filter, FilterLike, as_filter, matches
from jobportal.db.results import DeleteResult, InsertOneResult, ReturnDocument
from jobportal.utils.ids import generate_id

if TYPE_CHECKING:
    from jobportal.db.database import Database

logger = logging.getLogger(__name__)

ID_FIELDS = ("id", "_id")
SET_OPERATOR = "$set"

IndexKeys = Union[str, Mapping[str, Any], Sequence[Tuple[str, Any]]]


def _index_name(keys: IndexKeys) -> str:
    if isinstance(keys, str):
        pairs = [(keys, 1)]
    elif isinstance(keys, Mapping):
        pairs = list(keys.items())
    else:
        pairs = list(keys)
    return "_".join(f"{field}_{direction}" for field, direction in pairs)


def _set_fields(update: Any) -> Dict[str, Any]:
    if not isinstance(update, Mapping):
        raise InvalidUpdateError(f"update must be a mapping, got {type(update).__name__}")
    unsupported = [k for k in update if k != SET_OPERATOR]
    if unsupported:
        raise InvalidUpdateError(f"unsupported update operators: {', '.join(map(str, unsupported))}")
    fields = update.get(SET_OPERATOR)
    if not isinstance(fields, Mapping):
        raise InvalidUpdateError("update requires a $set mapping")
    return dict(fields)


class Collection:
    def __init__(self, name: str, database: "Database"):
        self.name = name
        self._db = database

    def __repr__(self):
        return f"Collection({self._db.name!r}, {self.name!r})"

    def _data(self) -> List[Dict[str, Any]]:
        return self._db.get_collection_data(self.name)

    @staticmethod
    def _index_of(data: List[Dict[str, Any]], query: Filter) -> Optional[int]:
        for i, doc in enumerate(data):
            if matches(doc, query):
                return i
        return None

    async def insert_one(self, doc: Mapping[str, Any]) -> InsertOneResult:
        if not isinstance(doc, Mapping):
            raise TypeError(f"document must be a mapping, got {type(doc).__name__}")
        data = self._data()
        taken = {str(d.get(f)) for d in data for f in ID_FIELDS if d.get(f) is not None}

        doc_id = doc.get("id")
        if doc_id is not None:
            doc_id = str(doc_id)
            if doc_id in taken:
                raise DuplicateKeyError(self.name, doc_id)
        else:
            doc_id = generate_id()
            while doc_id in taken:
                doc_id = generate_id()

        new_doc = copy.deepcopy(dict(doc))
        new_doc["id"] = doc_id
        new_doc["_id"] = doc_id
        self._db.set_collection_data(self.name, data + [new_doc])
        return InsertOneResult(doc_id)

    async def find_one(self, filter: FilterLike = None) -> Optional[Dict[str, Any]]:
        try:
            query = as_filter(filter)
            data = self._data()
            index = self._index_of(data, query)
            return copy.deepcopy(data[index]) if index is not None else None
        except Exception as exc:
            logger.warning("find_one on %s failed, returning None: %r", self.name, exc)
            return None

    def find(self, filter: FilterLike = None) -> Cursor:
        try:
            query = as_filter(filter)
            data = self._data()
            if query.is_empty:
                found = data
            else:
                found = [d for d in data if matches(d, query)]
            return Cursor(copy.deepcopy(found))
        except Exception as exc:
            logger.warning("find on %s failed, returning empty cursor: %r", self.name, exc)
            return Cursor([])

    async def count_documents(self, filter: FilterLike = None) -> int:
        try:
            query = as_filter(filter)
            return sum(1 for d in self._data() if matches(d, query))
        except Exception as exc:
            logger.warning("count_documents on %s failed: %r", self.name, exc)
            return 0

    async def find_one_and_update(
        self,
        filter: FilterLike,
        update: Mapping[str, Any],
        return_document: Union[ReturnDocument, str] = ReturnDocument.AFTER,
    ) -> Optional[Dict[str, Any]]:
        """
        Apply update["$set"] to the first match. Each named field is replaced
        wholesale; nested objects are not merged. A miss returns None and
        writes nothing.
        """
        return_document = ReturnDocument(return_document)
        fields = _set_fields(update)
        query = as_filter(filter)
        data = self._data()
        index = self._index_of(data, query)
        if index is None:
            return None

        before = data[index]
        for f in ID_FIELDS:
            if f in fields and fields[f] != before.get(f):
                raise InvalidUpdateError(f"'{f}' cannot be changed once assigned")
        after = dict(before)
        after.update(copy.deepcopy(fields))

        new_data = list(data)
        new_data[index] = after
        self._db.set_collection_data(self.name, new_data)
        if return_document is ReturnDocument.BEFORE:
            return copy.deepcopy(before)
        return copy.deepcopy(self._data()[index])

    async def delete_one(self, filter: FilterLike) -> DeleteResult:
        try:
            query = as_filter(filter)
            data = self._data()
            index = self._index_of(data, query)
        except Exception as exc:
            logger.warning("delete_one on %s failed, nothing deleted: %r", self.name, exc)
            return DeleteResult(0)
        if index is None:
            return DeleteResult(0)
        self._db.set_collection_data(self.name, data[:index] + data[index + 1:])
        return DeleteResult(1)

    async def create_index(self, keys: IndexKeys, **options) -> str:
        # indexes are recorded in the log only; queries always scan
        name = options.get("name") or _index_name(keys)
        logger.info("Created index %s on %s (options=%s)", name, self.name, options or {})
        return name
