# jobportal/db/results.py
# Result objects shaped like the ones a Mongo driver hands back.
from enum import Enum


class InsertOneResult:
    def __init__(self, inserted_id: str):
        self.inserted_id = inserted_id

    def __repr__(self):
        return f"InsertOneResult(inserted_id={self.inserted_id!r})"


class DeleteResult:
    def __init__(self, deleted_count: int):
        self.deleted_count = deleted_count

    def __repr__(self):
        return f"DeleteResult(deleted_count={self.deleted_count})"


class ReturnDocument(str, Enum):
    BEFORE = "before"
    AFTER = "after"
