# jobportal/db/errors.py
"""Exceptions raised by the document store.

Read paths catch these and degrade (None / empty results); write paths let
them propagate so callers can report and retry.
"""


class StoreError(Exception):
    """Base class for document store failures."""


class StorageWriteError(StoreError):
    """A collection could not be serialized or written to the backend."""

    def __init__(self, key: str, cause: Exception):
        super().__init__(f"Failed to persist '{key}': {cause!r}")
        self.key = key
        self.cause = cause


class DuplicateKeyError(StoreError):
    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"Document with id '{doc_id}' already exists in '{collection}'")
        self.collection = collection
        self.doc_id = doc_id


class InvalidFilterError(StoreError, ValueError):
    """Filter document the matcher cannot interpret (e.g. non-list $or)."""


class InvalidUpdateError(StoreError, ValueError):
    """Update document other than a plain $set, or one that rewrites an id."""
