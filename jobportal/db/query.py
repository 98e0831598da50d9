# jobportal/db/query.py
"""
Filter model and matcher for the document store.

Only two kinds of clause exist:

- Eq(field, value): strict equality on a top-level field, no coercion
- Or(alternatives): holds when any alternative filter matches

A Filter is the implicit AND of its clauses. Raw Mongo-style dicts are parsed
with parse_filter(); "$or" is the only key with special meaning, every other
key (including ones that look like operators or dotted paths) is a plain
field name.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from jobportal.db.errors import InvalidFilterError

OR_KEY = "$or"

_MISSING = object()


@dataclass(frozen=True)
class Eq:
    field: str
    value: Any


@dataclass(frozen=True)
class Or:
    alternatives: Tuple["Filter", ...]


@dataclass(frozen=True)
class Filter:
    clauses: Tuple[Union[Eq, Or], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.clauses


Query = Union[Filter, Eq, Or]
FilterLike = Optional[Union[Query, Mapping[str, Any]]]


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def parse_filter(raw: Optional[Mapping[str, Any]]) -> Filter:
    if raw is None:
        return Filter()
    if not isinstance(raw, Mapping):
        raise InvalidFilterError(f"filter must be a mapping, got {type(raw).__name__}")
    clauses = []
    for key, value in raw.items():
        if key == OR_KEY:
            if not isinstance(value, (list, tuple)):
                raise InvalidFilterError(f"$or expects a list of filters, got {type(value).__name__}")
            clauses.append(Or(tuple(parse_filter(sub) for sub in value)))
        else:
            clauses.append(Eq(key, _plain(value)))
    return Filter(tuple(clauses))


def as_filter(query: FilterLike) -> Filter:
    if isinstance(query, Filter):
        return query
    if isinstance(query, (Eq, Or)):
        return Filter((query,))
    return parse_filter(query)


def strict_equal(a: Any, b: Any) -> bool:
    # booleans never equal numbers, unlike Python's default 1 == True
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if type(a) is not type(b):
        return False
    # lists and dicts compare by value; stored documents are decoded JSON,
    # so there is no object identity to compare
    return a == b


def matches(doc: Dict[str, Any], query: Query) -> bool:
    if isinstance(query, Eq):
        actual = doc.get(query.field, _MISSING)
        if actual is _MISSING:
            return False
        return strict_equal(actual, _plain(query.value))
    if isinstance(query, Or):
        return any(matches(doc, alt) for alt in query.alternatives)
    return all(matches(doc, clause) for clause in query.clauses)


def by_id(doc_id: str) -> Filter:
    """{"$or": [{"id": doc_id}, {"_id": doc_id}]}"""
    return Filter((Or((Filter((Eq("id", doc_id),)), Filter((Eq("_id", doc_id),)))),))


def is_empty(query: FilterLike) -> bool:
    if query is None:
        return True
    if isinstance(query, Filter):
        return query.is_empty
    if isinstance(query, Mapping):
        return len(query) == 0
    return False
