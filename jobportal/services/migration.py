# jobportal/services/migration.py
"""
Snapshot export/import for moving a store's contents elsewhere (another
backend, another machine, a real MongoDB via mongoimport).

Snapshot format:
    {"database": "<db name>", "exported_at": "<iso>",
     "collections": {"<name>": [<documents in storage order>]}}
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from jobportal.db.database import Database
from jobportal.utils.ids import generate_id

logger = logging.getLogger(__name__)


def _with_ids(doc: Dict[str, Any]) -> Dict[str, Any]:
    # documents exported by a real driver may only carry _id
    doc_id = doc.get("id") or doc.get("_id") or generate_id()
    return {**doc, "id": str(doc_id), "_id": str(doc_id)}


def export_snapshot(db: Database, names: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    names = list(names) if names is not None else db.list_collection_names()
    collections = {}
    total = 0
    for name in names:
        docs = [dict(d) for d in db.get_collection_data(name)]
        if docs:
            collections[name] = docs
            total += len(docs)
    logger.info("Exported %s documents from %s collections of %s", total, len(collections), db.name)
    return {
        "database": db.name,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "collections": collections,
    }


def import_snapshot(db: Database, snapshot: Dict[str, Any], replace: bool = False) -> Dict[str, int]:
    """
    Load a snapshot into `db`. With replace=False documents are appended,
    skipping ids the collection already holds. Returns imported counts.
    """
    collections = snapshot.get("collections")
    if not isinstance(collections, dict):
        raise ValueError("snapshot has no 'collections' mapping")

    imported: Dict[str, int] = {}
    for name, docs in collections.items():
        if not isinstance(docs, list):
            logger.warning("Skipping collection %s: expected a list, got %s", name, type(docs).__name__)
            continue
        incoming = [_with_ids(d) for d in docs if isinstance(d, dict)]
        if replace:
            merged = incoming
            added = len(incoming)
        else:
            existing = db.get_collection_data(name)
            seen = {d.get("id") for d in existing}
            fresh = [d for d in incoming if d["id"] not in seen]
            merged = existing + fresh
            added = len(fresh)
        db.set_collection_data(name, merged)
        imported[name] = added
    logger.info("Imported snapshot into %s: %s", db.name, imported)
    return imported
