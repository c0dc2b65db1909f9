# services/utils.py
# Shared service helpers
# - store_errors: PyMongoError -> StoreFailure (logged once, not retried)
# - to_public: Mongo document -> JSON-safe dict (_id -> id, ObjectId -> str)
# - missing_fields: presence check used before any write

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Iterable, List, Mapping

from bson import ObjectId
from pymongo.errors import PyMongoError

from recipebook.core.errors import StoreFailure

log = logging.getLogger(__name__)

@contextmanager
def store_errors(action: str):
    try:
        yield
    except PyMongoError:
        log.exception("store failure during %s", action)
        raise StoreFailure()

def to_public(value: Any) -> Any:
    # recursive: embedded snapshots and reviews carry ObjectIds too
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        out = {}
        for k, v in value.items():
            out["id" if k == "_id" else k] = to_public(v)
        return out
    if isinstance(value, list):
        return [to_public(v) for v in value]
    return value

def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False

def missing_fields(payload: Mapping[str, Any], required: Iterable[str]) -> List[str]:
    return [f for f in required if is_missing(payload.get(f))]
