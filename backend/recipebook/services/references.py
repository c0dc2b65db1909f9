# services/references.py
# Resolves client-supplied cuisine/tag names to canonical documents and returns
# value copies of them for embedding (snapshots, not live references).
#   cuisine: strict  -> unknown name fails the write
#   tags:    lenient -> unknown names are dropped

from __future__ import annotations
import copy
import logging
from typing import Any, Dict, Iterable, List

from recipebook.core.errors import InvalidReference
from recipebook.services.utils import store_errors

log = logging.getLogger(__name__)

def snapshot(doc: Dict[str, Any]) -> Dict[str, Any]:
    return copy.deepcopy(dict(doc))

async def resolve_cuisine(db, name: str) -> Dict[str, Any]:
    with store_errors("resolve cuisine"):
        doc = await db["cuisines"].find_one({"name": name})
    if not doc:
        log.info("cuisine not found: %r", name)
        raise InvalidReference("Invalid cuisine")
    return snapshot(doc)

async def resolve_tags(db, names: Iterable[str]) -> List[Dict[str, Any]]:
    wanted = list(dict.fromkeys(n for n in (names or []) if isinstance(n, str) and n))
    if not wanted:
        return []

    with store_errors("resolve tags"):
        docs = await db["tags"].find({"name": {"$in": wanted}}).to_list(length=None)

    if len(docs) < len(wanted):
        found = {d.get("name") for d in docs}
        log.debug("dropping unknown tags: %s", [n for n in wanted if n not in found])
    return [snapshot(d) for d in docs]
