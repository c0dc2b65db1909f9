# scripts/seed_references.py
# Seeds canonical cuisines/tags (recipes only ever look these up by name).
# Usage: python -m recipebook.scripts.seed_references --cuisines Italian,Japanese --tags quick,vegan
import argparse
import asyncio
import logging
from typing import Dict, Iterable, List

from recipebook.core.config import settings
from recipebook.db.indexes import ensure_indexes
from recipebook.db.init import close_db, init_db

log = logging.getLogger(__name__)

def _unique_names(names: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(n.strip() for n in names if n and n.strip()))

async def _upsert_names(coll, names: Iterable[str]) -> int:
    inserted = 0
    for n in _unique_names(names):
        res = await coll.update_one({"name": n}, {"$setOnInsert": {"name": n}}, upsert=True)
        if res.upserted_id is not None:
            inserted += 1
    return inserted

async def seed_references(db, cuisines: Iterable[str] = (), tags: Iterable[str] = ()) -> Dict[str, int]:
    """Idempotent: existing names are left as they are. Returns how many were new."""
    return {
        "cuisines": await _upsert_names(db["cuisines"], cuisines),
        "tags": await _upsert_names(db["tags"], tags),
    }

def _split(raw: str) -> List[str]:
    return [s.strip() for s in (raw or "").split(",") if s.strip()]

async def main(cuisines: List[str], tags: List[str]):
    db = await init_db()
    try:
        await ensure_indexes(db)
        res = await seed_references(db, cuisines, tags)
        log.info("[seed] upserted cuisines=%d tags=%d", res["cuisines"], res["tags"])
    finally:
        await close_db()

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    parser = argparse.ArgumentParser(description="seed canonical cuisines and tags")
    parser.add_argument("--cuisines", default="", help="comma list")
    parser.add_argument("--tags", default="", help="comma list")
    args = parser.parse_args()
    asyncio.run(main(_split(args.cuisines), _split(args.tags)))
