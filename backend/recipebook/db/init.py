# db/init.py
# Process-wide motor handle.
# main.py opens it on startup and closes it on shutdown; routers receive it
# through Depends(get_db), and tests override that dependency.

from __future__ import annotations
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from recipebook.core.config import settings

log = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None

async def init_db(uri: Optional[str] = None, name: Optional[str] = None) -> AsyncIOMotorDatabase:
    """
    Connect and verify with a ping. The handle is only published once the
    ping succeeds, so a retrying caller never gets an unverified database.
    """
    global _client, _db
    if _db is not None:
        return _db

    client = AsyncIOMotorClient(uri or settings.MONGO_URI)
    database = client[name or settings.MONGO_DB]
    try:
        await database.command("ping")
    except Exception:
        client.close()
        raise

    _client, _db = client, database
    log.info("connected to mongo db=%s", database.name)
    return _db

def get_db() -> AsyncIOMotorDatabase:
    if _db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return _db

async def close_db() -> None:
    # safe to call more than once
    global _client, _db
    client, _client, _db = _client, None, None
    if client is not None:
        client.close()
