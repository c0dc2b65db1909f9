# Collection indexes, ensured once from app startup via await ensure_indexes()

from recipebook.db.init import get_db

async def ensure_recipe_indexes(db):
    col = db["recipes"]
    await col.create_index([("name", 1)])
    await col.create_index("cuisine.name")
    await col.create_index("tags.name")
    await col.create_index("ingredients.name")

async def ensure_indexes(db=None):
    db = db if db is not None else get_db()

    # canonical reference entities are looked up by exact name
    await db["cuisines"].create_index("name", unique=True)
    await db["tags"].create_index("name", unique=True)

    await db["users"].create_index("email", unique=True)

    await ensure_recipe_indexes(db)
