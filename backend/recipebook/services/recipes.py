# services/recipes.py
# Recipe store: create / get / search / replace / delete.
# Writes validate and resolve references first, then touch the store once.

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from recipebook.core.errors import RecipeNotFound, ValidationError
from recipebook.db.models.schemas import RecipeFilters, RecipeIn
from recipebook.services.criteria import LIST_PROJECTION, compose_criteria, parse_object_id
from recipebook.services.references import resolve_cuisine, resolve_tags
from recipebook.services.utils import missing_fields, store_errors

log = logging.getLogger(__name__)

RECIPES = "recipes"

REQUIRED_FIELDS = (
    "name", "cuisine", "prepTime", "cookTime", "servings",
    "ingredients", "instructions", "tags",
)

async def _build_recipe_doc(db, payload: RecipeIn) -> Dict[str, Any]:
    """
    Validate presence of every field, then embed cuisine/tag snapshots.
    Returns the full set of denormalized fields (no _id, no reviews).
    """
    data = payload.model_dump()
    missing = missing_fields(data, REQUIRED_FIELDS)
    if missing:
        log.info("recipe rejected, missing=%s", missing)
        raise ValidationError("Missing fields required")

    cuisine_doc = await resolve_cuisine(db, payload.cuisine)
    tag_docs = await resolve_tags(db, payload.tags)

    return {
        "name": payload.name,
        "cuisine": cuisine_doc,
        "prepTime": payload.prepTime,
        "cookTime": payload.cookTime,
        "servings": payload.servings,
        "ingredients": [i.model_dump(exclude_none=True) for i in payload.ingredients],
        "instructions": list(payload.instructions),
        "tags": tag_docs,
    }

async def create_recipe(db, payload: RecipeIn) -> str:
    doc = await _build_recipe_doc(db, payload)
    doc["reviews"] = []

    with store_errors("create recipe"):
        result = await db[RECIPES].insert_one(doc)
    log.info("created recipe id=%s name=%r", result.inserted_id, doc["name"])
    return str(result.inserted_id)

async def get_recipe(db, recipe_id: str) -> Dict[str, Any]:
    oid = parse_object_id(recipe_id)
    with store_errors("get recipe"):
        doc = await db[RECIPES].find_one({"_id": oid})
    if not doc:
        raise RecipeNotFound("Sorry, recipe not found")
    return doc

async def search_recipes(db, filters: Optional[RecipeFilters] = None) -> List[Dict[str, Any]]:
    criteria = compose_criteria(filters)
    with store_errors("search recipes"):
        cur = db[RECIPES].find(criteria, dict(LIST_PROJECTION))
        return await cur.to_list(length=None)

async def replace_recipe(db, recipe_id: str, payload: RecipeIn) -> None:
    oid = parse_object_id(recipe_id)
    doc = await _build_recipe_doc(db, payload)

    # reviews are not part of the payload, so $set leaves them alone
    with store_errors("replace recipe"):
        result = await db[RECIPES].update_one({"_id": oid}, {"$set": doc})
    if result.matched_count == 0:
        raise RecipeNotFound()
    log.info("replaced recipe id=%s", oid)

async def delete_recipe(db, recipe_id: str) -> None:
    oid = parse_object_id(recipe_id)
    # embedded reviews go with the document
    with store_errors("delete recipe"):
        result = await db[RECIPES].delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise RecipeNotFound()
    log.info("deleted recipe id=%s", oid)
