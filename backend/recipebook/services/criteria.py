# services/criteria.py
# Search filters -> Mongo predicate.
# Only supplied filters become clauses; the clauses are ANDed (one dict).
# Free text is escaped, so it is matched literally as a substring.

from __future__ import annotations
import re
from typing import Any, Dict, List, Optional

from bson import ObjectId

from recipebook.core.errors import InvalidIdentifier
from recipebook.db.models.schemas import RecipeFilters

# list/search views only carry these; full detail is for lookup by id
LIST_PROJECTION = {"name": 1, "cuisine": 1, "tags": 1, "prepTime": 1}

def split_list(raw: Optional[str], strip: bool = True) -> List[str]:
    # blank items are always dropped; the rest are trimmed only when asked
    items = [s for s in (raw or "").split(",") if s.strip()]
    return [s.strip() for s in items] if strip else items

def _contains(text: str) -> Dict[str, Any]:
    return {"$regex": re.escape(text.strip()), "$options": "i"}

def compose_criteria(filters: Optional[RecipeFilters] = None) -> Dict[str, Any]:
    f = filters or RecipeFilters()
    criteria: Dict[str, Any] = {}

    tags = split_list(f.tags, strip=False)
    if tags:
        # exact, case-sensitive membership; " vegan" is not "vegan"
        criteria["tags.name"] = {"$in": tags}

    if f.cuisine and f.cuisine.strip():
        criteria["cuisine.name"] = _contains(f.cuisine)

    ingredients = split_list(f.ingredients)
    if ingredients:
        # any stored ingredient name containing any term (case-insensitive)
        criteria["ingredients.name"] = {
            "$in": [re.compile(re.escape(i), re.I) for i in ingredients]
        }

    if f.name and f.name.strip():
        criteria["name"] = _contains(f.name)

    return criteria

def parse_object_id(value: str) -> ObjectId:
    # ObjectId(None) would mint a fresh id, so check the format first
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdentifier("Invalid identifier")
    return ObjectId(value)
