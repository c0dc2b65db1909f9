# services/reviews.py
# Reviews embedded in recipes.reviews, addressed by reviewId.
#
# The array is scanned in application code to find the target index; the write
# is then a single-document update guarded on that index still holding the
# same reviewId, so a concurrent removal can never make us overwrite a sibling.

from __future__ import annotations
import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId

from recipebook.core.errors import NotFound, RecipeNotFound, ReviewNotFound, ValidationError
from recipebook.db.models.schemas import ReviewIn
from recipebook.services.criteria import parse_object_id
from recipebook.services.recipes import RECIPES
from recipebook.services.utils import missing_fields, store_errors

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user", "rating", "comment")

# ------------------------------
# pure helpers over the review sequence
# ------------------------------

def find_review_index(reviews: List[Dict[str, Any]], review_id: ObjectId) -> Optional[int]:
    for i, r in enumerate(reviews or []):
        if r.get("reviewId") == review_id:
            return i
    return None

def build_review(payload: ReviewIn) -> Dict[str, Any]:
    data = payload.model_dump()
    if missing_fields(data, REQUIRED_FIELDS):
        raise ValidationError("Missing required fields")
    try:
        rating = float(payload.rating)
    except (TypeError, ValueError):
        raise ValidationError("Rating must be a number")
    if not math.isfinite(rating):
        # nan/inf would be stored but can never be rendered as JSON
        raise ValidationError("Rating must be a number")

    return {
        "reviewId": ObjectId(),
        "user": payload.user,
        "rating": rating,
        "comment": payload.comment,
        "date": datetime.utcnow(),
    }

# ------------------------------
# store operations
# ------------------------------

async def _load_reviews(db, recipe_oid: ObjectId) -> Optional[List[Dict[str, Any]]]:
    with store_errors("load reviews"):
        doc = await db[RECIPES].find_one({"_id": recipe_oid}, {"reviews": 1})
    if doc is None:
        return None
    return doc.get("reviews") or []

async def add_review(db, recipe_id: str, payload: ReviewIn) -> str:
    recipe_oid = parse_object_id(recipe_id)
    review = build_review(payload)

    with store_errors("add review"):
        result = await db[RECIPES].update_one(
            {"_id": recipe_oid},
            {"$push": {"reviews": review}},
        )
    if result.matched_count == 0:
        raise RecipeNotFound()
    log.info("added review id=%s recipe=%s", review["reviewId"], recipe_oid)
    return str(review["reviewId"])

async def update_review(db, recipe_id: str, review_id: str, payload: ReviewIn) -> None:
    """
    Replace one review wholesale (same reviewId, fresh date).
    Recipe missing and review missing are one combined NotFound.
    """
    review = build_review(payload)
    try:
        recipe_oid = parse_object_id(recipe_id)
        review_oid = parse_object_id(review_id)
    except NotFound:
        raise NotFound("Recipe or review not found")
    review["reviewId"] = review_oid

    reviews = await _load_reviews(db, recipe_oid)
    idx = find_review_index(reviews or [], review_oid)
    if idx is None:
        raise NotFound("Recipe or review not found")

    with store_errors("update review"):
        result = await db[RECIPES].update_one(
            {"_id": recipe_oid, f"reviews.{idx}.reviewId": review_oid},
            {"$set": {f"reviews.{idx}": review}},
        )
    if result.matched_count == 0:
        # the element moved or vanished between read and write
        raise NotFound("Recipe or review not found")
    log.info("updated review id=%s recipe=%s", review_oid, recipe_oid)

async def delete_review(db, recipe_id: str, review_id: str) -> None:
    recipe_oid = parse_object_id(recipe_id)
    try:
        review_oid = parse_object_id(review_id)
    except NotFound:
        review_oid = None

    reviews = await _load_reviews(db, recipe_oid)
    if reviews is None:
        raise RecipeNotFound()
    if review_oid is None or find_review_index(reviews, review_oid) is None:
        raise ReviewNotFound()

    with store_errors("delete review"):
        result = await db[RECIPES].update_one(
            {"_id": recipe_oid},
            {"$pull": {"reviews": {"reviewId": review_oid}}},
        )
    if result.matched_count == 0:
        raise RecipeNotFound()
    if result.modified_count == 0:
        raise ReviewNotFound()
    log.info("deleted review id=%s recipe=%s", review_oid, recipe_oid)
