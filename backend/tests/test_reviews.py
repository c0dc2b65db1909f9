from __future__ import annotations

from datetime import datetime

import pytest
from bson import ObjectId

from conftest import run
from recipebook.core.errors import ValidationError
from recipebook.db.models.schemas import ReviewIn
from recipebook.services.reviews import build_review, find_review_index


def _add(client, recipe_id, user="ann", rating=4, comment="good"):
    resp = client.post(f"/recipes/{recipe_id}/reviews", json={"user": user, "rating": rating, "comment": comment})
    assert resp.status_code == 201
    return resp.json()["reviewId"]


def _reviews(client, recipe_id):
    return client.get(f"/recipes/{recipe_id}").json()["recipe"]["reviews"]


# ── pure helpers ─────────────────────────────────────────────────────────


def test_find_review_index():
    ids = [ObjectId() for _ in range(3)]
    reviews = [{"reviewId": i} for i in ids]
    assert find_review_index(reviews, ids[1]) == 1
    assert find_review_index(reviews, ObjectId()) is None
    assert find_review_index([], ids[0]) is None


def test_build_review_coerces_rating():
    review = build_review(ReviewIn(user="ann", rating="4", comment="ok"))
    assert review["rating"] == 4.0
    assert isinstance(review["reviewId"], ObjectId)
    assert isinstance(review["date"], datetime)


@pytest.mark.parametrize("payload", [
    {"rating": 4, "comment": "ok"},
    {"user": "ann", "comment": "ok"},
    {"user": "ann", "rating": 4, "comment": " "},
    {"user": "ann", "rating": "great", "comment": "ok"},
    {"user": "ann", "rating": "nan", "comment": "ok"},
    {"user": "ann", "rating": "inf", "comment": "ok"},
    {"user": "ann", "rating": "-Infinity", "comment": "ok"},
])
def test_build_review_rejects_bad_payload(payload):
    with pytest.raises(ValidationError):
        build_review(ReviewIn(**payload))


# ── Add ──────────────────────────────────────────────────────────────────


def test_add_appends_in_order(client, recipe_id):
    first = _add(client, recipe_id, user="ann")
    second = _add(client, recipe_id, user="bob", rating="5")

    reviews = _reviews(client, recipe_id)
    assert [r["reviewId"] for r in reviews] == [first, second]
    assert reviews[1]["rating"] == 5.0
    assert reviews[0]["date"]


def test_add_to_unknown_recipe_is_not_found(client):
    resp = client.post(f"/recipes/{ObjectId()}/reviews", json={"user": "ann", "rating": 4, "comment": "x"})
    assert resp.status_code == 404
    assert resp.json()["error"] == "Recipe not found"


def test_add_missing_fields_is_rejected(client, recipe_id):
    resp = client.post(f"/recipes/{recipe_id}/reviews", json={"user": "ann", "comment": "x"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required fields"
    assert _reviews(client, recipe_id) == []


@pytest.mark.parametrize("rating", ["nan", "inf"])
def test_add_non_finite_rating_leaves_recipe_readable(client, recipe_id, rating):
    resp = client.post(f"/recipes/{recipe_id}/reviews", json={"user": "ann", "rating": rating, "comment": "x"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Rating must be a number"

    resp = client.get(f"/recipes/{recipe_id}")
    assert resp.status_code == 200
    assert resp.json()["recipe"]["reviews"] == []


# ── Update ───────────────────────────────────────────────────────────────


def test_update_replaces_exactly_one_element(client, recipe_id):
    ids = [_add(client, recipe_id, user=u, comment=f"by {u}") for u in ("ann", "bob", "cat")]
    before = _reviews(client, recipe_id)

    resp = client.put(
        f"/recipes/{recipe_id}/reviews/{ids[1]}",
        json={"user": "bob", "rating": 1, "comment": "changed my mind"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "Review updated successfully", "reviewId": ids[1]}

    after = _reviews(client, recipe_id)
    assert [r["reviewId"] for r in after] == ids
    assert after[0] == before[0]
    assert after[2] == before[2]
    assert after[1]["comment"] == "changed my mind"
    assert after[1]["rating"] == 1.0


def test_update_unknown_review_is_combined_not_found(client, recipe_id):
    _add(client, recipe_id)
    review = {"user": "ann", "rating": 2, "comment": "x"}

    resp = client.put(f"/recipes/{recipe_id}/reviews/{ObjectId()}", json=review)
    assert resp.status_code == 404
    assert resp.json()["error"] == "Recipe or review not found"

    resp = client.put(f"/recipes/{ObjectId()}/reviews/{ObjectId()}", json=review)
    assert resp.json()["error"] == "Recipe or review not found"

    resp = client.put(f"/recipes/{recipe_id}/reviews/bad-id", json=review)
    assert resp.status_code == 404


def test_update_review_of_other_recipe_is_not_found(client, recipe_id):
    other = client.post("/recipes", json={
        "name": "Other", "cuisine": "Mexican", "prepTime": 1, "cookTime": 1, "servings": 1,
        "ingredients": [], "instructions": [], "tags": [],
    }).json()["recipeId"]
    review_id = _add(client, other)

    resp = client.put(f"/recipes/{recipe_id}/reviews/{review_id}", json={"user": "a", "rating": 1, "comment": "b"})
    assert resp.status_code == 404


def test_update_missing_fields_is_rejected(client, recipe_id):
    review_id = _add(client, recipe_id)
    resp = client.put(f"/recipes/{recipe_id}/reviews/{review_id}", json={"user": "ann"})
    assert resp.status_code == 400
    assert _reviews(client, recipe_id)[0]["comment"] == "good"


# ── Delete ───────────────────────────────────────────────────────────────


def test_delete_middle_review_keeps_order(client, recipe_id):
    ids = [_add(client, recipe_id, user=u) for u in ("ann", "bob", "cat")]

    resp = client.delete(f"/recipes/{recipe_id}/reviews/{ids[1]}")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Review deleted successfully"

    assert [r["reviewId"] for r in _reviews(client, recipe_id)] == [ids[0], ids[2]]


def test_delete_distinguishes_recipe_and_review_misses(client, recipe_id):
    review_id = _add(client, recipe_id)

    resp = client.delete(f"/recipes/{ObjectId()}/reviews/{review_id}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Recipe not found"

    resp = client.delete(f"/recipes/{recipe_id}/reviews/{ObjectId()}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Review not found"

    resp = client.delete(f"/recipes/{recipe_id}/reviews/not-an-id")
    assert resp.json()["error"] == "Review not found"


def test_delete_twice_reports_review_missing(client, recipe_id, db):
    review_id = _add(client, recipe_id)
    assert client.delete(f"/recipes/{recipe_id}/reviews/{review_id}").status_code == 200
    resp = client.delete(f"/recipes/{recipe_id}/reviews/{review_id}")
    assert resp.json()["error"] == "Review not found"

    doc = run(db["recipes"].find_one({"_id": ObjectId(recipe_id)}))
    assert doc["reviews"] == []
