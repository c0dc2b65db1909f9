from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from recipebook.db.init import get_db
from recipebook.main import app

CUISINES = ["Italian", "Japanese", "Mexican"]
TAGS = ["quick", "vegetarian", "spicy"]


def run(coro):
    return asyncio.run(coro)


def recipe_payload(**overrides):
    body = {
        "name": "Tomato Soup",
        "cuisine": "Italian",
        "prepTime": 10,
        "cookTime": 25,
        "servings": 4,
        "ingredients": [
            {"name": "Tomato", "quantity": 6},
            {"name": "Basil", "quantity": "1 bunch"},
        ],
        "instructions": ["Chop tomatoes", "Simmer", "Blend"],
        "tags": ["quick", "vegetarian"],
    }
    body.update(overrides)
    return body


@pytest.fixture
def db():
    database = AsyncMongoMockClient()["recipe_book_test"]
    run(database["cuisines"].insert_many([{"name": n, "region": "test"} for n in CUISINES]))
    run(database["tags"].insert_many([{"name": n} for n in TAGS]))
    return database


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def recipe_id(client):
    resp = client.post("/recipes", json=recipe_payload())
    assert resp.status_code == 201
    return resp.json()["recipeId"]
