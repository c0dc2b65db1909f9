# api/routes_recipes.py
# Recipe CRUD + multi-criteria search

from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, Query

from recipebook.db.init import get_db
from recipebook.db.models.schemas import RecipeFilters, RecipeIn
from recipebook.services.recipes import (
    create_recipe,
    delete_recipe,
    get_recipe,
    replace_recipe,
    search_recipes,
)
from recipebook.services.utils import to_public

router = APIRouter(prefix="/recipes", tags=["recipes"])

@router.get("")
async def list_recipes(
    tags: Optional[str] = Query(None, description="comma list, exact tag names"),
    cuisine: Optional[str] = Query(None, description="partial cuisine name"),
    ingredients: Optional[str] = Query(None, description="comma list, partial ingredient names"),
    name: Optional[str] = Query(None, description="partial recipe name"),
    db=Depends(get_db),
):
    """No filters -> every recipe. Only name/cuisine/tags/prepTime are returned."""
    filters = RecipeFilters(tags=tags, cuisine=cuisine, ingredients=ingredients, name=name)
    recipes = await search_recipes(db, filters)
    return {"recipes": to_public(recipes)}

@router.get("/{recipe_id}")
async def get_recipe_detail(recipe_id: str, db=Depends(get_db)):
    recipe = await get_recipe(db, recipe_id)
    return {"recipe": to_public(recipe)}

@router.post("", status_code=201)
async def add_recipe(payload: RecipeIn, db=Depends(get_db)):
    recipe_id = await create_recipe(db, payload)
    return {"message": "New recipe has been created", "recipeId": recipe_id}

@router.put("/{recipe_id}")
async def update_recipe(recipe_id: str, payload: RecipeIn, db=Depends(get_db)):
    await replace_recipe(db, recipe_id, payload)
    return {"message": "Recipe updated"}

@router.delete("/{recipe_id}")
async def remove_recipe(recipe_id: str, db=Depends(get_db)):
    await delete_recipe(db, recipe_id)
    return {"message": "Recipe has been deleted successfully"}
