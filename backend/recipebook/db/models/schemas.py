# db/models/schemas.py
# Pydantic request models.
# Write payloads keep every field optional so a partial submission reaches the
# service layer and is rejected there with a ValidationError (400), before any
# store access. Field names follow the persisted camelCase shape.
from __future__ import annotations
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]

# # ingredient line; name is what search matches against
class Ingredient(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    quantity: Optional[Union[str, Number]] = None
    unit: Optional[str] = None

# # recipe create/replace body
class RecipeIn(BaseModel):
    name: Optional[str] = None
    cuisine: Optional[str] = None              # cuisine name, resolved to a snapshot
    prepTime: Optional[Number] = None
    cookTime: Optional[Number] = None
    servings: Optional[Number] = None
    ingredients: Optional[List[Ingredient]] = None
    instructions: Optional[List[str]] = None
    tags: Optional[List[str]] = None           # tag names, resolved leniently

# # review add/update body
class ReviewIn(BaseModel):
    user: Optional[str] = None
    rating: Optional[Union[Number, str]] = None  # coerced to float
    comment: Optional[str] = None

# # optional search inputs (query string)
class RecipeFilters(BaseModel):
    tags: Optional[str] = None          # "quick,vegan"
    cuisine: Optional[str] = None
    ingredients: Optional[str] = None   # "tomato,basil"
    name: Optional[str] = None

class UserIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
