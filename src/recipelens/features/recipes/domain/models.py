from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Recipe(BaseModel):
    name: str
    cuisine: str = ""
    cooking_time: str = ""
    difficulty: str = ""
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    nutrition: Optional[str] = None
    tips: Optional[str] = None


class RecipeList(BaseModel):
    """The shape the model is asked to answer with."""
    recipes: List[Recipe]


class RecipeRecommendation(BaseModel):
    recipes: List[Recipe]
    total_recipes: int
    generated_at: str
    ingredient_count: int
    used_ingredients: List[str]
    missing_ingredients: Optional[List[str]] = None


class SavedRecipe(Recipe):
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
