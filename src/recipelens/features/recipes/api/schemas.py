from typing import List

from pydantic import BaseModel, Field

from recipelens.features.recipes.domain.models import Recipe


class RecommendPayload(BaseModel):
    ingredients: List[str] = Field(min_length=1)


class SaveRecipePayload(Recipe):
    name: str = Field(min_length=1)
