from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from recipelens.features.auth.api.deps import current_user
from recipelens.features.auth.domain.models import User
from recipelens.features.recipes.app.saved import SavedRecipeService
from recipelens.features.recipes.app.use_cases import RecipeService
from recipelens.features.recipes.domain.models import Recipe
from .schemas import RecommendPayload, SaveRecipePayload

router = APIRouter(prefix="/recipes", tags=["recipes"])


def get_recipe_service(request: Request) -> RecipeService:
    return request.app.state.recipe_service


def get_saved_recipe_service(request: Request) -> SavedRecipeService:
    return request.app.state.saved_recipe_service


@router.post("/recommend", dependencies=[Depends(current_user)])
def recommend_recipes(
    payload: RecommendPayload,
    recipes: RecipeService = Depends(get_recipe_service),
):
    recommendation = recipes.recommend(payload.ingredients)
    return recommendation.model_dump(exclude_none=True)


@router.post("/saved", status_code=status.HTTP_201_CREATED)
def save_recipe(
    payload: SaveRecipePayload,
    user: User = Depends(current_user),
    saved: SavedRecipeService = Depends(get_saved_recipe_service),
):
    recipe = saved.save(user.id, Recipe.model_validate(payload.model_dump()))
    return recipe.model_dump(mode="json", exclude_none=True)


@router.get("/saved")
def list_saved_recipes(
    user: User = Depends(current_user),
    saved: SavedRecipeService = Depends(get_saved_recipe_service),
):
    rows = saved.list_for_user(user.id)
    return {"recipes": [r.model_dump(mode="json", exclude_none=True) for r in rows], "total": len(rows)}


@router.get("/saved/{recipe_id}")
def get_saved_recipe(
    recipe_id: str,
    user: User = Depends(current_user),
    saved: SavedRecipeService = Depends(get_saved_recipe_service),
):
    return saved.get(recipe_id, user.id).model_dump(mode="json", exclude_none=True)


@router.delete("/saved/{recipe_id}")
def delete_saved_recipe(
    recipe_id: str,
    user: User = Depends(current_user),
    saved: SavedRecipeService = Depends(get_saved_recipe_service),
):
    saved.delete(recipe_id, user.id)
    return {"message": "Recipe deleted successfully"}
