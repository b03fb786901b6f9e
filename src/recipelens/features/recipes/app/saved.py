from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from recipelens.shared.errors import NotFound
from recipelens.shared.utils.id_utils import new_id
from recipelens.features.recipes.domain.models import Recipe, SavedRecipe
from recipelens.features.recipes.infra.recipe_repository import RecipeRepository


class SavedRecipeService:
    def __init__(
        self,
        repo: RecipeRepository,
        *,
        now: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.repo = repo
        self._now = now or (lambda: datetime.now(timezone.utc))
        self.log = logger or logging.getLogger("recipelens.recipes.saved")

    def save(self, user_id: str, recipe: Recipe) -> SavedRecipe:
        now = self._now()
        saved = SavedRecipe(
            **recipe.model_dump(),
            id=new_id(),
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        self.repo.save(saved)
        self.log.info("Recipe saved | recipe_id=%s | user_id=%s", saved.id, user_id)
        return saved

    def list_for_user(self, user_id: str) -> List[SavedRecipe]:
        recipes = self.repo.list_by_user(user_id)
        self.log.info("Retrieved user recipes | user_id=%s | count=%d", user_id, len(recipes))
        return recipes

    def get(self, recipe_id: str, user_id: str) -> SavedRecipe:
        recipe = self.repo.get_by_id(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            if recipe is not None:
                self.log.warning("Recipe requested by non-owner | recipe_id=%s | user_id=%s", recipe_id, user_id)
            raise NotFound("Recipe not found")
        return recipe

    def delete(self, recipe_id: str, user_id: str) -> None:
        recipe = self.get(recipe_id, user_id)
        if not self.repo.delete(recipe):
            raise NotFound("Recipe not found")
        self.log.info("Recipe deleted | recipe_id=%s | user_id=%s", recipe_id, user_id)

    def delete_all_for_user(self, user_id: str) -> int:
        return self.repo.delete_by_user(user_id)
