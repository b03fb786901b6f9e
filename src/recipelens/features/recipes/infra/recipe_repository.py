from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError
from pymongo.collection import Collection

from recipelens.features.recipes.domain.models import SavedRecipe


class RecipeRepository:
    """Saved recipes keyed by (id, created_at), indexed by user_id."""

    def __init__(self, collection: Collection, logger: Optional[logging.Logger] = None):
        self.coll = collection
        self.log = logger or logging.getLogger("recipelens.recipes.repo")

    def save(self, recipe: SavedRecipe) -> None:
        self.log.debug("Saving recipe | recipe_id=%s | user_id=%s", recipe.id, recipe.user_id)
        self.coll.insert_one(recipe.model_dump(mode="json"))

    def get_by_id(self, recipe_id: str) -> Optional[SavedRecipe]:
        doc = self.coll.find_one({"id": recipe_id}, {"_id": 0})
        return SavedRecipe.model_validate(doc) if doc else None

    def list_by_user(self, user_id: str) -> List[SavedRecipe]:
        out: List[SavedRecipe] = []
        for doc in self.coll.find({"user_id": user_id}, {"_id": 0}):
            try:
                out.append(SavedRecipe.model_validate(doc))
            except ValidationError as e:
                self.log.warning("Skipping unreadable recipe | recipe_id=%s | %s", doc.get("id"), e)
        out.sort(key=lambda r: r.created_at.timestamp(), reverse=True)
        return out

    def delete(self, recipe: SavedRecipe) -> bool:
        key = recipe.model_dump(mode="json", include={"id", "created_at"})
        return self.coll.delete_one(key).deleted_count > 0

    def delete_by_user(self, user_id: str) -> int:
        return self.coll.delete_many({"user_id": user_id}).deleted_count
