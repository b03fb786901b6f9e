from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from pydantic import ValidationError

from recipelens.shared.errors import InvalidInput, MalformedResponse, ParseError
from recipelens.shared.llm.bedrock_client import LanguageModel
from recipelens.shared.utils.json_extract import extract_json
from recipelens.features.recipes.domain.models import RecipeList, RecipeRecommendation
from recipelens.features.recipes.domain.prompts import build_recipe_prompt


def parse_recipe_response(text: str) -> RecipeList:
    """
    Pull the recipes object out of a model completion.
    """
    try:
        raw = extract_json(text)
    except MalformedResponse as e:
        raise ParseError(f"failed to parse recipe response: {e}") from e
    try:
        return RecipeList.model_validate(json.loads(raw))
    except ValidationError as e:
        raise ParseError(f"failed to unmarshal recipes JSON: {e.error_count()} invalid field(s)") from e


class RecipeService:
    def __init__(
        self,
        llm: LanguageModel,
        *,
        now: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.llm = llm
        self._now = now or (lambda: datetime.now(timezone.utc))
        self.log = logger or logging.getLogger("recipelens.recipes")

    def recommend(self, ingredients: Sequence[str]) -> RecipeRecommendation:
        """
        Ask the model for 3-5 recipes using the given ingredients.

        Raises InvalidInput for an empty list (before any model call),
        UpstreamError when the model call fails and ParseError when its
        answer is not the expected JSON.
        """
        used: List[str] = list(ingredients)
        self.log.info("Starting recipe recommendation | ingredient_count=%d | ingredients=%s",
                      len(used), ", ".join(used))
        if not used:
            self.log.warning("Recipe recommendation requested with no ingredients")
            raise InvalidInput("at least one ingredient is required")

        prompt = build_recipe_prompt(used)
        self.log.debug("Generated prompt | length=%d", len(prompt))

        text = self.llm.complete(prompt)
        parsed = parse_recipe_response(text)

        recommendation = RecipeRecommendation(
            recipes=parsed.recipes,
            total_recipes=len(parsed.recipes),
            generated_at=self._now().isoformat(),
            ingredient_count=len(used),
            used_ingredients=used,
        )
        self.log.info("Recipe recommendation completed | recipe_count=%d", recommendation.total_recipes)
        return recommendation
