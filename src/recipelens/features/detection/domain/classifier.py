"""
Filters vision labels down to food ingredients.

Stock labels are broad ("Red Apple", "Fruit Salad") so they are matched by
substring; Custom Labels are trained on the keyword vocabulary itself, so
they are matched exactly.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Mapping

from .models import Ingredient

FOOD_KEYWORDS = frozenset({
    "apple", "banana", "orange", "bread",
    "cheese", "milk", "egg", "tomato",
    "carrot", "potato", "onion", "garlic",
    "chicken", "beef", "fish", "rice",
    "pasta", "vegetable", "fruit", "meat",
    "butter", "oil", "salt", "pepper",
})

UNIT_COUNT = "unit"
UNIT_CONFIDENCE = "confidence"


class MatchPolicy(str, Enum):
    SUBSTRING = "substring"
    EXACT = "exact"


def is_food_label(label: str, policy: MatchPolicy) -> bool:
    lowered = label.lower()
    if policy is MatchPolicy.EXACT:
        return lowered in FOOD_KEYWORDS
    return any(keyword in lowered for keyword in FOOD_KEYWORDS)


def labels_to_ingredients(labels: Iterable[str], policy: MatchPolicy = MatchPolicy.SUBSTRING) -> List[Ingredient]:
    return [
        Ingredient.validated(label, 1.0, UNIT_COUNT)
        for label in labels
        if label and is_food_label(label, policy)
    ]


def confidence_labels_to_ingredients(
    labels: Mapping[str, float], policy: MatchPolicy = MatchPolicy.EXACT
) -> List[Ingredient]:
    out: List[Ingredient] = []
    for label, confidence in labels.items():
        if not label or confidence <= 0:
            continue
        if is_food_label(label, policy):
            out.append(Ingredient.validated(label, float(confidence), UNIT_CONFIDENCE))
    return out
