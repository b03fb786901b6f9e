from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from recipelens.shared.errors import InvalidInput


class Ingredient(BaseModel):
    name: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    unit: str = Field(min_length=1)

    @classmethod
    def validated(cls, name: str, quantity: float, unit: str) -> "Ingredient":
        """Build an ingredient, raising InvalidInput instead of a pydantic error."""
        try:
            return cls(name=name, quantity=quantity, unit=unit)
        except ValidationError as e:
            raise InvalidInput(f"invalid ingredient {name!r}: {e.error_count()} invalid field(s)") from e


class IngredientList(BaseModel):
    ingredients: List[Ingredient] = Field(default_factory=list)
    image_url: Optional[str] = None
