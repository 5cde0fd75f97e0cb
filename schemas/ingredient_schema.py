"""Schemas for ingredient pool responses."""

from pydantic import BaseModel
from typing import Dict, List, Optional

from core.domain import Ingredient


class IngredientOut(BaseModel):
    """Representation of a pool ingredient in responses (macros per 100g/ml)."""

    key: str
    name: str
    names: Dict[str, str]
    category: str
    kcal: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    default_portion: float
    unit: str
    safe_for_intolerances: List[str]
    triggers_intolerances: List[str]
    replaces: List[str]
    meal_types: List[str]
    animal_origin: Optional[str] = None
    staple: Optional[str] = None
    macro_source: str

    @classmethod
    def from_domain(cls, ing: Ingredient) -> "IngredientOut":
        return cls(
            key=ing.key,
            name=ing.name,
            names=dict(ing.names),
            category=ing.category.value,
            kcal=ing.kcal,
            protein=ing.protein,
            carbs=ing.carbs,
            fat=ing.fat,
            fiber=ing.fiber,
            default_portion=ing.default_portion,
            unit=ing.unit.value,
            safe_for_intolerances=sorted(ing.safe_for_intolerances),
            triggers_intolerances=sorted(ing.triggers_intolerances),
            replaces=sorted(ing.replaces),
            meal_types=sorted(m.value for m in ing.meal_types),
            animal_origin=ing.animal_origin.value if ing.animal_origin else None,
            staple=ing.staple.value if ing.staple else None,
            macro_source=ing.macro_source.value,
        )


class SubstituteResponse(BaseModel):
    """Best substitute for an ingredient under a set of intolerances."""

    ingredient_key: str
    intolerances: List[str]
    substitute: IngredientOut
    kcal_difference: float
    alternatives: List[str] = []
