"""Macro aggregation for meal candidates.

Computes totals, the blocked-intolerance union, meal density and a
confidence score from scratch for a list of components. Nothing is cached
or carried over from a previous candidate.
"""

from typing import Dict, Iterable, List, Mapping, Tuple

import numpy as np

from core.domain import Ingredient, MacroSource, MealComponent, MealType
from core.exceptions import NotFoundError
from core.logger import get_logger

logger = get_logger("services.macro_calculator")

MACRO_FIELDS = ("kcal", "protein", "carbs", "fat", "fiber")

# (light upper bound, moderate upper bound) in kcal
DENSITY_THRESHOLDS: Dict[MealType, Tuple[int, int]] = {
    MealType.BREAKFAST: (300, 450),
    MealType.MORNING_SNACK: (150, 250),
    MealType.LUNCH: (400, 600),
    MealType.AFTERNOON_SNACK: (150, 250),
    MealType.DINNER: (350, 550),
    MealType.SUPPER: (100, 200),
}
DEFAULT_DENSITY_THRESHOLDS = (300, 500)

SOURCE_CONFIDENCE = {
    MacroSource.TACO: 1.0,
    MacroSource.TBCA: 1.0,
    MacroSource.USDA: 1.0,
    MacroSource.ESTIMATED: 0.6,
}


class MacroCalculator:
    """Class-based macro calculator used by the generator and the resolver."""

    def totals(self, components: Iterable[MealComponent], ingredients: Mapping[str, Ingredient]) -> Dict[str, float]:
        """Sum macros over components: portion/100 x per-100g values.

        kcal is rounded to a whole number, the other macros to one decimal.
        """
        components = list(components)
        if not components:
            return {"total_calories": 0, "total_protein": 0.0, "total_carbs": 0.0, "total_fat": 0.0, "total_fiber": 0.0}
        rows = self._lookup(components, ingredients)
        factors = np.array([c.portion / 100.0 for c in components], dtype=float)
        matrix = np.array([[getattr(ing, f) for f in MACRO_FIELDS] for ing in rows], dtype=float)
        kcal, protein, carbs, fat, fiber = factors @ matrix
        return {
            "total_calories": int(round(kcal)),
            "total_protein": round(float(protein), 1),
            "total_carbs": round(float(carbs), 1),
            "total_fat": round(float(fat), 1),
            "total_fiber": round(float(fiber), 1),
        }

    def blocked_intolerances(self, components: Iterable[MealComponent], ingredients: Mapping[str, Ingredient]) -> Tuple[str, ...]:
        """Sorted union of the tags triggered by any component."""
        tags = set()
        for ing in self._lookup(list(components), ingredients):
            tags |= ing.triggers_intolerances
        return tuple(sorted(tags))

    def meal_density(self, total_calories: float, meal_type: MealType) -> str:
        light, moderate = DENSITY_THRESHOLDS.get(meal_type, DEFAULT_DENSITY_THRESHOLDS)
        if total_calories <= light:
            return "light"
        if total_calories <= moderate:
            return "moderate"
        return "heavy"

    def confidence(self, components: Iterable[MealComponent], ingredients: Mapping[str, Ingredient]) -> float:
        """Lowest macro-source weight among the components (1.0 when empty)."""
        weights = [SOURCE_CONFIDENCE[ing.macro_source] for ing in self._lookup(list(components), ingredients)]
        return min(weights) if weights else 1.0

    def summarize(self, components: Iterable[MealComponent], ingredients: Mapping[str, Ingredient], meal_type: MealType) -> Dict[str, object]:
        """All derived candidate fields in one call."""
        components = list(components)
        summary: Dict[str, object] = dict(self.totals(components, ingredients))
        summary["blocked_for_intolerances"] = self.blocked_intolerances(components, ingredients)
        summary["meal_density"] = self.meal_density(summary["total_calories"], meal_type)
        summary["confidence"] = self.confidence(components, ingredients)
        logger.debug("Macro summary for %s: %s", [c.ingredient_key for c in components], summary)
        return summary

    @staticmethod
    def _lookup(components: List[MealComponent], ingredients: Mapping[str, Ingredient]) -> List[Ingredient]:
        rows = []
        for c in components:
            ing = ingredients.get(c.ingredient_key)
            if ing is None:
                raise NotFoundError("Ingredient", c.ingredient_key)
            rows.append(ing)
        return rows


# export singleton
macro_calculator = MacroCalculator()
__all__ = ["MacroCalculator", "macro_calculator", "DENSITY_THRESHOLDS", "SOURCE_CONFIDENCE"]
