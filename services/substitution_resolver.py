"""Ingredient substitution resolver.

Finds a pool-registered alternative for an ingredient that conflicts with a
user's intolerances, and rebuilds a candidate around it.
"""

from typing import Iterable, List, Optional

from core.domain import Ingredient, MealCandidate, MealComponent, MealType, Substitution
from core.exceptions import NoSubstituteFoundError, NotFoundError
from core.intolerances import normalize_intolerances
from core.logger import get_logger
from services.meal_generator import build_candidate

logger = get_logger("services.substitution_resolver")


class SubstitutionResolver:
    """Look up and apply safe substitutes against a pool context."""

    def __init__(self, ctx):
        self.ctx = ctx

    def candidates_for(
        self,
        ingredient_key: str,
        user_intolerances: Iterable[str],
        excluded: Iterable[str] = (),
        forbidden_origins: Iterable = (),
        meal_type: Optional[MealType] = None,
    ) -> List[Ingredient]:
        """All qualifying substitutes, best first.

        A substitute shares the original's category, lists the original in
        `replaces`, is declared safe for at least one of the user's
        intolerances and triggers none of them. Ranking is by absolute kcal
        difference, then key.
        """
        original = self.ctx.ingredient(ingredient_key)
        intolerances = normalize_intolerances(user_intolerances)
        if original is None or not intolerances:
            return []
        excluded = set(excluded)
        forbidden_origins = set(forbidden_origins)
        found = []
        for ing in self.ctx.by_category(original.category):
            if ing.key == original.key or original.key not in ing.replaces:
                continue
            if not (ing.safe_for_intolerances & intolerances):
                continue
            if ing.triggers_intolerances & intolerances:
                continue
            if ing.key in excluded:
                continue
            if ing.animal_origin is not None and ing.animal_origin in forbidden_origins:
                continue
            if meal_type is not None and not ing.suits_meal_type(meal_type):
                continue
            found.append(ing)
        found.sort(key=lambda ing: (abs(ing.kcal - original.kcal), ing.key))
        return found

    def find_substitute(
        self,
        ingredient_key: str,
        user_intolerances: Iterable[str],
        excluded: Iterable[str] = (),
        forbidden_origins: Iterable = (),
        meal_type: Optional[MealType] = None,
    ) -> Optional[Ingredient]:
        """Best substitute for `ingredient_key`, or None when nothing qualifies."""
        found = self.candidates_for(ingredient_key, user_intolerances, excluded, forbidden_origins, meal_type)
        return found[0] if found else None

    def require_substitute(
        self,
        ingredient_key: str,
        user_intolerances: Iterable[str],
        excluded: Iterable[str] = (),
        forbidden_origins: Iterable = (),
        meal_type: Optional[MealType] = None,
    ) -> Ingredient:
        """Like `find_substitute` but raises NoSubstituteFoundError on a miss."""
        sub = self.find_substitute(ingredient_key, user_intolerances, excluded, forbidden_origins, meal_type)
        if sub is None:
            raise NoSubstituteFoundError(ingredient_key, list(normalize_intolerances(user_intolerances)))
        return sub

    def apply_substitution(self, candidate: MealCandidate, original_key: str, substitute: Ingredient) -> MealCandidate:
        """Return a new candidate with `original_key` swapped for `substitute`.

        The substitute takes its own default portion, and every derived
        field is recomputed from the new component list.
        """
        if original_key not in candidate.ingredient_keys:
            raise NotFoundError("Meal component", original_key)
        components = [
            MealComponent.from_ingredient(substitute) if c.ingredient_key == original_key else c
            for c in candidate.components
        ]
        substitutions = candidate.substitutions + (Substitution(original=original_key, substitute=substitute.key),)
        updated = build_candidate(self.ctx, candidate.meal_type, candidate.country_code, components, substitutions)
        logger.debug("Substituted %s -> %s in %s", original_key, substitute.key, candidate.combination_hash)
        return updated
