"""Intolerance and dietary compatibility filter.

Sorts candidates into accepted, rejected and needs_substitution for one
user profile. The filter is pure: it reads the pool context and never
modifies a candidate.
"""

from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional, Tuple

from core.domain import (
    AnimalOrigin,
    Category,
    CulturalRule,
    DietaryPreference,
    Ingredient,
    MealCandidate,
    UserConstraintProfile,
)
from core.logger import get_logger
from services.meal_generator import rule_violation
from services.substitution_resolver import SubstitutionResolver

logger = get_logger("services.compatibility_filter")

DIET_FORBIDDEN_ORIGINS: Dict[DietaryPreference, FrozenSet[AnimalOrigin]] = {
    DietaryPreference.OMNIVORE: frozenset(),
    DietaryPreference.VEGETARIAN: frozenset({AnimalOrigin.MEAT, AnimalOrigin.POULTRY, AnimalOrigin.FISH, AnimalOrigin.SEAFOOD}),
    DietaryPreference.PESCATARIAN: frozenset({AnimalOrigin.MEAT, AnimalOrigin.POULTRY}),
    DietaryPreference.VEGAN: frozenset(AnimalOrigin),
}

DIET_FORBIDDEN_CATEGORIES: Dict[DietaryPreference, FrozenSet[Category]] = {
    DietaryPreference.VEGAN: frozenset({Category.DAIRY}),
}


class SubstitutionPlan(NamedTuple):
    original_key: str
    substitute_key: str


class FilterResult(NamedTuple):
    accepted: List[MealCandidate]
    rejected: List[Tuple[MealCandidate, str]]
    needs_substitution: List[Tuple[MealCandidate, List[SubstitutionPlan]]]


class CompatibilityFilter:
    """Evaluate candidates against a user's intolerances and diet."""

    def __init__(self, ctx, resolver: Optional[SubstitutionResolver] = None):
        self.ctx = ctx
        self.resolver = resolver or SubstitutionResolver(ctx)

    def diet_violation(self, candidate: MealCandidate, diet: DietaryPreference) -> Optional[str]:
        """Describe the first component the diet forbids, or None."""
        origins = DIET_FORBIDDEN_ORIGINS.get(diet, frozenset())
        categories = DIET_FORBIDDEN_CATEGORIES.get(diet, frozenset())
        for comp in candidate.components:
            ing = self.ctx.require_ingredient(comp.ingredient_key)
            if ing.animal_origin in origins:
                return f"{diet.value} diet forbids {ing.key} ({ing.animal_origin.value})"
            if ing.category in categories:
                return f"{diet.value} diet forbids {ing.key} ({ing.category.value})"
        return None

    def conflicting_keys(self, candidate: MealCandidate, profile: UserConstraintProfile) -> List[str]:
        """Keys of components that trigger a user intolerance or are excluded."""
        out = []
        for comp in candidate.components:
            ing = self.ctx.require_ingredient(comp.ingredient_key)
            if ing.triggers_intolerances & profile.intolerances or ing.key in profile.excluded_ingredients:
                out.append(ing.key)
        return out

    def pick_substitute(
        self,
        candidate: MealCandidate,
        key: str,
        profile: UserConstraintProfile,
        exclusion_list: Iterable[str] = (),
        rule: Optional[CulturalRule] = None,
    ) -> Optional[Ingredient]:
        """Best substitute for `key` that keeps the repaired meal within `rule`.

        Substitutes already in the meal, excluded by the user or excluded
        from the batch are never picked.
        """
        excluded = set(profile.excluded_ingredients) | set(exclusion_list) | set(candidate.ingredient_keys)
        if rule is not None:
            excluded |= rule.forbidden_beverages
        others = [self.ctx.require_ingredient(k) for k in candidate.ingredient_keys if k != key]
        for sub in self.resolver.candidates_for(
            key,
            profile.intolerances,
            excluded=excluded,
            forbidden_origins=DIET_FORBIDDEN_ORIGINS.get(profile.dietary_preference, frozenset()),
            meal_type=candidate.meal_type,
        ):
            if rule is not None:
                reason = rule_violation(rule, others + [sub])
                if reason:
                    logger.debug("Substitute %s for %s skipped: %s", sub.key, key, reason)
                    continue
            return sub
        return None

    def filter(
        self,
        candidates: Iterable[MealCandidate],
        profile: UserConstraintProfile,
        exclusion_list: Iterable[str] = (),
        rule: Optional[CulturalRule] = None,
    ) -> FilterResult:
        """Partition candidates for one profile.

        Args:
            candidates: Generated meal candidates.
            profile: The user's intolerances, diet and excluded ingredients.
            exclusion_list: Keys kept out of the whole batch, substitutes included.
            rule: Cultural rule the candidates were built from. When given,
                a substitute must not bring the meal outside it.

        Returns:
            FilterResult. Each rejected entry carries a reason; each
            needs_substitution entry carries the planned swaps.
        """
        result = FilterResult([], [], [])
        exclusion_list = frozenset(exclusion_list)
        for candidate in candidates:
            reason = self.diet_violation(candidate, profile.dietary_preference)
            if reason:
                result.rejected.append((candidate, reason))
                continue

            conflicts = self.conflicting_keys(candidate, profile)
            if not conflicts:
                result.accepted.append(candidate)
                continue
            if len(conflicts) > 1:
                result.rejected.append((candidate, f"multiple conflicting components: {', '.join(conflicts)}"))
                continue

            key = conflicts[0]
            sub = self.pick_substitute(candidate, key, profile, exclusion_list, rule)
            if sub is None:
                result.rejected.append((candidate, f"no safe substitute for {key}"))
                continue
            result.needs_substitution.append((candidate, [SubstitutionPlan(key, sub.key)]))

        logger.info(
            "Filter result: %s accepted, %s need substitution, %s rejected",
            len(result.accepted), len(result.needs_substitution), len(result.rejected),
        )
        for candidate, reason in result.rejected:
            logger.debug("Rejected %s: %s", candidate.name, reason)
        return result
