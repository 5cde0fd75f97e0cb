"""Meal template generator.

Assembles candidate meals for a (country, meal type) slot from the pool
context using the resolved cultural rule. Selection is a seeded round-robin
per category, so a batch covers the eligible ingredients before repeating
any, and the same seed always yields the same candidates.
"""

import random
from collections import deque
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Set

from core.config import (
    GENERATION_RETRY_MULTIPLIER,
    MAX_FALLBACK_DEPTH,
    OPTIONAL_COMPONENT_PROBABILITY,
    RECENT_MEAL_WINDOW,
)
from core.domain import (
    Category,
    CulturalRule,
    Ingredient,
    MealCandidate,
    MealComponent,
    MealType,
    Substitution,
    combination_hash,
)
from core.exceptions import IngredientPoolExhaustedError, ValidationError
from core.logger import get_logger
from services.macro_calculator import macro_calculator
from services.rule_resolver import RuleResolver, normalize_country_code

logger = get_logger("services.meal_generator")

# Presentation order per meal type. Staples sort by their own slot, so rice
# always precedes beans regardless of category.
_MAIN_ORDER = {
    "rice": 1, "beans": 2, "protein": 3, "carb": 4, "vegetable": 5,
    "fat": 6, "condiment": 7, "dairy": 8, "beverage": 9, "fruit": 10,
}
_LIGHT_ORDER = {
    "rice": 1, "beans": 2, "carb": 3, "protein": 4, "dairy": 5,
    "fat": 6, "condiment": 7, "fruit": 8, "vegetable": 9, "beverage": 10,
}
ORDER_TABLES: Dict[MealType, Dict[str, int]] = {
    MealType.BREAKFAST: _LIGHT_ORDER,
    MealType.MORNING_SNACK: _LIGHT_ORDER,
    MealType.LUNCH: _MAIN_ORDER,
    MealType.AFTERNOON_SNACK: _LIGHT_ORDER,
    MealType.DINNER: _MAIN_ORDER,
    MealType.SUPPER: _LIGHT_ORDER,
}


class GenerationResult(NamedTuple):
    candidates: List[MealCandidate]
    requested: int
    shortfall: int
    attempts: int


def sort_components(components: Iterable[MealComponent], meal_type: MealType) -> List[MealComponent]:
    """Stable sort by the meal type's order table."""
    table = ORDER_TABLES.get(meal_type, _MAIN_ORDER)

    def slot(c: MealComponent) -> int:
        key = c.staple.value if c.staple else c.component_type.value
        return table.get(key, len(table) + 1)

    return sorted(components, key=slot)


def compose_meal_name(components: Sequence[MealComponent]) -> str:
    """Human-readable name, e.g. "Tapioca with Minas Cheese, served with Black Coffee"."""
    foods = [c.name for c in components if c.component_type != Category.BEVERAGE]
    drinks = [c.name for c in components if c.component_type == Category.BEVERAGE]
    if not foods:
        return " and ".join(drinks)
    if len(foods) == 1:
        name = foods[0]
    elif len(foods) == 2:
        name = f"{foods[0]} with {foods[1]}"
    else:
        name = f"{foods[0]} with {', '.join(foods[1:-1])} and {foods[-1]}"
    if drinks:
        name = f"{name}, served with {' and '.join(drinks)}"
    return name


def build_candidate(
    ctx,
    meal_type: MealType,
    country_code: str,
    components: Iterable[MealComponent],
    substitutions: Sequence[Substitution] = (),
) -> MealCandidate:
    """Sort components and derive every aggregate field from scratch."""
    ordered = sort_components(components, meal_type)
    summary = macro_calculator.summarize(ordered, ctx.ingredients, meal_type)
    return MealCandidate(
        name=compose_meal_name(ordered),
        meal_type=meal_type,
        country_code=country_code,
        components=tuple(ordered),
        combination_hash=combination_hash(ordered),
        substitutions=tuple(substitutions),
        **summary,
    )


class _Rotation:
    """Round-robin cursor over a shuffled ingredient list."""

    def __init__(self, items: List[Ingredient]):
        self.items = items
        self.cursor = 0

    def draw(self, skip: Set[str], avoid: Set[str]) -> Optional[Ingredient]:
        """Next ingredient not in `skip`, preferring ones not in `avoid`."""
        n = len(self.items)
        fallback = None
        for step in range(n):
            idx = (self.cursor + step) % n
            key = self.items[idx].key
            if key in skip:
                continue
            if key in avoid:
                if fallback is None:
                    fallback = idx
                continue
            self.cursor = idx + 1
            return self.items[idx]
        if fallback is not None:
            self.cursor = fallback + 1
            return self.items[fallback]
        return None


class MealGenerator:
    """Seeded, bounded generator of candidate meals."""

    def __init__(
        self,
        retry_multiplier: int = GENERATION_RETRY_MULTIPLIER,
        recent_window: int = RECENT_MEAL_WINDOW,
        optional_probability: float = OPTIONAL_COMPONENT_PROBABILITY,
        max_fallback_depth: int = MAX_FALLBACK_DEPTH,
    ):
        self.retry_multiplier = retry_multiplier
        self.recent_window = recent_window
        self.optional_probability = optional_probability
        self.max_fallback_depth = max_fallback_depth

    def generate(
        self,
        ctx,
        country_code: str,
        meal_type,
        quantity: int,
        exclusion_list: Iterable[str] = (),
        rejected_combinations: Iterable[str] = (),
        seed: Optional[int] = None,
    ) -> GenerationResult:
        """Generate up to `quantity` distinct candidates.

        Args:
            ctx: PoolContext snapshot for the batch.
            country_code: Requested country; fallback rules may apply.
            meal_type: Canonical or aliased meal type.
            quantity: Number of candidates wanted (positive integer).
            exclusion_list: Ingredient keys never to use in this batch.
            rejected_combinations: Combination hashes to skip.
            seed: Seed for the batch's random source.

        Returns:
            GenerationResult with the candidates and the shortfall, if any.

        Raises:
            ValidationError: If quantity is not a positive integer.
            NoRuleFoundError: If no rule applies to the slot.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("quantity must be a positive integer", field="quantity")

        country = normalize_country_code(country_code)
        rule = RuleResolver(ctx, self.max_fallback_depth).resolve_rule(country, meal_type)
        meal_type = rule.meal_type
        rng = random.Random(seed)
        excluded = frozenset(exclusion_list or ())
        rejected = frozenset(rejected_combinations or ())
        rotations, typical = self._rotations(ctx, rule, excluded, rng)
        recent = deque(maxlen=max(self.recent_window, 0))

        candidates: List[MealCandidate] = []
        seen: Set[str] = set()
        attempts = 0
        max_attempts = quantity * self.retry_multiplier
        while len(candidates) < quantity and attempts < max_attempts:
            attempts += 1
            avoid = set().union(*recent) if recent else set()
            try:
                chosen = self._assemble(ctx, rule, rotations, typical, excluded, avoid, rng)
            except IngredientPoolExhaustedError as exc:
                logger.warning(
                    "Pool exhausted for %s/%s on %s after %s candidates",
                    country, meal_type.value, exc.component_type, len(candidates),
                )
                break

            reason = rule_violation(rule, chosen)
            if reason:
                logger.debug("Discarding attempt %s for %s/%s: %s", attempts, country, meal_type.value, reason)
                continue

            candidate = build_candidate(ctx, meal_type, country, [MealComponent.from_ingredient(i) for i in chosen])
            if candidate.combination_hash in seen or candidate.combination_hash in rejected:
                logger.debug("Discarding repeated combination %s", candidate.combination_hash)
                continue
            seen.add(candidate.combination_hash)
            candidates.append(candidate)
            recent.append({i.key for i in chosen})

        shortfall = quantity - len(candidates)
        if shortfall:
            logger.warning(
                "Generated %s of %s candidates for %s/%s in %s attempts",
                len(candidates), quantity, country, meal_type.value, attempts,
            )
        else:
            logger.info("Generated %s candidates for %s/%s in %s attempts", len(candidates), country, meal_type.value, attempts)
        return GenerationResult(candidates, quantity, shortfall, attempts)

    def _rotations(self, ctx, rule: CulturalRule, excluded, rng: random.Random):
        rotations: Dict[Category, _Rotation] = {}
        for category in Category:
            items = [
                i for i in ctx.by_category(category, rule.meal_type)
                if i.key not in excluded and i.key not in rule.forbidden_beverages
            ]
            rng.shuffle(items)
            rotations[category] = _Rotation(items)

        typical_items = []
        for key in rule.typical_beverages:
            ing = ctx.ingredient(key)
            if (
                ing is not None
                and ing.category == Category.BEVERAGE
                and ing.suits_meal_type(rule.meal_type)
                and key not in excluded
                and key not in rule.forbidden_beverages
            ):
                typical_items.append(ing)
        rng.shuffle(typical_items)
        return rotations, _Rotation(typical_items)

    def _draw(self, category: Category, rotations, typical: _Rotation, skip, avoid) -> Optional[Ingredient]:
        if category == Category.BEVERAGE:
            ing = typical.draw(skip, avoid)
            if ing is not None:
                return ing
        return rotations[category].draw(skip, avoid)

    def _assemble(self, ctx, rule: CulturalRule, rotations, typical, excluded, avoid, rng) -> List[Ingredient]:
        chosen: List[Ingredient] = []
        keys: Set[str] = set()

        for category in rule.required_components:
            ing = self._draw(category, rotations, typical, keys, avoid)
            if ing is None:
                raise IngredientPoolExhaustedError(category.value, rule.meal_type.value)
            chosen.append(ing)
            keys.add(ing.key)

        for category in rule.optional_components:
            if rng.random() < self.optional_probability:
                ing = self._draw(category, rotations, typical, keys, avoid)
                if ing is not None:
                    chosen.append(ing)
                    keys.add(ing.key)

        for pairing in rule.required_pairings:
            if pairing.if_key not in keys or pairing.then_key in keys:
                continue
            then = ctx.ingredient(pairing.then_key)
            if then is None or then.key in excluded or not then.suits_meal_type(rule.meal_type):
                continue
            if rng.random() < pairing.probability:
                chosen.append(then)
                keys.add(then.key)
        return chosen


def rule_violation(rule: CulturalRule, chosen: Iterable[Ingredient]) -> Optional[str]:
    """Describe how `chosen` breaks `rule`, or None when it complies."""
    chosen = list(chosen)
    keys = {i.key for i in chosen}
    forbidden_types = {i.category for i in chosen} & rule.forbidden_components
    if forbidden_types:
        return f"forbidden component types {sorted(c.value for c in forbidden_types)}"
    bad_drinks = keys & rule.forbidden_beverages
    if bad_drinks:
        return f"forbidden beverages {sorted(bad_drinks)}"
    for group in rule.forbidden_pairs:
        if group <= keys:
            return f"forbidden pair {sorted(group)}"
    return None


meal_generator = MealGenerator()
