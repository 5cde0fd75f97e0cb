"""Per-batch, read-only snapshot of the ingredient pool and cultural rules.

A PoolContext is built once per batch (from the database or from plain
records) and handed to the generator, the filter and the substitution
resolver. Nothing in it is mutated after construction, so concurrent batches
never share state.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.domain import Category, CulturalRule, Ingredient, MealType
from core.exceptions import NotFoundError, PoolDataError, RuleValidationError
from core.logger import get_logger
from core.repository import CulturalRuleRepository, IngredientRepository
from services.rule_resolver import validate_fallback_chains

logger = get_logger("services.pool_context")


def _first_error(exc: PydanticValidationError) -> Tuple[str, str]:
    err = exc.errors()[0]
    field = ".".join(str(part) for part in err.get("loc", ())) or None
    return field, err.get("msg", str(exc))


def validate_ingredient(record: Mapping[str, Any]) -> Ingredient:
    """Validate one raw ingredient record.

    Raises:
        PoolDataError: naming the offending key and field.
    """
    key = record.get("key") if isinstance(record, Mapping) else None
    try:
        return Ingredient.model_validate(record)
    except PydanticValidationError as exc:
        field, msg = _first_error(exc)
        raise PoolDataError(f"Invalid ingredient '{key}': {msg}", ingredient_key=key, field=field) from exc


def validate_rule(record: Mapping[str, Any]) -> CulturalRule:
    """Validate one raw cultural rule record.

    Raises:
        RuleValidationError: naming the offending rule.
    """
    rule_id = f"{record.get('country_code')}:{record.get('meal_type')}"
    try:
        return CulturalRule.model_validate(record)
    except PydanticValidationError as exc:
        field, msg = _first_error(exc)
        raise RuleValidationError(f"Invalid cultural rule '{rule_id}' ({field}): {msg}", rule_id=rule_id) from exc


class PoolContext:
    """Immutable view over validated ingredients and cultural rules."""

    def __init__(self, ingredients: Iterable[Ingredient], rules: Iterable[CulturalRule]):
        by_key: Dict[str, Ingredient] = {}
        for ing in ingredients:
            if ing.key in by_key:
                raise PoolDataError(f"Duplicate ingredient key '{ing.key}'", ingredient_key=ing.key, field="key")
            by_key[ing.key] = ing

        by_slot: Dict[Tuple[str, MealType], CulturalRule] = {}
        fallbacks: Dict[str, Optional[str]] = {}
        for rule in rules:
            slot = (rule.country_code, rule.meal_type)
            if slot in by_slot:
                raise RuleValidationError(f"Duplicate active rule '{rule.rule_id}'", rule_id=rule.rule_id)
            by_slot[slot] = rule
            previous = fallbacks.get(rule.country_code, rule.fallback_country)
            if previous != rule.fallback_country:
                raise RuleValidationError(
                    f"Rules for country '{rule.country_code}' declare different fallbacks "
                    f"('{previous}' and '{rule.fallback_country}')",
                    rule_id=rule.rule_id,
                )
            fallbacks[rule.country_code] = rule.fallback_country

        for ing in by_key.values():
            unknown = ing.replaces - by_key.keys()
            if unknown:
                logger.warning("Ingredient %s replaces unknown keys %s", ing.key, sorted(unknown))

        by_category: Dict[Category, List[Ingredient]] = {c: [] for c in Category}
        for key in sorted(by_key):
            by_category[by_key[key].category].append(by_key[key])

        self._ingredients = MappingProxyType(by_key)
        self._rules = MappingProxyType(by_slot)
        self._fallbacks = MappingProxyType({c: f for c, f in fallbacks.items() if f})
        self._by_category = MappingProxyType({c: tuple(items) for c, items in by_category.items()})

        validate_fallback_chains(self._fallbacks)

    @classmethod
    def from_records(cls, ingredient_records: Iterable[Mapping[str, Any]], rule_records: Iterable[Mapping[str, Any]]) -> "PoolContext":
        """Validate raw records and build a context. Fails on the first bad record."""
        ingredients = [validate_ingredient(r) for r in ingredient_records]
        rules = [validate_rule(r) for r in rule_records]
        return cls(ingredients, rules)

    @classmethod
    def load(cls, session: Session) -> "PoolContext":
        """Build a context from the ingredient and active rule tables."""
        ctx = cls.from_records(
            IngredientRepository(session).list_records(),
            CulturalRuleRepository(session).active_records(),
        )
        logger.info("Loaded pool context: %s ingredients, %s rules", len(ctx.ingredients), len(ctx.rules))
        return ctx

    @property
    def ingredients(self) -> Mapping[str, Ingredient]:
        return self._ingredients

    @property
    def rules(self) -> Mapping[Tuple[str, MealType], CulturalRule]:
        return self._rules

    @property
    def fallbacks(self) -> Mapping[str, str]:
        return self._fallbacks

    def ingredient(self, key: str) -> Optional[Ingredient]:
        return self._ingredients.get(key)

    def require_ingredient(self, key: str) -> Ingredient:
        ing = self._ingredients.get(key)
        if ing is None:
            raise NotFoundError("Ingredient", key)
        return ing

    def by_category(self, category: Category, meal_type: Optional[MealType] = None) -> Tuple[Ingredient, ...]:
        """Ingredients of a category, sorted by key, optionally limited to a meal slot."""
        items = self._by_category.get(Category(category), ())
        if meal_type is None:
            return items
        return tuple(i for i in items if i.suits_meal_type(meal_type))

    def rule(self, country_code: str, meal_type: MealType) -> Optional[CulturalRule]:
        return self._rules.get((country_code, meal_type))

    def fallback_for(self, country_code: str) -> Optional[str]:
        return self._fallbacks.get(country_code)
