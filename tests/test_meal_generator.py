"""Tests for the seeded meal template generator."""

import pytest

from core.domain import Category, MealComponent, MealType
from core.exceptions import NoRuleFoundError, ValidationError
from data.ingredients_dataset import INGREDIENTS_DATA
from services.meal_generator import MealGenerator, compose_meal_name, sort_components
from services.pool_context import PoolContext


def _component(ctx, key):
    return MealComponent.from_ingredient(ctx.ingredient(key))


def test_generates_distinct_rule_conforming_breakfasts(ctx):
    result = MealGenerator().generate(ctx, "BR", "breakfast", 5, seed=42)

    assert result.requested == 5
    assert result.shortfall == 0
    assert len(result.candidates) == 5
    assert len({c.combination_hash for c in result.candidates}) == 5
    for candidate in result.candidates:
        assert candidate.meal_type is MealType.BREAKFAST
        assert candidate.country_code == "BR"
        assert {Category.CARB, Category.BEVERAGE} <= candidate.component_types
        assert Category.VEGETABLE not in candidate.component_types
        assert len(candidate.ingredient_keys) == len(set(candidate.ingredient_keys))


def test_same_seed_gives_same_batch(ctx):
    first = MealGenerator().generate(ctx, "BR", "lunch", 4, seed=7)
    second = MealGenerator().generate(ctx, "BR", "lunch", 4, seed=7)
    assert [c.combination_hash for c in first.candidates] == [c.combination_hash for c in second.candidates]
    assert [c.name for c in first.candidates] == [c.name for c in second.candidates]


def test_totals_match_component_sum(ctx):
    result = MealGenerator().generate(ctx, "BR", "lunch", 5, seed=3)
    for candidate in result.candidates:
        kcal = sum(ctx.ingredient(c.ingredient_key).kcal * c.portion / 100 for c in candidate.components)
        protein = sum(ctx.ingredient(c.ingredient_key).protein * c.portion / 100 for c in candidate.components)
        assert abs(candidate.total_calories - kcal) <= 1
        assert abs(candidate.total_protein - protein) <= 0.1


def test_lunch_never_breaks_forbidden_pairs_or_beverages(ctx):
    result = MealGenerator().generate(ctx, "BR", "lunch", 30, seed=11)
    rule = ctx.rule("BR", MealType.LUNCH)
    assert result.candidates
    for candidate in result.candidates:
        keys = set(candidate.ingredient_keys)
        assert not keys & rule.forbidden_beverages
        assert not candidate.component_types & rule.forbidden_components
        for group in rule.forbidden_pairs:
            assert not group <= keys


def test_rice_is_served_before_beans(ctx):
    ordered = sort_components(
        [_component(ctx, k) for k in ("black_beans", "grilled_chicken_breast", "white_rice", "lettuce_salad")],
        MealType.LUNCH,
    )
    keys = [c.ingredient_key for c in ordered]
    assert keys[:3] == ["white_rice", "black_beans", "grilled_chicken_breast"]


def test_exclusion_list_is_respected(ctx):
    excluded = ["tapioca", "french_bread", "coffee_with_milk"]
    result = MealGenerator().generate(ctx, "BR", "breakfast", 6, exclusion_list=excluded, seed=5)
    for candidate in result.candidates:
        assert not set(candidate.ingredient_keys) & set(excluded)


def test_rejected_combinations_are_skipped(ctx):
    first = MealGenerator().generate(ctx, "BR", "breakfast", 3, seed=9)
    rejected = first.candidates[0].combination_hash
    again = MealGenerator().generate(ctx, "BR", "breakfast", 3, rejected_combinations=[rejected], seed=9)
    assert rejected not in {c.combination_hash for c in again.candidates}


def test_exhausted_required_category_reports_full_shortfall(ctx):
    carbs = [i.key for i in ctx.by_category(Category.CARB, MealType.BREAKFAST)]
    result = MealGenerator().generate(ctx, "BR", "breakfast", 4, exclusion_list=carbs, seed=1)
    assert result.candidates == []
    assert result.shortfall == 4


def test_small_pool_reports_shortfall_without_duplicates(ctx):
    generator = MealGenerator()
    result = generator.generate(ctx, "BR", "morning_snack", 50, seed=2)
    hashes = [c.combination_hash for c in result.candidates]
    assert len(hashes) == len(set(hashes))
    assert result.shortfall == 50 - len(result.candidates)
    assert result.shortfall > 0
    assert result.attempts <= 50 * generator.retry_multiplier


@pytest.mark.parametrize("quantity", [0, -3, 2.5, "5", True])
def test_bad_quantity_raises_validation_error(ctx, quantity):
    with pytest.raises(ValidationError) as exc_info:
        MealGenerator().generate(ctx, "BR", "breakfast", quantity)
    assert exc_info.value.details == {"field": "quantity"}


def test_missing_rule_propagates(ctx):
    small = PoolContext.from_records(INGREDIENTS_DATA, [
        {"country_code": "BR", "meal_type": "breakfast", "required_components": ["carb", "beverage"]},
    ])
    with pytest.raises(NoRuleFoundError):
        MealGenerator().generate(small, "US", "lunch", 2)


def test_fallback_rule_sets_candidate_fields(ctx):
    result = MealGenerator().generate(ctx, "ao", "lunch", 2, seed=4)
    for candidate in result.candidates:
        # generated under PT's rule but labelled with the requested country
        assert candidate.country_code == "AO"
        assert Category.DAIRY not in candidate.component_types


def test_compose_meal_name(ctx):
    parts = [_component(ctx, k) for k in ("tapioca", "minas_cheese", "banana", "black_coffee")]
    assert compose_meal_name(parts) == "Tapioca Crepe with Minas Cheese and Banana, served with Black Coffee"
    assert compose_meal_name(parts[:1]) == "Tapioca Crepe"
    assert compose_meal_name(parts[-1:]) == "Black Coffee"
