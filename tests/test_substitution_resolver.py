"""Tests for intolerance-driven ingredient substitution."""

import pytest

from core.domain import AnimalOrigin, MealComponent, MealType
from core.exceptions import NoSubstituteFoundError, NotFoundError
from services.meal_generator import build_candidate
from services.pool_context import PoolContext
from services.substitution_resolver import SubstitutionResolver


def _beverage(key, kcal, **extra):
    record = {
        "key": key, "names": {"en": key.replace("_", " ").title()}, "category": "beverage",
        "kcal": kcal, "protein": 1.0, "carbs": 1.0, "fat": 1.0, "fiber": 0.0,
        "default_portion": 200, "unit": "ml",
    }
    record.update(extra)
    return record


def test_best_substitute_is_closest_in_kcal(ctx):
    sub = SubstitutionResolver(ctx).find_substitute("whole_milk", ["lactose"])
    assert sub.key == "lactose_free_milk"


def test_intolerance_aliases_are_accepted(ctx):
    assert SubstitutionResolver(ctx).find_substitute("whole_milk", ["Milk"]).key == "lactose_free_milk"


def test_candidates_are_ranked(ctx):
    found = SubstitutionResolver(ctx).candidates_for("whole_milk", ["lactose"])
    assert [i.key for i in found] == ["lactose_free_milk", "soy_beverage"]


def test_excluded_and_forbidden_origin_substitutes_are_skipped(ctx):
    resolver = SubstitutionResolver(ctx)
    assert resolver.find_substitute("whole_milk", ["lactose"], excluded=["lactose_free_milk"]).key == "soy_beverage"
    assert resolver.find_substitute("whole_milk", ["lactose"], forbidden_origins=[AnimalOrigin.DAIRY]).key == "soy_beverage"


def test_substitute_must_not_trigger_other_intolerances(ctx):
    resolver = SubstitutionResolver(ctx)
    assert resolver.find_substitute("whole_milk", ["lactose", "soy"], excluded=["lactose_free_milk"]) is None
    # tofu replaces eggs but triggers soy
    assert resolver.find_substitute("scrambled_eggs", ["egg"]).key == "tofu_scramble"
    assert resolver.find_substitute("scrambled_eggs", ["egg", "soy"]) is None


def test_substitute_must_suit_the_meal_type(ctx):
    assert SubstitutionResolver(ctx).find_substitute("whole_milk", ["lactose"], meal_type=MealType.LUNCH) is None


def test_no_substitute_for_unknown_key_or_no_intolerances(ctx):
    resolver = SubstitutionResolver(ctx)
    assert resolver.find_substitute("unicorn_milk", ["lactose"]) is None
    assert resolver.find_substitute("whole_milk", []) is None


def test_require_substitute_raises(ctx):
    with pytest.raises(NoSubstituteFoundError) as exc_info:
        SubstitutionResolver(ctx).require_substitute("cheese_bread", ["lactose", "egg"])
    err = exc_info.value
    assert err.status_code == 404
    assert err.details == {"ingredient_key": "cheese_bread", "intolerances": ["egg", "lactose"]}


def test_ties_are_broken_by_key():
    ctx = PoolContext.from_records(
        [
            _beverage("cow_milk", 60, triggers_intolerances=["lactose"]),
            _beverage("b_milk", 62, safe_for_intolerances=["lactose"], replaces=["cow_milk"]),
            _beverage("a_milk", 58, safe_for_intolerances=["lactose"], replaces=["cow_milk"]),
        ],
        [{"country_code": "*", "meal_type": "breakfast", "required_components": ["beverage"]}],
    )
    assert SubstitutionResolver(ctx).find_substitute("cow_milk", ["lactose"]).key == "a_milk"


def test_apply_substitution_recomputes_everything(ctx):
    components = [MealComponent.from_ingredient(ctx.ingredient(k)) for k in ("tapioca", "coffee_with_milk")]
    meal = build_candidate(ctx, MealType.BREAKFAST, "BR", components)
    resolver = SubstitutionResolver(ctx)
    sub = resolver.require_substitute("coffee_with_milk", ["lactose"])

    repaired = resolver.apply_substitution(meal, "coffee_with_milk", sub)

    assert repaired.ingredient_keys == ["tapioca", "lactose_free_coffee_with_milk"]
    assert meal.total_calories == 238
    assert repaired.total_calories == 234
    assert repaired.blocked_for_intolerances == ("caffeine",)
    assert repaired.confidence == pytest.approx(0.6)
    assert repaired.combination_hash != meal.combination_hash
    assert repaired.name == "Tapioca Crepe, served with Coffee with Lactose-Free Milk"
    assert [(s.original, s.substitute) for s in repaired.substitutions] == [("coffee_with_milk", "lactose_free_coffee_with_milk")]
    # the original candidate is untouched
    assert meal.ingredient_keys == ["tapioca", "coffee_with_milk"]
    assert meal.substitutions == ()


def test_apply_substitution_for_missing_component_raises(ctx):
    meal = build_candidate(ctx, MealType.BREAKFAST, "BR", [MealComponent.from_ingredient(ctx.ingredient("tapioca"))])
    with pytest.raises(NotFoundError):
        SubstitutionResolver(ctx).apply_substitution(meal, "whole_milk", ctx.ingredient("lactose_free_milk"))
