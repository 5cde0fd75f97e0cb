"""Tests for pool loading, record validation and context immutability."""

import copy

import pydantic
import pytest
from sqlalchemy.exc import IntegrityError

from core.domain import Category, MealType
from core.exceptions import PoolDataError, RuleValidationError
from core.repository import CulturalRuleRepository
from data.cultural_rules_dataset import CULTURAL_RULES_DATA
from data.ingredients_dataset import INGREDIENTS_DATA
from services.pool_context import PoolContext

MILK = {
    "key": "whole_milk", "names": {"en": "Whole Milk"}, "category": "beverage",
    "kcal": 61, "protein": 2.9, "carbs": 4.3, "fat": 3.2, "fiber": 0,
    "default_portion": 200, "unit": "ml", "triggers_intolerances": ["milk"],
}
DEFAULT_RULE = {"country_code": "*", "meal_type": "breakfast", "required_components": ["beverage"]}


def _with(**changes):
    record = copy.deepcopy(MILK)
    record.update(changes)
    return record


def test_builtin_pool_loads(ctx):
    assert "whole_milk" in ctx.ingredients
    assert ctx.rule("BR", MealType.BREAKFAST) is not None
    # tags are normalized on load
    assert ctx.ingredient("scrambled_eggs").triggers_intolerances == frozenset({"egg"})


def test_by_category_is_sorted_and_filters_meal_type(ctx):
    carbs = ctx.by_category(Category.CARB)
    assert [i.key for i in carbs] == sorted(i.key for i in carbs)
    breakfast_carbs = {i.key for i in ctx.by_category(Category.CARB, MealType.BREAKFAST)}
    assert "tapioca" in breakfast_carbs
    assert "white_rice" not in breakfast_carbs
    # empty meal_types means every slot
    assert "sweet_potato" in breakfast_carbs


def test_load_from_database_matches_records(session):
    loaded = PoolContext.load(session)
    assert set(loaded.ingredients) == {r["key"] for r in INGREDIENTS_DATA}
    assert len(loaded.rules) == len(CULTURAL_RULES_DATA)
    assert loaded.fallback_for("AO") == "PT"


def test_inactive_rule_can_share_a_slot_with_the_active_one(session):
    repo = CulturalRuleRepository(session)
    superseded = dict(next(r for r in CULTURAL_RULES_DATA if r["country_code"] == "BR" and r["meal_type"] == "lunch"))
    superseded.update(active=False, structure="Old lunch template")
    repo.create_many([repo.build_row(superseded)])

    loaded = PoolContext.load(session)
    assert loaded.rule("BR", MealType.LUNCH).structure != "Old lunch template"

    session.add(repo.build_row({"country_code": "BR", "meal_type": "lunch", "required_components": ["carb"]}))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()


@pytest.mark.parametrize("record,field", [
    (_with(kcal=-1), "kcal"),
    (_with(names={"pt": "Leite"}), None),
    (_with(category="snack"), "category"),
    (_with(triggers_intolerances=["kryptonite"]), "triggers_intolerances"),
    (_with(safe_for_intolerances=["lactose"]), None),
    (_with(replaces=["whole_milk"]), None),
    (_with(default_portion=0), "default_portion"),
])
def test_malformed_ingredient_is_rejected_with_key(record, field):
    with pytest.raises(PoolDataError) as exc_info:
        PoolContext.from_records([record], [DEFAULT_RULE])
    assert exc_info.value.details["ingredient_key"] == "whole_milk"
    if field:
        assert exc_info.value.details["field"] == field


def test_missing_macro_is_rejected():
    record = _with()
    del record["protein"]
    with pytest.raises(PoolDataError) as exc_info:
        PoolContext.from_records([record], [DEFAULT_RULE])
    assert exc_info.value.details["field"] == "protein"


def test_duplicate_ingredient_key_is_rejected():
    with pytest.raises(PoolDataError):
        PoolContext.from_records([MILK, MILK], [DEFAULT_RULE])


def test_duplicate_active_rule_is_rejected():
    with pytest.raises(RuleValidationError) as exc_info:
        PoolContext.from_records([MILK], [DEFAULT_RULE, dict(DEFAULT_RULE)])
    assert exc_info.value.details["rule_id"] == "*:breakfast"


def test_rule_with_forbidden_required_component_is_rejected():
    bad = {"country_code": "BR", "meal_type": "breakfast", "required_components": ["carb"], "forbidden_components": ["carb"]}
    with pytest.raises(RuleValidationError) as exc_info:
        PoolContext.from_records([MILK], [bad])
    assert exc_info.value.details["rule_id"] == "BR:breakfast"


def test_rule_falling_back_to_itself_is_rejected():
    bad = {"country_code": "BR", "meal_type": "lunch", "required_components": ["carb"], "fallback_country": "br"}
    with pytest.raises(RuleValidationError):
        PoolContext.from_records([MILK], [bad])


def test_inconsistent_country_fallbacks_are_rejected():
    rules = [
        {"country_code": "PT", "meal_type": "lunch", "required_components": ["carb"], "fallback_country": "BR"},
        {"country_code": "PT", "meal_type": "dinner", "required_components": ["carb"], "fallback_country": "ES"},
    ]
    with pytest.raises(RuleValidationError):
        PoolContext.from_records([MILK], rules)


def test_cyclic_fallbacks_are_rejected_at_load():
    rules = [
        {"country_code": "AA", "meal_type": "lunch", "required_components": ["carb"], "fallback_country": "BB"},
        {"country_code": "BB", "meal_type": "lunch", "required_components": ["carb"], "fallback_country": "AA"},
    ]
    with pytest.raises(RuleValidationError) as exc_info:
        PoolContext.from_records([MILK], rules)
    assert exc_info.value.details["cycles"] == [["AA", "BB", "AA"]]


def test_context_is_read_only(ctx):
    with pytest.raises(TypeError):
        ctx.ingredients["new"] = ctx.ingredient("banana")
    with pytest.raises(pydantic.ValidationError):
        ctx.ingredient("banana").kcal = 1
