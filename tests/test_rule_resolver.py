"""Tests for cultural rule resolution and fallback chain termination."""

import pytest

from core.domain import CulturalRule, MealType
from core.exceptions import NoRuleFoundError, RuleValidationError, ValidationError
from data.ingredients_dataset import INGREDIENTS_DATA
from services.pool_context import PoolContext
from services.rule_resolver import RuleResolver, find_fallback_cycles, validate_fallback_chains


class FakeContext:
    """Duck-typed context that skips load-time validation, to reach the resolver's own guards."""

    def __init__(self, rules, fallbacks):
        self._rules = {(r.country_code, r.meal_type): r for r in rules}
        self._fallbacks = fallbacks

    def rule(self, country_code, meal_type):
        return self._rules.get((country_code, meal_type))

    def fallback_for(self, country_code):
        return self._fallbacks.get(country_code)


def _rule(country, meal_type="lunch", fallback=None):
    return CulturalRule(country_code=country, meal_type=meal_type, required_components=["carb"], fallback_country=fallback)


def test_exact_rule_has_single_hop_chain(ctx):
    rule, chain = RuleResolver(ctx).resolve_with_chain("BR", "breakfast")
    assert rule.rule_id == "BR:breakfast"
    assert chain == ["BR"]


def test_country_and_meal_type_are_normalized(ctx):
    rule = RuleResolver(ctx).resolve_rule(" br ", "cafe_manha")
    assert rule.rule_id == "BR:breakfast"


def test_fallback_chain_is_followed(ctx):
    rule, chain = RuleResolver(ctx).resolve_with_chain("AO", "lunch")
    assert rule.rule_id == "PT:lunch"
    assert chain == ["AO", "PT"]

    rule, chain = RuleResolver(ctx).resolve_with_chain("AO", "dinner")
    assert rule.rule_id == "BR:dinner"
    assert chain == ["AO", "PT", "BR"]


def test_global_default_ends_every_chain(ctx):
    rule, chain = RuleResolver(ctx).resolve_with_chain("US", "lunch")
    assert rule.country_code == "*"
    assert chain == ["US", "*"]

    rule, chain = RuleResolver(ctx).resolve_with_chain("JP", "supper")
    assert rule.rule_id == "*:supper"
    assert chain == ["JP", "*"]


def test_missing_default_raises_no_rule_found():
    ctx = PoolContext.from_records(INGREDIENTS_DATA, [
        {"country_code": "BR", "meal_type": "lunch", "required_components": ["carb"]},
    ])
    with pytest.raises(NoRuleFoundError) as exc_info:
        RuleResolver(ctx).resolve_rule("US", "lunch")
    err = exc_info.value
    assert err.status_code == 404
    assert err.details["reason"] == "exhausted"
    assert err.details["country_code"] == "US"
    assert err.details["meal_type"] == "lunch"
    assert err.details["chain"] == ["US"]


def test_cycle_terminates_with_no_rule_found():
    ctx = FakeContext([_rule("*", "breakfast")], {"AA": "BB", "BB": "CC", "CC": "AA"})
    with pytest.raises(NoRuleFoundError) as exc_info:
        RuleResolver(ctx).resolve_rule("AA", "lunch")
    assert exc_info.value.reason == "cycle"
    assert exc_info.value.chain == ["AA", "BB", "CC", "AA"]


def test_depth_limit_terminates_long_chains():
    # C0 -> C1 -> ... -> C6, only C6 has a lunch rule
    codes = [f"C{i}" for i in range(7)]
    rules = [
        {"country_code": code, "meal_type": "supper", "required_components": ["carb"], "fallback_country": codes[i + 1]}
        for i, code in enumerate(codes[:-1])
    ]
    rules.append({"country_code": "C6", "meal_type": "lunch", "required_components": ["carb"]})
    ctx = PoolContext.from_records(INGREDIENTS_DATA, rules)

    # five hops are allowed
    rule, chain = RuleResolver(ctx).resolve_with_chain("C1", "lunch")
    assert rule.rule_id == "C6:lunch"
    assert len(chain) == 6

    with pytest.raises(NoRuleFoundError) as exc_info:
        RuleResolver(ctx).resolve_rule("C0", "lunch")
    assert exc_info.value.reason == "max_depth"

    assert RuleResolver(ctx, max_depth=6).resolve_rule("C0", "lunch").rule_id == "C6:lunch"


def test_unknown_meal_type_and_blank_country_raise_validation_error(ctx):
    with pytest.raises(ValidationError):
        RuleResolver(ctx).resolve_rule("BR", "brunch")
    with pytest.raises(ValidationError):
        RuleResolver(ctx).resolve_rule("  ", MealType.LUNCH)


def test_find_fallback_cycles_reports_each_cycle_once():
    fallbacks = {"AA": "BB", "BB": "AA", "CC": "AA", "DD": "EE", "EE": "FF"}
    assert find_fallback_cycles(fallbacks) == [["AA", "BB", "AA"]]
    assert find_fallback_cycles({"DD": "EE"}) == []


def test_validate_fallback_chains_lists_all_cycles():
    with pytest.raises(RuleValidationError) as exc_info:
        validate_fallback_chains({"AA": "BB", "BB": "AA", "XX": "YY", "YY": "ZZ", "ZZ": "XX"})
    assert exc_info.value.details["cycles"] == [["AA", "BB", "AA"], ["XX", "YY", "ZZ", "XX"]]
