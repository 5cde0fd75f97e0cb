"""Tests for batch population of the meal pool."""

import pytest

from core.domain import MealType
from core.exceptions import NoRuleFoundError, NotFoundError, ValidationError
from core.repository import RejectedCombinationRepository
from database.models import MealPoolEntry
from schemas import PopulateMealPoolRequest
from services.meal_generator import meal_generator, rule_violation
from services.meal_pool_service import MealPoolService
from services.pool_context import PoolContext


def _request(**overrides):
    payload = {"country_code": "BR", "meal_type": "breakfast", "quantity": 5, "seed": 42}
    payload.update(overrides)
    return PopulateMealPoolRequest(**payload)


def test_populate_persists_accepted_meals(session):
    response = MealPoolService().populate(session, _request())

    assert response.success
    assert response.generated == 5
    assert response.inserted == 5
    assert response.skipped == 0
    assert response.shortfall == 0
    assert response.rule.rule_id == "BR:breakfast"
    assert response.rule.chain == ["BR"]
    assert session.query(MealPoolEntry).count() == 5
    for meal in response.meals:
        assert meal.id is not None
        assert meal.country_codes == ["BR"]
        assert meal.components
        assert meal.components[0].portion_label.endswith(("g", "ml"))


def test_repeat_batch_is_skipped_not_duplicated(session):
    service = MealPoolService()
    first = service.populate(session, _request())
    second = service.populate(session, _request())

    assert second.generated == first.generated
    assert second.inserted == 0
    assert second.skipped == first.inserted
    assert session.query(MealPoolEntry).count() == first.inserted


def test_lactose_filter_yields_only_safe_meals(session, ctx):
    service = MealPoolService()
    substituted = []
    for seed in range(3, 8):
        response = service.populate(session, _request(quantity=10, intolerance_filter=["milk"], seed=seed))
        assert response.generated == response.inserted + response.skipped + response.rejected
        for meal in response.meals:
            assert "lactose" not in meal.blocked_for_intolerances
        substituted.extend(m for m in response.meals if m.substitutions)

    assert substituted
    for meal in substituted:
        keys = {c.ingredient_key for c in meal.components}
        assert all(s.substitute in keys and s.original not in keys for s in meal.substitutions)
        expected = sum(ctx.ingredient(c.ingredient_key).kcal * c.portion / 100 for c in meal.components)
        assert abs(meal.total_calories - expected) <= 0.5 + 1e-6


def test_batch_exclusion_list_holds_for_substituted_meals(session):
    excluded = {"lactose_free_coffee_with_milk", "lactose_free_milk"}
    service = MealPoolService()
    for seed in range(6):
        response = service.populate(session, _request(
            quantity=10, intolerance_filter=["lactose"], exclusion_list=sorted(excluded), seed=seed,
        ))
        for meal in response.meals:
            assert not excluded & {c.ingredient_key for c in meal.components}
            assert not excluded & {s.substitute for s in meal.substitutions}


def test_substituted_meals_respect_the_cultural_rule(session, ctx):
    rule = ctx.rule("BR", MealType.LUNCH)
    response = MealPoolService().populate(session, _request(meal_type="lunch", quantity=10, intolerance_filter=["lactose"], seed=11))
    for meal in response.meals:
        chosen = [ctx.ingredient(c.ingredient_key) for c in meal.components]
        assert rule_violation(rule, chosen) is None


def test_reject_meal_records_combination_for_future_batches(session):
    service = MealPoolService()
    first = service.populate(session, _request()).meals[0]

    outcome = service.reject_meal(session, first.id, reason="culturally odd")
    assert outcome.recorded
    assert outcome.content_hash == first.content_hash
    assert outcome.country_codes == ["BR"]
    assert first.content_hash in RejectedCombinationRepository(session).hashes_for("BR", "breakfast")
    assert not service.reject_meal(session, first.id).recorded

    # the generator now skips it, so a fresh pool would never see it again
    session.query(MealPoolEntry).delete()
    session.commit()
    again = service.populate(session, _request())
    assert first.content_hash not in {m.content_hash for m in again.meals}

    with pytest.raises(NotFoundError):
        service.reject_meal(session, 99999)


def test_fallback_rule_is_reported(session):
    response = MealPoolService().populate(session, _request(country_code="ao", meal_type="almoço", quantity=2))
    assert response.rule.rule_id == "PT:lunch"
    assert response.rule.chain == ["AO", "PT"]
    assert all(m.meal_type == "lunch" and m.country_codes == ["AO"] for m in response.meals)


def test_rejected_combinations_are_not_persisted(session):
    ctx = PoolContext.load(session)
    first = meal_generator.generate(ctx, "BR", "breakfast", 1, seed=42).candidates[0]
    assert RejectedCombinationRepository(session).add("BR", "breakfast", first.combination_hash, reason="culturally odd")
    # adding twice is a no-op
    assert not RejectedCombinationRepository(session).add("BR", "breakfast", first.combination_hash)

    response = MealPoolService().populate(session, _request())
    assert first.combination_hash not in {m.content_hash for m in response.meals}


def test_invalid_inputs_raise_validation_error(session):
    service = MealPoolService()
    with pytest.raises(ValidationError):
        service.populate(session, _request(meal_type="brunch"))
    with pytest.raises(ValidationError):
        service.populate(session, _request(intolerance_filter=["kryptonite"]))
    with pytest.raises(ValidationError):
        service.populate(session, _request(dietary_filter="carnivore"))


def test_missing_rule_raises_before_anything_is_written(session):
    from database.models import CulturalRuleModel

    session.query(CulturalRuleModel).filter(CulturalRuleModel.country_code == "*").delete()
    session.commit()
    with pytest.raises(NoRuleFoundError):
        MealPoolService().populate(session, _request(country_code="JP", meal_type="lunch"))
    assert session.query(MealPoolEntry).count() == 0


def test_list_meals_filters(session):
    service = MealPoolService()
    response = service.populate(session, _request(quantity=8))

    everything = service.list_meals(session)
    assert len(everything) == response.inserted
    assert service.list_meals(session, meal_type="lunch") == []
    assert service.list_meals(session, country_code="pt") == []
    safe = service.list_meals(session, safe_for=["lactose"])
    assert all("lactose" not in m.blocked_for_intolerances for m in safe)
    assert len(service.list_meals(session, skip=2, limit=3)) == 3


def test_get_meal_not_found(session):
    with pytest.raises(NotFoundError):
        MealPoolService().get_meal(session, 99999)
