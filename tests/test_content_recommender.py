"""Unit tests for the content-based recommender."""

import pytest

from core.domain import MealComponent, MealType
from core.exceptions import NotFoundError
from core.repository import MealPoolRepository
from services.content_recommender import ContentBasedRecommender
from services.meal_generator import build_candidate


def _store(session, ctx, meal_type, *keys):
    components = [MealComponent.from_ingredient(ctx.ingredient(k)) for k in keys]
    return MealPoolRepository(session).insert_unique(build_candidate(ctx, meal_type, "BR", components)).id


@pytest.fixture
def pool(session, ctx):
    return {
        "tapioca_coffee": _store(session, ctx, MealType.BREAKFAST, "tapioca", "black_coffee"),
        "tapioca_juice": _store(session, ctx, MealType.BREAKFAST, "tapioca", "orange_juice"),
        "tapioca_coconut": _store(session, ctx, MealType.BREAKFAST, "tapioca", "coconut_water"),
        "pancakes_milk": _store(session, ctx, MealType.BREAKFAST, "pancakes", "whole_milk"),
        "bread_butter": _store(session, ctx, MealType.BREAKFAST, "french_bread", "butter", "coffee_with_milk"),
        "rice_beans": _store(session, ctx, MealType.LUNCH, "white_rice", "black_beans", "grilled_chicken_breast", "lettuce_salad"),
    }


def test_alternatives_share_meal_type_and_exclude_target(session, pool):
    ranked = ContentBasedRecommender().recommend_alternatives(session, pool["tapioca_coffee"], top_k=10)
    ids = [meal_id for meal_id, _ in ranked]
    assert pool["tapioca_coffee"] not in ids
    assert pool["rice_beans"] not in ids
    assert set(ids) == {pool["tapioca_juice"], pool["tapioca_coconut"], pool["pancakes_milk"], pool["bread_butter"]}
    scores = [score for _, score in ranked]
    assert scores == sorted(scores, reverse=True)


def test_most_similar_meal_ranks_first(session, pool):
    ranked = ContentBasedRecommender().recommend_alternatives(session, pool["tapioca_juice"], top_k=1)
    assert len(ranked) == 1
    assert ranked[0][0] == pool["tapioca_coconut"]


def test_unsafe_alternatives_are_dropped(session, pool):
    ranked = ContentBasedRecommender().recommend_alternatives(
        session, pool["tapioca_coffee"], top_k=10, intolerances=["milk"]
    )
    assert {meal_id for meal_id, _ in ranked} == {pool["tapioca_juice"], pool["tapioca_coconut"]}


def test_single_meal_of_its_type_has_no_alternatives(session, pool):
    assert ContentBasedRecommender().recommend_alternatives(session, pool["rice_beans"]) == []


def test_unknown_meal_raises(session, pool):
    with pytest.raises(NotFoundError):
        ContentBasedRecommender().recommend_alternatives(session, 99999)
