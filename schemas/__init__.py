"""Pydantic schema package for request and response models."""

from .meal_pool_schema import (
    PopulateMealPoolRequest,
    PopulateMealPoolResponse,
    PooledMeal,
    RejectMealRequest,
    RejectMealResponse,
    SimilarPooledMeal,
)
from .ingredient_schema import IngredientOut, SubstituteResponse
from .rule_schema import ResolvedRuleResponse

__all__ = [
    "PopulateMealPoolRequest",
    "PopulateMealPoolResponse",
    "PooledMeal",
    "SimilarPooledMeal",
    "RejectMealRequest",
    "RejectMealResponse",
    "IngredientOut",
    "SubstituteResponse",
    "ResolvedRuleResponse",
]
