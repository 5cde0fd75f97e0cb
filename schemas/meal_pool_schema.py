"""Schemas for meal pool population and listing."""

from pydantic import BaseModel, Field
from typing import List, Optional

from core.config import MAX_BATCH_QUANTITY


class PopulateMealPoolRequest(BaseModel):
    """Request payload for generating and persisting a batch of meals."""

    country_code: str = Field("BR", min_length=1, examples=["BR"], description="ISO country code; falls back through the rule chain when absent")
    meal_type: str = Field(..., examples=["breakfast"], description="Meal slot: breakfast, morning_snack, lunch, afternoon_snack, dinner, supper (Portuguese aliases accepted)")
    quantity: int = Field(5, ge=1, le=MAX_BATCH_QUANTITY, examples=[5], description=f"Number of meals to generate (1-{MAX_BATCH_QUANTITY})")
    dietary_filter: Optional[str] = Field(None, examples=["vegetarian"], description="Dietary preference: omnivore, vegetarian, vegan, pescatarian")
    intolerance_filter: Optional[List[str]] = Field(default=[], examples=[["lactose"]], description="Intolerance tags; aliases such as 'milk' or 'eggs' are normalized")
    excluded_ingredients: Optional[List[str]] = Field(default=[], examples=[["honey"]], description="Ingredient keys the user will not eat; candidates containing them must be repaired or rejected")
    exclusion_list: Optional[List[str]] = Field(default=[], examples=[["pancakes"]], description="Ingredient keys never used when generating this batch")
    seed: Optional[int] = Field(None, examples=[42], description="Seed for reproducible batches")


class MealComponentOut(BaseModel):
    """One ingredient entry within a pooled meal."""

    ingredient_key: str
    name: str
    type: str
    portion: float
    portion_label: str


class SubstitutionOut(BaseModel):
    original: str
    substitute: str


class PooledMeal(BaseModel):
    """Representation of a generated meal in responses."""

    id: Optional[int] = None
    name: str
    meal_type: str
    country_codes: List[str]
    components: List[MealComponentOut]
    total_calories: int
    total_protein: float
    total_carbs: float
    total_fat: float
    total_fiber: float
    blocked_for_intolerances: List[str] = []
    meal_density: str
    confidence: float
    content_hash: str
    substitutions: List[SubstitutionOut] = []


class SimilarPooledMeal(PooledMeal):
    """Pooled meal with an attached similarity score."""

    score: float


class RuleSummary(BaseModel):
    rule_id: str
    chain: List[str]


class PopulateMealPoolResponse(BaseModel):
    """Batch outcome: counts per pipeline stage plus the inserted meals."""

    success: bool
    generated: int
    inserted: int
    skipped: int
    rejected: int
    substituted: int
    shortfall: int
    rule: RuleSummary
    meals: List[PooledMeal]


class RejectMealRequest(BaseModel):
    reason: Optional[str] = Field(None, examples=["culturally odd"], description="Why the combination should not be generated again")


class RejectMealResponse(BaseModel):
    """Outcome of marking a pooled meal's combination as rejected."""

    meal_id: int
    meal_type: str
    content_hash: str
    country_codes: List[str]
    recorded: bool
