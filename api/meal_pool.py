"""Meal pool API router.

Exposes the batch population pipeline, listing of persisted meals and
content-based alternatives for a pooled meal, and lets clients reject a
pooled combination so later batches skip it.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from database.deps import get_db_read, get_db_write
from core.logger import get_logger
from schemas import (
    PopulateMealPoolRequest,
    PopulateMealPoolResponse,
    PooledMeal,
    RejectMealRequest,
    RejectMealResponse,
    SimilarPooledMeal,
)
from services.content_recommender import content_recommender
from services.meal_pool_service import meal_pool_service, to_pooled_meal

logger = get_logger("api.meal_pool")
router = APIRouter(prefix="/api/meal-pool", tags=["meal-pool"])


def split_tags(values: Optional[List[str]]) -> List[str]:
    """Accept both repeated query params and comma-separated values."""
    out = []
    for v in values or []:
        out.extend(part.strip() for part in v.split(",") if part.strip())
    return out


@router.post("/populate", response_model=PopulateMealPoolResponse)
def populate_meal_pool(request: PopulateMealPoolRequest, db: Session = Depends(get_db_write)):
    """Generate a batch of meals, filter them for the user and persist the accepted ones.

    Raises:
        ValidationError: Unknown meal type, intolerance tag or diet.
        NoRuleFoundError: No cultural rule applies to the slot.
    """
    return meal_pool_service.populate(db, request)


@router.get("", response_model=List[PooledMeal])
def list_pooled_meals(
    meal_type: Optional[str] = None,
    country_code: Optional[str] = None,
    safe_for: Optional[List[str]] = Query(default=None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db_read),
):
    """Return persisted meals, optionally limited to a slot, a country and meals safe for given tags."""
    return meal_pool_service.list_meals(
        db, meal_type=meal_type, country_code=country_code, safe_for=split_tags(safe_for), skip=skip, limit=limit,
    )


@router.get("/{meal_id}/alternatives", response_model=List[SimilarPooledMeal])
def get_meal_alternatives(
    meal_id: int,
    top_k: int = Query(5, ge=1, le=50),
    intolerances: Optional[List[str]] = Query(default=None),
    db: Session = Depends(get_db_read),
):
    """Return the top-k pooled meals most similar to the given meal and safe for `intolerances`.

    Raises:
        NotFoundError: If the meal id does not exist.
    """
    ranked = content_recommender.recommend_alternatives(db, meal_id, top_k=top_k, intolerances=split_tags(intolerances))
    out = []
    for alt_id, score in ranked:
        entry = meal_pool_service.get_meal(db, alt_id)
        out.append(SimilarPooledMeal(**to_pooled_meal(entry).model_dump(), score=score))
    logger.info("Returned %s alternatives for meal %s", len(out), meal_id)
    return out


@router.post("/{meal_id}/reject", response_model=RejectMealResponse)
def reject_pooled_meal(meal_id: int, request: Optional[RejectMealRequest] = None, db: Session = Depends(get_db_write)):
    """Record the meal's combination as rejected so future batches never generate it.

    Raises:
        NotFoundError: If the meal id does not exist.
    """
    return meal_pool_service.reject_meal(db, meal_id, reason=request.reason if request else None)
