"""Ingredient pool API router.

Read-only access to the canonical ingredient pool and the substitution
resolver.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from database.deps import get_db_read
from core.domain import Category
from core.exceptions import ValidationError
from core.intolerances import normalize_intolerances
from core.logger import get_logger
from schemas import IngredientOut, SubstituteResponse
from services.pool_context import PoolContext
from services.substitution_resolver import SubstitutionResolver
from api.meal_pool import split_tags

logger = get_logger("api.ingredients")
router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


@router.get("", response_model=List[IngredientOut])
def list_ingredients(category: Optional[str] = None, db: Session = Depends(get_db_read)):
    """Return pool ingredients sorted by key, optionally limited to one category."""
    ctx = PoolContext.load(db)
    if category:
        try:
            cat = Category(category.strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid category '{category}'", field="category")
        items = ctx.by_category(cat)
    else:
        items = [ctx.ingredients[k] for k in sorted(ctx.ingredients)]
    return [IngredientOut.from_domain(i) for i in items]


@router.get("/{key}", response_model=IngredientOut)
def get_ingredient(key: str, db: Session = Depends(get_db_read)):
    """Return one ingredient.

    Raises:
        NotFoundError: If the key is not in the pool.
    """
    ctx = PoolContext.load(db)
    return IngredientOut.from_domain(ctx.require_ingredient(key))


@router.get("/{key}/substitute", response_model=SubstituteResponse)
def get_substitute(key: str, intolerances: Optional[List[str]] = Query(default=None), db: Session = Depends(get_db_read)):
    """Return the best safe substitute for `key` under the given intolerances.

    Raises:
        NotFoundError: If the key is not in the pool.
        NoSubstituteFoundError: If no pool ingredient qualifies.
    """
    ctx = PoolContext.load(db)
    original = ctx.require_ingredient(key)
    tags = normalize_intolerances(split_tags(intolerances))
    resolver = SubstitutionResolver(ctx)
    best = resolver.require_substitute(key, tags)
    ranked = resolver.candidates_for(key, tags)
    logger.info("Substitute for %s under %s: %s", key, sorted(tags), best.key)
    return SubstituteResponse(
        ingredient_key=key,
        intolerances=sorted(tags),
        substitute=IngredientOut.from_domain(best),
        kcal_difference=round(abs(best.kcal - original.kcal), 1),
        alternatives=[i.key for i in ranked[1:]],
    )
