"""Cultural rules API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database.deps import get_db_read
from core.logger import get_logger
from schemas import ResolvedRuleResponse
from services.pool_context import PoolContext
from services.rule_resolver import RuleResolver, normalize_country_code

logger = get_logger("api.rules")
router = APIRouter(prefix="/api/rules", tags=["rules"])


@router.get("/{country_code}/{meal_type}", response_model=ResolvedRuleResponse)
def resolve_rule(country_code: str, meal_type: str, db: Session = Depends(get_db_read)):
    """Return the cultural rule applied to a country and meal type, with the fallback chain followed.

    Raises:
        ValidationError: Unknown meal type.
        NoRuleFoundError: No rule applies, even after fallbacks.
    """
    ctx = PoolContext.load(db)
    rule, chain = RuleResolver(ctx).resolve_with_chain(country_code, meal_type)
    logger.info("Resolved %s/%s to %s via %s", country_code, meal_type, rule.rule_id, chain)
    return ResolvedRuleResponse.from_domain(normalize_country_code(country_code), rule, chain)
