"""Meal pool batch orchestration.

Runs one population batch end to end: normalize the request, snapshot the
pool, generate, filter, repair, persist, and report counts. Meals are only
written once fully accepted, so abandoning a batch part-way leaves the pool
consistent.
"""

from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from core.domain import UserConstraintProfile, normalize_dietary_preference, normalize_meal_type
from core.exceptions import NotFoundError, PersistenceConflictError
from core.intolerances import normalize_intolerances
from core.logger import get_logger
from core.repository import MealPoolRepository, RejectedCombinationRepository
from database.models import MealPoolEntry
from schemas.meal_pool_schema import (
    PooledMeal,
    PopulateMealPoolRequest,
    PopulateMealPoolResponse,
    RejectMealResponse,
    RuleSummary,
)
from services.compatibility_filter import CompatibilityFilter
from services.meal_generator import MealGenerator, meal_generator
from services.pool_context import PoolContext
from services.rule_resolver import RuleResolver, normalize_country_code
from services.substitution_resolver import SubstitutionResolver

logger = get_logger("services.meal_pool_service")


def to_pooled_meal(entry: MealPoolEntry, substitutions=()) -> PooledMeal:
    data = MealPoolRepository.to_dict(entry)
    data["substitutions"] = [{"original": s.original, "substitute": s.substitute} for s in substitutions]
    return PooledMeal(**data)


class MealPoolService:
    """Class-based orchestrator for meal pool batches."""

    def __init__(self, generator: Optional[MealGenerator] = None):
        self.generator = generator or meal_generator

    def populate(self, session: Session, request: PopulateMealPoolRequest) -> PopulateMealPoolResponse:
        """Generate, filter, repair and persist one batch of meals.

        Args:
            session: Write session used for the snapshot and the inserts.
            request: Batch parameters.

        Returns:
            PopulateMealPoolResponse with per-stage counts and inserted meals.

        Raises:
            ValidationError: On unknown meal types, tags or diets.
            NoRuleFoundError: When no cultural rule applies.
            PoolDataError / RuleValidationError: On malformed pool data.
        """
        meal_type = normalize_meal_type(request.meal_type)
        country = normalize_country_code(request.country_code)
        profile = UserConstraintProfile(
            intolerances=normalize_intolerances(request.intolerance_filter),
            dietary_preference=normalize_dietary_preference(request.dietary_filter),
            excluded_ingredients=frozenset(request.excluded_ingredients or []),
        )
        logger.info(
            "Populating meal pool: country=%s meal_type=%s quantity=%s intolerances=%s diet=%s",
            country, meal_type.value, request.quantity, sorted(profile.intolerances), profile.dietary_preference.value,
        )

        ctx = PoolContext.load(session)
        rule, chain = RuleResolver(ctx, self.generator.max_fallback_depth).resolve_with_chain(country, meal_type)
        rejected_hashes = RejectedCombinationRepository(session).hashes_for(country, meal_type.value)

        generation = self.generator.generate(
            ctx,
            country,
            meal_type,
            request.quantity,
            exclusion_list=request.exclusion_list or [],
            rejected_combinations=rejected_hashes,
            seed=request.seed,
        )

        resolver = SubstitutionResolver(ctx)
        result = CompatibilityFilter(ctx, resolver).filter(
            generation.candidates, profile, exclusion_list=request.exclusion_list or [], rule=rule,
        )
        accepted = list(result.accepted)
        for candidate, plans in result.needs_substitution:
            repaired = candidate
            for plan in plans:
                repaired = resolver.apply_substitution(repaired, plan.original_key, ctx.require_ingredient(plan.substitute_key))
            accepted.append(repaired)

        repository = MealPoolRepository(session)
        meals: List[PooledMeal] = []
        skipped = 0
        for candidate in accepted:
            try:
                entry = repository.insert_unique(candidate)
            except PersistenceConflictError:
                skipped += 1
                logger.debug("Skipping duplicate meal %s (%s)", candidate.name, candidate.combination_hash)
                continue
            meals.append(to_pooled_meal(entry, candidate.substitutions))

        logger.info(
            "Batch %s/%s done: generated=%s inserted=%s skipped=%s rejected=%s substituted=%s shortfall=%s",
            country, meal_type.value, len(generation.candidates), len(meals), skipped,
            len(result.rejected), len(result.needs_substitution), generation.shortfall,
        )
        return PopulateMealPoolResponse(
            success=True,
            generated=len(generation.candidates),
            inserted=len(meals),
            skipped=skipped,
            rejected=len(result.rejected),
            substituted=len(result.needs_substitution),
            shortfall=generation.shortfall,
            rule=RuleSummary(rule_id=rule.rule_id, chain=chain),
            meals=meals,
        )

    def list_meals(
        self,
        session: Session,
        meal_type: Optional[str] = None,
        country_code: Optional[str] = None,
        safe_for: Iterable[str] = (),
        skip: int = 0,
        limit: int = 100,
    ) -> List[PooledMeal]:
        """Persisted meals, filtered by slot, country and intolerance safety."""
        mt = normalize_meal_type(meal_type).value if meal_type else None
        country = normalize_country_code(country_code) if country_code else None
        entries = MealPoolRepository(session).list_entries(
            meal_type=mt,
            country_code=country,
            safe_for=normalize_intolerances(list(safe_for)),
            skip=skip,
            limit=limit,
        )
        return [to_pooled_meal(e) for e in entries]

    def get_meal(self, session: Session, meal_id: int) -> MealPoolEntry:
        entry = MealPoolRepository(session).get_by_id(meal_id)
        if entry is None:
            raise NotFoundError("Meal", meal_id)
        return entry

    def reject_meal(self, session: Session, meal_id: int, reason: Optional[str] = None) -> RejectMealResponse:
        """Mark a pooled meal's combination as rejected for its countries.

        The pooled row is kept; later batches for the same slot skip the
        combination during generation.

        Raises:
            NotFoundError: If the meal id does not exist.
        """
        entry = self.get_meal(session, meal_id)
        countries = MealPoolRepository.to_dict(entry)["country_codes"]
        repository = RejectedCombinationRepository(session)
        recorded = [c for c in countries if repository.add(c, entry.meal_type, entry.content_hash, reason=reason)]
        logger.info("Rejected combination %s for %s/%s (new for %s)", entry.content_hash, countries, entry.meal_type, recorded)
        return RejectMealResponse(
            meal_id=entry.id,
            meal_type=entry.meal_type,
            content_hash=entry.content_hash,
            country_codes=countries,
            recorded=bool(recorded),
        )


meal_pool_service = MealPoolService()
