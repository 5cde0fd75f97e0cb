"""Repository classes for database operations.

Wraps the ORM models with the handful of queries the meal pool pipeline
needs and owns the JSON encoding of list-valued columns, so services and
API endpoints deal in plain dicts and domain records rather than rows.
"""

import json
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import TypeVar, Generic, Type, Optional, List, Any, Dict, Iterable, Set

from core.domain import MealCandidate
from core.exceptions import PersistenceConflictError
from database.models import Base, IngredientModel, CulturalRuleModel, MealPoolEntry, RejectedCombination

T = TypeVar('T', bound=Base)


def _dumps(value) -> str:
    if isinstance(value, (set, frozenset)):
        value = sorted(value)
    return json.dumps(value)


def _loads(raw: Optional[str], default=None):
    if raw is None or raw == "":
        return default
    return json.loads(raw)


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        """Initialize repository with model and session.

        Args:
            model: SQLAlchemy model class.
            session: Database session.
        """
        self.model = model
        self.session = session

    def create_many(self, objects: List[T]) -> List[T]:
        """Add multiple objects and commit them in one transaction.

        Args:
            objects: List of model instances to persist.

        Returns:
            List of persisted objects with refreshed attributes.
        """
        self.session.add_all(objects)
        self.session.commit()
        for obj in objects:
            self.session.refresh(obj)
        return objects

    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve an object by its primary key.

        Args:
            id: Primary key value.

        Returns:
            Model instance or None if not found.
        """
        return self.session.get(self.model, id)

    def count(self) -> int:
        """Count total number of records.

        Returns:
            Total count of model instances.
        """
        return self.session.query(self.model).count()


class IngredientRepository(BaseRepository[IngredientModel]):
    """Read/write access to the canonical ingredient pool."""

    def __init__(self, session: Session):
        super().__init__(IngredientModel, session)

    @staticmethod
    def build_row(record: Dict[str, Any]) -> IngredientModel:
        """Create an (unsaved) row from a plain ingredient record dict."""
        return IngredientModel(
            key=record["key"],
            names=_dumps(record.get("names", {})),
            category=record["category"],
            kcal=record["kcal"],
            protein=record["protein"],
            carbs=record["carbs"],
            fat=record["fat"],
            fiber=record.get("fiber", 0.0),
            default_portion=record["default_portion"],
            unit=record.get("unit", "g"),
            safe_for_intolerances=_dumps(record.get("safe_for_intolerances", [])),
            triggers_intolerances=_dumps(record.get("triggers_intolerances", [])),
            replaces=_dumps(record.get("replaces", [])),
            meal_types=_dumps(record.get("meal_types", [])),
            animal_origin=record.get("animal_origin"),
            staple=record.get("staple"),
            macro_source=record.get("macro_source", "taco"),
        )

    @staticmethod
    def to_record(row: IngredientModel) -> Dict[str, Any]:
        """Decode a row back into the plain dict accepted by `Ingredient`."""
        return {
            "key": row.key,
            "names": _loads(row.names, {}),
            "category": row.category,
            "kcal": row.kcal,
            "protein": row.protein,
            "carbs": row.carbs,
            "fat": row.fat,
            "fiber": row.fiber,
            "default_portion": row.default_portion,
            "unit": row.unit,
            "safe_for_intolerances": _loads(row.safe_for_intolerances, []),
            "triggers_intolerances": _loads(row.triggers_intolerances, []),
            "replaces": _loads(row.replaces, []),
            "meal_types": _loads(row.meal_types, []),
            "animal_origin": row.animal_origin,
            "staple": row.staple,
            "macro_source": row.macro_source,
        }

    def existing_keys(self) -> Set[str]:
        return {k for (k,) in self.session.query(IngredientModel.key).all()}

    def list_records(self) -> List[Dict[str, Any]]:
        rows = self.session.query(IngredientModel).order_by(IngredientModel.key).all()
        return [self.to_record(r) for r in rows]


class CulturalRuleRepository(BaseRepository[CulturalRuleModel]):
    """Read/write access to the cultural rule set."""

    def __init__(self, session: Session):
        super().__init__(CulturalRuleModel, session)

    @staticmethod
    def build_row(record: Dict[str, Any]) -> CulturalRuleModel:
        return CulturalRuleModel(
            country_code=record["country_code"],
            meal_type=record["meal_type"],
            required_components=_dumps(record.get("required_components", [])),
            optional_components=_dumps(record.get("optional_components", [])),
            forbidden_components=_dumps(record.get("forbidden_components", [])),
            typical_beverages=_dumps(record.get("typical_beverages", [])),
            forbidden_beverages=_dumps(record.get("forbidden_beverages", [])),
            max_prep_time=record.get("max_prep_time"),
            fallback_country=record.get("fallback_country"),
            structure=record.get("structure", ""),
            required_pairings=_dumps(record.get("required_pairings", [])),
            forbidden_pairs=_dumps([sorted(p) for p in record.get("forbidden_pairs", [])]),
            active=record.get("active", True),
        )

    @staticmethod
    def to_record(row: CulturalRuleModel) -> Dict[str, Any]:
        return {
            "country_code": row.country_code,
            "meal_type": row.meal_type,
            "required_components": _loads(row.required_components, []),
            "optional_components": _loads(row.optional_components, []),
            "forbidden_components": _loads(row.forbidden_components, []),
            "typical_beverages": _loads(row.typical_beverages, []),
            "forbidden_beverages": _loads(row.forbidden_beverages, []),
            "max_prep_time": row.max_prep_time,
            "fallback_country": row.fallback_country,
            "structure": row.structure or "",
            "required_pairings": _loads(row.required_pairings, []),
            "forbidden_pairs": _loads(row.forbidden_pairs, []),
        }

    def active_records(self) -> List[Dict[str, Any]]:
        rows = (
            self.session.query(CulturalRuleModel)
            .filter(CulturalRuleModel.active.is_(True))
            .order_by(CulturalRuleModel.country_code, CulturalRuleModel.meal_type)
            .all()
        )
        return [self.to_record(r) for r in rows]


class MealPoolRepository(BaseRepository[MealPoolEntry]):
    """Insert-only access to the shared meal pool."""

    def __init__(self, session: Session):
        super().__init__(MealPoolEntry, session)

    def insert_unique(self, candidate: MealCandidate) -> MealPoolEntry:
        """Persist an accepted meal in its own transaction.

        Args:
            candidate: Fully accepted meal candidate.

        Returns:
            The persisted row.

        Raises:
            PersistenceConflictError: A meal with the same content already
                exists for this meal type. Nothing is written.
        """
        entry = MealPoolEntry(
            name=candidate.name,
            meal_type=candidate.meal_type.value,
            country_codes=_dumps([candidate.country_code]),
            components=_dumps([
                {
                    "ingredient_key": c.ingredient_key,
                    "name": c.name,
                    "type": c.component_type.value,
                    "portion": c.portion,
                    "portion_label": c.portion_label,
                }
                for c in candidate.components
            ]),
            total_calories=candidate.total_calories,
            total_protein=candidate.total_protein,
            total_carbs=candidate.total_carbs,
            total_fat=candidate.total_fat,
            total_fiber=candidate.total_fiber,
            blocked_for_intolerances=_dumps(list(candidate.blocked_for_intolerances)),
            meal_density=candidate.meal_density,
            confidence=candidate.confidence,
            content_hash=candidate.combination_hash,
        )
        self.session.add(entry)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise PersistenceConflictError(candidate.combination_hash, candidate.meal_type.value) from exc
        self.session.refresh(entry)
        return entry

    def list_entries(
        self,
        meal_type: Optional[str] = None,
        country_code: Optional[str] = None,
        safe_for: Iterable[str] = (),
        skip: int = 0,
        limit: int = 100,
    ) -> List[MealPoolEntry]:
        """List persisted meals, optionally filtered.

        JSON columns are filtered after loading, so `skip`/`limit` apply to
        the filtered result.
        """
        query = self.session.query(MealPoolEntry)
        if meal_type:
            query = query.filter(MealPoolEntry.meal_type == meal_type)
        rows = query.order_by(MealPoolEntry.id).all()
        safe_for = set(safe_for)
        out = []
        for row in rows:
            if country_code and country_code not in _loads(row.country_codes, []):
                continue
            if safe_for and safe_for & set(_loads(row.blocked_for_intolerances, [])):
                continue
            out.append(row)
        return out[skip:skip + limit]

    @staticmethod
    def to_dict(entry: MealPoolEntry) -> Dict[str, Any]:
        return {
            "id": entry.id,
            "name": entry.name,
            "meal_type": entry.meal_type,
            "country_codes": _loads(entry.country_codes, []),
            "components": _loads(entry.components, []),
            "total_calories": entry.total_calories,
            "total_protein": entry.total_protein,
            "total_carbs": entry.total_carbs,
            "total_fat": entry.total_fat,
            "total_fiber": entry.total_fiber,
            "blocked_for_intolerances": _loads(entry.blocked_for_intolerances, []),
            "meal_density": entry.meal_density,
            "confidence": entry.confidence,
            "content_hash": entry.content_hash,
        }


class RejectedCombinationRepository(BaseRepository[RejectedCombination]):
    """Combinations the generator must skip for a country and meal type."""

    def __init__(self, session: Session):
        super().__init__(RejectedCombination, session)

    def hashes_for(self, country_code: str, meal_type: str) -> Set[str]:
        rows = (
            self.session.query(RejectedCombination.combination_hash)
            .filter(
                RejectedCombination.country_code == country_code,
                RejectedCombination.meal_type == meal_type,
            )
            .all()
        )
        return {h for (h,) in rows}

    def add(self, country_code: str, meal_type: str, combination_hash: str, reason: Optional[str] = None) -> bool:
        """Record a rejected combination. Returns False if it was already listed."""
        if combination_hash in self.hashes_for(country_code, meal_type):
            return False
        self.session.add(RejectedCombination(
            country_code=country_code,
            meal_type=meal_type,
            combination_hash=combination_hash,
            reason=reason,
        ))
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return False
        return True
