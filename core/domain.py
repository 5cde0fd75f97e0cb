"""Domain records for the meal pool pipeline.

These are strict, immutable pydantic models validated when the ingredient
pool and cultural rules are loaded. The generator, the compatibility filter
and the substitution resolver all exchange these types; none of them mutate
a record in place.
"""

import hashlib
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.config import GLOBAL_DEFAULT_COUNTRY
from core.exceptions import ValidationError
from core.intolerances import normalize_intolerances


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    MORNING_SNACK = "morning_snack"
    LUNCH = "lunch"
    AFTERNOON_SNACK = "afternoon_snack"
    DINNER = "dinner"
    SUPPER = "supper"


class Category(str, Enum):
    PROTEIN = "protein"
    CARB = "carb"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    BEVERAGE = "beverage"
    CONDIMENT = "condiment"
    FAT = "fat"
    DAIRY = "dairy"


class DietaryPreference(str, Enum):
    OMNIVORE = "omnivore"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    PESCATARIAN = "pescatarian"


class AnimalOrigin(str, Enum):
    MEAT = "meat"
    POULTRY = "poultry"
    FISH = "fish"
    SEAFOOD = "seafood"
    EGG = "egg"
    DAIRY = "dairy"
    HONEY = "honey"


class Staple(str, Enum):
    RICE = "rice"
    BEANS = "beans"


class MacroSource(str, Enum):
    TACO = "taco"
    TBCA = "tbca"
    USDA = "usda"
    ESTIMATED = "estimated"


class PortionUnit(str, Enum):
    GRAMS = "g"
    MILLILITERS = "ml"


# English slot names are canonical; Portuguese keys come from older clients.
MEAL_TYPE_ALIASES = {
    "cafe_manha": MealType.BREAKFAST,
    "cafe_da_manha": MealType.BREAKFAST,
    "lanche_manha": MealType.MORNING_SNACK,
    "lanche_da_manha": MealType.MORNING_SNACK,
    "almoco": MealType.LUNCH,
    "lanche_tarde": MealType.AFTERNOON_SNACK,
    "lanche_da_tarde": MealType.AFTERNOON_SNACK,
    "lanche": MealType.AFTERNOON_SNACK,
    "snack": MealType.AFTERNOON_SNACK,
    "snacks": MealType.AFTERNOON_SNACK,
    "jantar": MealType.DINNER,
    "ceia": MealType.SUPPER,
    "evening_snack": MealType.SUPPER,
}

DIETARY_ALIASES = {
    "none": DietaryPreference.OMNIVORE,
    "omnivoro": DietaryPreference.OMNIVORE,
    "vegetariano": DietaryPreference.VEGETARIAN,
    "vegano": DietaryPreference.VEGAN,
    "pescetarian": DietaryPreference.PESCATARIAN,
    "pescetariano": DietaryPreference.PESCATARIAN,
}


def normalize_meal_type(raw) -> MealType:
    """Return the canonical MealType for an English or Portuguese slot name."""
    if isinstance(raw, MealType):
        return raw
    key = str(raw or "").strip().lower().replace("-", "_").replace(" ", "_").replace("ç", "c")
    try:
        return MealType(key)
    except ValueError:
        pass
    if key in MEAL_TYPE_ALIASES:
        return MEAL_TYPE_ALIASES[key]
    raise ValidationError(
        f"Invalid meal_type '{raw}'. Use one of: {', '.join(m.value for m in MealType)}",
        field="meal_type",
    )


def normalize_dietary_preference(raw) -> DietaryPreference:
    """Return the canonical DietaryPreference; None means omnivore."""
    if raw is None or isinstance(raw, DietaryPreference):
        return raw or DietaryPreference.OMNIVORE
    key = str(raw).strip().lower()
    try:
        return DietaryPreference(key)
    except ValueError:
        pass
    if key in DIETARY_ALIASES:
        return DIETARY_ALIASES[key]
    raise ValidationError(f"Invalid dietary preference '{raw}'", field="dietary_filter")


def _tags_before(value):
    try:
        return normalize_intolerances(value)
    except ValidationError as exc:
        raise ValueError(exc.message) from exc


def _meal_types_before(value):
    if not value:
        return frozenset()
    try:
        return frozenset(normalize_meal_type(v) for v in value)
    except ValidationError as exc:
        raise ValueError(exc.message) from exc


class Ingredient(BaseModel):
    """A canonical pool ingredient with macros per 100g (or 100ml).

    Macros are immutable once published. Changing them silently invalidates
    every persisted meal that references the ingredient, since meals store
    their totals rather than recomputing them.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1)
    names: Dict[str, str]
    category: Category
    kcal: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    fiber: float = Field(..., ge=0)
    default_portion: float = Field(..., gt=0)
    unit: PortionUnit = PortionUnit.GRAMS
    safe_for_intolerances: FrozenSet[str] = frozenset()
    triggers_intolerances: FrozenSet[str] = frozenset()
    replaces: FrozenSet[str] = frozenset()
    meal_types: FrozenSet[MealType] = frozenset()
    animal_origin: Optional[AnimalOrigin] = None
    staple: Optional[Staple] = None
    macro_source: MacroSource = MacroSource.TACO

    @field_validator("safe_for_intolerances", "triggers_intolerances", mode="before")
    @classmethod
    def _normalize_tags(cls, v):
        return _tags_before(v)

    @field_validator("meal_types", mode="before")
    @classmethod
    def _normalize_meal_types(cls, v):
        return _meal_types_before(v)

    @field_validator("key")
    @classmethod
    def _strip_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("ingredient key must not be blank")
        return v

    @model_validator(mode="after")
    def _check_consistency(self):
        if not self.names.get("en"):
            raise ValueError("an English display name ('en') is required")
        overlap = self.safe_for_intolerances & self.triggers_intolerances
        if overlap:
            raise ValueError(f"tags both safe and triggered: {sorted(overlap)}")
        if self.key in self.replaces:
            raise ValueError("an ingredient cannot replace itself")
        return self

    @property
    def name(self) -> str:
        return self.names["en"]

    def display_name(self, language: str = "en") -> str:
        return self.names.get(language) or self.names["en"]

    def suits_meal_type(self, meal_type: MealType) -> bool:
        return not self.meal_types or meal_type in self.meal_types


class RequiredPairing(BaseModel):
    """If `if_key` is in a meal, `then_key` joins it with the given probability."""

    model_config = ConfigDict(frozen=True)

    if_key: str
    then_key: str
    probability: float = Field(1.0, ge=0, le=1)


class CulturalRule(BaseModel):
    """Composition template for one (country_code, meal_type) slot."""

    model_config = ConfigDict(frozen=True)

    country_code: str = Field(..., min_length=1)
    meal_type: MealType
    required_components: Tuple[Category, ...]
    optional_components: Tuple[Category, ...] = ()
    forbidden_components: FrozenSet[Category] = frozenset()
    typical_beverages: Tuple[str, ...] = ()
    forbidden_beverages: FrozenSet[str] = frozenset()
    max_prep_time: Optional[int] = Field(None, gt=0)
    fallback_country: Optional[str] = None
    structure: str = ""
    required_pairings: Tuple[RequiredPairing, ...] = ()
    forbidden_pairs: Tuple[FrozenSet[str], ...] = ()

    @field_validator("meal_type", mode="before")
    @classmethod
    def _normalize_meal_type(cls, v):
        try:
            return normalize_meal_type(v)
        except ValidationError as exc:
            raise ValueError(exc.message) from exc

    @field_validator("country_code", "fallback_country")
    @classmethod
    def _upper(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip().upper()
        return v or None

    @model_validator(mode="after")
    def _check_components(self):
        if not self.required_components:
            raise ValueError("a rule needs at least one required component")
        clash = (set(self.required_components) | set(self.optional_components)) & set(self.forbidden_components)
        if clash:
            raise ValueError(f"components both allowed and forbidden: {sorted(c.value for c in clash)}")
        if self.fallback_country and self.fallback_country == self.country_code:
            raise ValueError("a rule cannot fall back to its own country")
        if self.country_code == GLOBAL_DEFAULT_COUNTRY and self.fallback_country:
            raise ValueError("the global default rule cannot declare a fallback")
        for group in self.forbidden_pairs:
            if len(group) < 2:
                raise ValueError("forbidden pairs need at least two ingredient keys")
        return self

    @property
    def rule_id(self) -> str:
        return f"{self.country_code}:{self.meal_type.value}"


class MealComponent(BaseModel):
    model_config = ConfigDict(frozen=True)

    ingredient_key: str
    name: str
    component_type: Category
    portion: float
    unit: PortionUnit = PortionUnit.GRAMS
    staple: Optional[Staple] = None

    @property
    def portion_label(self) -> str:
        return f"{self.portion:g}{self.unit.value}"

    @classmethod
    def from_ingredient(cls, ingredient: Ingredient, portion: Optional[float] = None) -> "MealComponent":
        return cls(
            ingredient_key=ingredient.key,
            name=ingredient.name,
            component_type=ingredient.category,
            portion=portion if portion is not None else ingredient.default_portion,
            unit=ingredient.unit,
            staple=ingredient.staple,
        )


class Substitution(BaseModel):
    model_config = ConfigDict(frozen=True)

    original: str
    substitute: str


class MealCandidate(BaseModel):
    """A generated meal with its aggregate macros and safety tags."""

    model_config = ConfigDict(frozen=True)

    name: str
    meal_type: MealType
    country_code: str
    components: Tuple[MealComponent, ...]
    total_calories: int
    total_protein: float
    total_carbs: float
    total_fat: float
    total_fiber: float
    blocked_for_intolerances: Tuple[str, ...] = ()
    meal_density: str = "moderate"
    confidence: float = 1.0
    combination_hash: str
    substitutions: Tuple[Substitution, ...] = ()

    @property
    def ingredient_keys(self) -> List[str]:
        return [c.ingredient_key for c in self.components]

    @property
    def component_types(self) -> FrozenSet[Category]:
        return frozenset(c.component_type for c in self.components)


class UserConstraintProfile(BaseModel):
    """Filter input describing what a user cannot or will not eat."""

    model_config = ConfigDict(frozen=True)

    intolerances: FrozenSet[str] = frozenset()
    dietary_preference: DietaryPreference = DietaryPreference.OMNIVORE
    excluded_ingredients: FrozenSet[str] = frozenset()

    @field_validator("intolerances", mode="before")
    @classmethod
    def _normalize_tags(cls, v):
        return _tags_before(v)

    @field_validator("excluded_ingredients", mode="before")
    @classmethod
    def _strip_keys(cls, v):
        return frozenset(k.strip() for k in (v or ()) if k and k.strip())

    @field_validator("dietary_preference", mode="before")
    @classmethod
    def _diet(cls, v):
        try:
            return normalize_dietary_preference(v)
        except ValidationError as exc:
            raise ValueError(exc.message) from exc


def combination_hash(components: Iterable[MealComponent]) -> str:
    """Stable content hash of a meal: sorted `key:portion` pairs, SHA-1."""
    parts = sorted(f"{c.ingredient_key}:{c.portion:g}" for c in components)
    return hashlib.sha1("|".join(parts).encode("utf-8")).hexdigest()
