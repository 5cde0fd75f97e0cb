"""SQLAlchemy ORM models for the meal pool service.

This module defines the database schema: the ingredient pool, the cultural
rule set, the shared meal pool and rejected meal combinations. List and
mapping attributes are stored as JSON-encoded strings. Models are plain
declarative classes and intentionally keep behavior-free (no business logic).
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Boolean, Index, UniqueConstraint
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class IngredientModel(Base):
    """ORM model for one canonical pool ingredient (macros per 100g/100ml)."""

    __tablename__ = "ingredients"
    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, nullable=False, unique=True, index=True)
    names = Column(Text, nullable=False)
    category = Column(String, nullable=False, index=True)
    kcal = Column(Float, nullable=False)
    protein = Column(Float, nullable=False)
    carbs = Column(Float, nullable=False)
    fat = Column(Float, nullable=False)
    fiber = Column(Float, nullable=False, default=0.0)
    default_portion = Column(Float, nullable=False)
    unit = Column(String, nullable=False, default="g")
    safe_for_intolerances = Column(Text, nullable=True)
    triggers_intolerances = Column(Text, nullable=True)
    replaces = Column(Text, nullable=True)
    meal_types = Column(Text, nullable=True)
    animal_origin = Column(String, nullable=True)
    staple = Column(String, nullable=True)
    macro_source = Column(String, nullable=False, default="taco")
    created_at = Column(DateTime, default=datetime.utcnow)


class CulturalRuleModel(Base):
    """ORM model for a per-country, per-meal-type composition rule.

    Country code "*" holds the global default rule for a meal type. Only one
    active rule may hold a slot; superseded rules stay as inactive rows.
    """

    __tablename__ = "cultural_rules"

    id = Column(Integer, primary_key=True, index=True)
    country_code = Column(String, nullable=False, index=True)
    meal_type = Column(String, nullable=False)
    required_components = Column(Text, nullable=False)
    optional_components = Column(Text, nullable=True)
    forbidden_components = Column(Text, nullable=True)
    typical_beverages = Column(Text, nullable=True)
    forbidden_beverages = Column(Text, nullable=True)
    max_prep_time = Column(Integer, nullable=True)
    fallback_country = Column(String, nullable=True)
    structure = Column(Text, nullable=True)
    required_pairings = Column(Text, nullable=True)
    forbidden_pairs = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)


Index(
    "uq_cultural_rule_active_slot",
    CulturalRuleModel.country_code,
    CulturalRuleModel.meal_type,
    unique=True,
    sqlite_where=CulturalRuleModel.active.is_(True),
    postgresql_where=CulturalRuleModel.active.is_(True),
)


class MealPoolEntry(Base):
    """ORM model for a generated meal shared across users.

    Rows are insert-only; the (meal_type, content_hash) constraint makes a
    second insert of the same content fail instead of duplicating it.
    """

    __tablename__ = "meal_pool"
    __table_args__ = (UniqueConstraint("meal_type", "content_hash", name="uq_meal_pool_content"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    meal_type = Column(String, nullable=False, index=True)
    country_codes = Column(Text, nullable=False)
    components = Column(Text, nullable=False)
    total_calories = Column(Integer, nullable=False)
    total_protein = Column(Float, nullable=False)
    total_carbs = Column(Float, nullable=False)
    total_fat = Column(Float, nullable=False)
    total_fiber = Column(Float, nullable=False)
    blocked_for_intolerances = Column(Text, nullable=True)
    meal_density = Column(String, nullable=False)
    confidence = Column(Float, nullable=False)
    content_hash = Column(String(40), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class RejectedCombination(Base):
    """ORM model for a meal combination that must never be generated again."""

    __tablename__ = "rejected_combinations"
    __table_args__ = (
        UniqueConstraint("country_code", "meal_type", "combination_hash", name="uq_rejected_combination"),
    )

    id = Column(Integer, primary_key=True, index=True)
    country_code = Column(String, nullable=False)
    meal_type = Column(String, nullable=False)
    combination_hash = Column(String(40), nullable=False)
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
