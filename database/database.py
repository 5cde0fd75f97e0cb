"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and a simple `init_db` helper that
creates tables and seeds the ingredient pool and cultural rule set when the
tables are empty.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from core.config import WRITE_DATABASE_URL, READ_DATABASE_URL
from core.logger import get_logger
from .models import Base
from data.ingredients_dataset import INGREDIENTS_DATA
from data.cultural_rules_dataset import CULTURAL_RULES_DATA

logger = get_logger("database")


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


# Read/Write partitioning pattern
# In production, set WRITE_DATABASE_URL and READ_DATABASE_URL to different DB instances.
# For SQLite/demo this defaults to the same file but the interfaces are separated.
write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def seed_database(session: Session) -> dict:
    """Seed the built-in ingredient pool and cultural rules into empty tables.

    Args:
        session: Write session; committed when anything is added.

    Returns:
        Dictionary with the number of ingredients and rules added.
    """
    # Imported here: core.repository depends on the models in this package.
    from core.repository import IngredientRepository, CulturalRuleRepository

    added = {"ingredients": 0, "rules": 0}
    ingredients = IngredientRepository(session)
    if ingredients.count() == 0:
        ingredients.create_many([ingredients.build_row(r) for r in INGREDIENTS_DATA])
        added["ingredients"] = len(INGREDIENTS_DATA)
    rules = CulturalRuleRepository(session)
    if rules.count() == 0:
        rules.create_many([rules.build_row(r) for r in CULTURAL_RULES_DATA])
        added["rules"] = len(CULTURAL_RULES_DATA)
    if added["ingredients"] or added["rules"]:
        logger.info("Seeded %s ingredients and %s cultural rules", added["ingredients"], added["rules"])
    return added


def init_db(engine=None):
    """Initialize database schema and seed the pool.

    Creates all tables using SQLAlchemy models and populates the ingredient
    and cultural rule tables with the built-in data if they are empty.

    Args:
        engine: Optional engine to initialize instead of the write engine.
    """
    engine = engine or write_engine
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        seed_database(session)
    finally:
        session.close()


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency to ensure the session is
    properly closed after the request completes.
    """
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope.

    Used for read endpoints where routing reads to a replica may be desired.
    """
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
