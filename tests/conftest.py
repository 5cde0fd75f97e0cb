"""Shared fixtures: an in-memory seeded database, a pool context and an API client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from data.cultural_rules_dataset import CULTURAL_RULES_DATA
from data.ingredients_dataset import INGREDIENTS_DATA
from database import init_db
from database.deps import get_db_read, get_db_write
from services.pool_context import PoolContext


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database seeded with the built-in pool."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    db = sessionmaker(bind=engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def ctx():
    """Pool context built straight from the built-in records."""
    return PoolContext.from_records(INGREDIENTS_DATA, CULTURAL_RULES_DATA)


@pytest.fixture
def client(engine):
    """TestClient whose read and write sessions point at the in-memory DB."""
    from main import app

    factory = sessionmaker(bind=engine)

    def override():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db_read] = override
    app.dependency_overrides[get_db_write] = override
    # No context manager: the lifespan would initialize the default database.
    yield TestClient(app)
    app.dependency_overrides.clear()
