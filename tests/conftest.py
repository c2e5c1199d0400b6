"""Pytest configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from mealplan.database import Base, get_db
from mealplan.main import app

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/mealplan", "/mealplan_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from mealplan import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function", autouse=True)
def queued_tasks(monkeypatch):
    """Replace Celery ``.delay`` so no broker is needed; returns the mocks."""
    from mealplan.tasks import nutrition

    mocks = {
        "refresh_recipe_nutrition": MagicMock(),
        "refresh_all_recipe_nutrition": MagicMock(),
    }
    monkeypatch.setattr(
        nutrition.refresh_recipe_nutrition, "delay", mocks["refresh_recipe_nutrition"]
    )
    monkeypatch.setattr(
        nutrition.refresh_all_recipe_nutrition, "delay", mocks["refresh_all_recipe_nutrition"]
    )
    return mocks


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# --- Data helpers ---


@pytest.fixture
def make_ingredient(client):
    """Create an ingredient through the API and return its JSON."""

    def _make(name="Rice", base_unit="g", base_quantity=100, equivalences=None, **fields):
        payload = {
            "name": name,
            "base_unit": base_unit,
            "base_quantity": base_quantity,
            "equivalences": equivalences or [],
            **fields,
        }
        response = client.post("/api/v1/ingredients", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def rice(make_ingredient):
    """Rice: 130 kcal per 100 g, 185 g per cup."""
    return make_ingredient(
        "Rice",
        calories=130,
        protein=2.7,
        carbs=28,
        fat=0.3,
        fiber=0.4,
        sugar=0.1,
        tags=["Grain"],
        equivalences=[{"unit_name": "cup", "conversion_factor": 185}],
    )


@pytest.fixture
def oil(make_ingredient):
    """Olive oil: 884 kcal per 100 ml, 15 ml per tbsp."""
    return make_ingredient(
        "Olive oil",
        base_unit="ml",
        calories=884,
        fat=100,
        tags=["Oil"],
        equivalences=[{"unit_name": "tbsp", "conversion_factor": 15}],
    )


@pytest.fixture
def make_recipe(client):
    """Create a recipe through the API and return its JSON."""

    def _make(name, ingredients, porciones=1, **fields):
        payload = {"name": name, "porciones": porciones, "ingredients": ingredients, **fields}
        response = client.post("/api/v1/recipes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def meal_type(client):
    """A 'Lunch' meal type."""
    response = client.post("/api/v1/meal-types", json={"name": "Lunch"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def plan_meal(client, meal_type):
    """Plan a recipe on a day and return the entry JSON."""

    def _plan(recipe_id, day, porciones=1, meal_type_id=None):
        response = client.post(
            "/api/v1/meal-plans",
            json={
                "date": str(day),
                "meal_type_id": meal_type_id or meal_type["id"],
                "recipe_id": recipe_id,
                "porciones": porciones,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _plan


@pytest.fixture
def task_session(monkeypatch):
    """Point Celery tasks run in-process at the test database."""
    from mealplan.tasks import nutrition

    monkeypatch.setattr(nutrition, "SessionLocal", TestingSessionLocal)
