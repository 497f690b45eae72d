"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from todo_api.database import Base, engine_kwargs, get_db
from todo_api.main import app
from todo_api.models import Category, Todo
from todo_api.services.metrics import request_metrics

# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/todo_list", "/todo_list_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_kwargs(SQLALCHEMY_DATABASE_URL))
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


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
        request_metrics.reset()
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_todo(db):
    """Insert a todo directly, bypassing the service layer."""

    def _make_todo(title="Task", description="", priority=2, completed=False, **kwargs):
        todo = Todo(
            title=title,
            description=description,
            priority=priority,
            completed=completed,
            **kwargs,
        )
        db.add(todo)
        db.commit()
        return todo.id

    return _make_todo


@pytest.fixture
def make_category(db):
    """Insert a category directly."""

    def _make_category(name="Home", color="#00FF00"):
        category = Category(name=name, color=color)
        db.add(category)
        db.commit()
        return category.id

    return _make_category
