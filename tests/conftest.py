import os

# Must be set before library_api is imported: settings and engine are module level.
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import uuid
from datetime import date

import pytest
from fastapi.testclient import TestClient

from library_api.main import app
from library_api.db.session import engine, SessionLocal
from library_api.domain.author import Author
from library_api.models import Base
from library_api.repos.author_repo import AuthorRepository


@pytest.fixture(autouse=True)
def setup_test_database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def test_client():
    """Create a test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def sample_author(test_client):
    """Create a sample author through the API."""
    unique_suffix = uuid.uuid4().hex[:8]
    response = test_client.post(
        "/api/authors",
        json={"name": f"Test Author {unique_suffix}", "birthDate": "1970-05-01"},
    )
    assert response.status_code == 201, f"Failed to create sample author: {response.text}"
    return response.json()


@pytest.fixture
def second_author(test_client):
    response = test_client.post(
        "/api/authors",
        json={"name": "Second Author", "birthDate": "1980-01-15"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def sample_book(test_client, sample_author):
    """Create a sample single-author book through the API."""
    unique_suffix = uuid.uuid4().hex[:8]
    response = test_client.post(
        "/api/books",
        json={
            "title": f"Test Book {unique_suffix}",
            "price": "29.99",
            "authorIds": [sample_author["id"]],
        },
    )
    assert response.status_code == 201, f"Failed to create sample book: {response.text}"
    return response.json()


# Repository-level fixtures
@pytest.fixture
def sample_author_model(db_session):
    """Persist an author directly through the repository."""
    author = AuthorRepository.save(
        db_session, Author(name=f"Repo Author {uuid.uuid4().hex[:8]}", birth_date=date(1960, 3, 3))
    )
    db_session.commit()
    return author


@pytest.fixture
def headers_with_correlation():
    """HTTP headers with correlation ID."""
    return {"X-Request-ID": str(uuid.uuid4())}
