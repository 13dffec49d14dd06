"""
pytest Fixtures for the Book Review Service Tests

Shared fixtures:
- engine / db_session: a fresh in-memory SQLite database per test
- client: FastAPI TestClient whose get_db dependency uses db_session
- sample_* / second_*: users, books, reviews and comments

Each test gets its own database, so services are free to commit and roll
back exactly as they do in production.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# Set environment variables BEFORE importing the application
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookreview.database import Base, configure_sqlite, get_db
from bookreview.main import app
from bookreview.models import Book, Comment, Review, User

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast and isolated. configure_sqlite turns on foreign
# keys and BEGIN IMMEDIATE exactly as the application engine does; row
# locks (FOR UPDATE / FOR SHARE) are dropped by the SQLite dialect.


@pytest.fixture
def engine():
    """
    Create an in-memory SQLite engine with all tables.

    StaticPool keeps the single connection alive so the in-memory database
    survives between sessions.
    """
    engine = configure_sqlite(
        create_engine(
            "sqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Session bound to the per-test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client using the test session instead of the real database."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


def _persist(db_session: Session, obj):
    db_session.add(obj)
    db_session.commit()
    db_session.refresh(obj)
    return obj


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user (owner of sample_review)."""
    return _persist(db_session, User(username="testuser", email="testuser@example.com"))


@pytest.fixture
def second_user(db_session: Session) -> User:
    """Create a second user for ownership scenarios."""
    return _persist(db_session, User(username="seconduser", email="seconduser@example.com"))


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a sample book."""
    return _persist(
        db_session,
        Book(title="1984", author="George Orwell", isbn="9780451524935"),
    )


@pytest.fixture
def second_book(db_session: Session) -> Book:
    """Create a second book for filter scenarios."""
    return _persist(
        db_session,
        Book(title="Brave New World", author="Aldous Huxley", isbn="9780060850524"),
    )


@pytest.fixture
def sample_review(
    db_session: Session,
    sample_book: Book,
    sample_user: User,
) -> Review:
    """Create a review of sample_book written by sample_user."""
    return _persist(
        db_session,
        Review(
            book_id=sample_book.id,
            user_id=sample_user.id,
            content="I really enjoyed reading this book.",
            rating=4,
        ),
    )


@pytest.fixture
def second_review(
    db_session: Session,
    second_book: Book,
    second_user: User,
) -> Review:
    """Create a review of second_book written by second_user."""
    return _persist(
        db_session,
        Review(
            book_id=second_book.id,
            user_id=second_user.id,
            content="Unsettling and brilliant.",
            rating=5,
        ),
    )


@pytest.fixture
def sample_comment(
    db_session: Session,
    sample_review: Review,
    second_user: User,
) -> Comment:
    """Create a top-level comment on sample_review by second_user."""
    return _persist(
        db_session,
        Comment(
            review_id=sample_review.id,
            user_id=second_user.id,
            content="Completely agree with this.",
        ),
    )
