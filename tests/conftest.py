"""Pytest configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_change_notifier
from src.database import Base, get_db
from src.main import app
from src.models.board import Board, BoardMember
from src.models.user import User
from src.services.auth import create_access_token
from src.services.realtime import ChangeNotifier


class AuthHeaders(dict):
    """Dict subclass that also stores user_id."""

    def __init__(self, *args, user_id: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/boards", "/boards_test")
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
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

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


@pytest.fixture
def notifier():
    """Notifier double that records published events."""
    return MagicMock(spec=ChangeNotifier)


@pytest.fixture(scope="function")
def client(db, notifier):
    """Create a test client with database and notifier overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_change_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, username: str) -> User:
    user = User(username=username)
    db.add(user)
    db.commit()
    return user


def auth_headers_for(user: User) -> AuthHeaders:
    token = create_access_token(user.id)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id)


@pytest.fixture
def owner(db):
    """The user who creates the board and its categories."""
    return make_user(db, "owner")


@pytest.fixture
def other_user(db):
    """A second user who can view the board but owns nothing on it."""
    return make_user(db, "other")


@pytest.fixture
def outsider(db):
    """A user with no access to the board."""
    return make_user(db, "outsider")


@pytest.fixture
def board(db, owner, other_user):
    """A board on team-1 shared with other_user."""
    board = Board(team_id="team-1", title="Roadmap", created_by=owner.id)
    db.add(board)
    db.flush()
    db.add(BoardMember(board_id=board.id, user_id=other_user.id))
    db.commit()
    return board


@pytest.fixture
def auth_headers(owner):
    """Auth headers for the board owner."""
    return auth_headers_for(owner)


@pytest.fixture
def other_headers(other_user):
    """Auth headers for the board member who owns no categories."""
    return auth_headers_for(other_user)


@pytest.fixture
def outsider_headers(outsider):
    """Auth headers for a user without board access."""
    return auth_headers_for(outsider)
