"""
Pytest fixtures for CareerCrafter API tests.
Uses a throwaway SQLite file (the resume aggregator reads through several
sessions at once, so every connection must see the same database), a fake
text generator in place of the hosted model, and test users with auth tokens.
"""
import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Point the app at a temp database before config/session load.
# Must override any .env DATABASE_URL
_DB_DIR = tempfile.mkdtemp(prefix="careercrafter-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["OPENAI_API_KEY"] = ""

from careercrafter.app.db.base import Base
from careercrafter.app.db.session import SessionLocal, engine
from careercrafter.main import app
from careercrafter.app.core.dependencies import get_ai_gateway, get_db
from careercrafter.app.core.security import create_access_token, get_password_hash
from careercrafter.app.models.resume import Resume
from careercrafter.app.models.user import User
from careercrafter.app.services.ai_service import AIEnhancementGateway

TestingSessionLocal = SessionLocal


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


class FakeTextGenerator:
    """Stands in for the hosted model: returns queued responses, records every call."""

    def __init__(self):
        self.responses: list[str] = []
        self.calls: list[dict] = []
        self.error: Exception | None = None

    def queue(self, *responses: str) -> "FakeTextGenerator":
        self.responses.extend(responses)
        return self

    def generate_text(self, messages, max_tokens=500):
        self.calls.append({"messages": messages, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.responses.pop(0) if self.responses else ""


@pytest.fixture(scope="function")
def db_session():
    """Create tables and a fresh DB session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def _make_user(db_session, user_id: int, email: str) -> User:
    user = User(
        id=user_id,
        first_name="Test",
        last_name=f"User{user_id}",
        email=email,
        hashed_password=get_password_hash("testpass123"),
        is_active=1,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session):
    """Create a test user in the DB."""
    return _make_user(db_session, 1, "test@example.com")


@pytest.fixture
def other_user(db_session):
    """A second user who owns nothing of test_user's."""
    return _make_user(db_session, 2, "other@example.com")


def _headers_for(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id), "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user):
    """Bearer token for test user."""
    return _headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user):
    """Bearer token for the second user."""
    return _headers_for(other_user)


@pytest.fixture
def client(db_session, test_user):
    """TestClient with DB and test user pre-seeded."""
    return TestClient(app)


@pytest.fixture
def resume(db_session, test_user):
    """An empty resume owned by test_user."""
    r = Resume(user_id=test_user.id, title="Backend Engineer")
    db_session.add(r)
    db_session.commit()
    db_session.refresh(r)
    return r


@pytest.fixture
def other_resume(db_session, other_user):
    """An empty resume owned by other_user."""
    r = Resume(user_id=other_user.id, title="Other Person's Resume")
    db_session.add(r)
    db_session.commit()
    db_session.refresh(r)
    return r


@pytest.fixture
def text_generator():
    """A bare FakeTextGenerator for gateway unit tests."""
    return FakeTextGenerator()


@pytest.fixture
def fake_generator(text_generator):
    """Route AI endpoints through a FakeTextGenerator for the duration of a test."""
    generator = text_generator
    app.dependency_overrides[get_ai_gateway] = lambda: AIEnhancementGateway(generator)
    try:
        yield generator
    finally:
        app.dependency_overrides.pop(get_ai_gateway, None)
