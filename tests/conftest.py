import pytest
import os
import uuid
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-pytest-only"
os.environ["OPENAI_API_KEY"] = "sk-test"

from app.database import Base, get_db, enable_sqlite_foreign_keys
from app.main import app
from app.models.user import User
from app.services import auth as auth_service
from app.services.storage import ObjectStorage, get_storage
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def storage(tmp_path):
    return ObjectStorage(str(tmp_path), "resumes")

@pytest.fixture(scope="function")
def make_user(db_session):
    """Factory for users that exist only in the database (no profile)."""
    def _make_user(email=None, password="Password123!"):
        user = User(
            email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            hashed_password=auth_service.get_password_hash(password),
            is_active=True,
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user

@pytest.fixture(scope="function")
def alice(make_user):
    return make_user("alice@example.com")

@pytest.fixture(scope="function")
def bob(make_user):
    return make_user("bob@example.com")

@pytest.fixture(scope="function")
def auth_headers():
    """Build a bearer header for a user."""
    def _auth_headers(user):
        token = auth_service.create_access_token(data={"sub": user.id, "email": user.email})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers

@pytest.fixture(scope="function")
def client(db_session, storage):
    """Get a TestClient that uses the test database session and storage via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

@pytest.fixture(scope="function")
def model_reply(monkeypatch):
    """
    Replace the chat-completion call with a canned reply.
    Returns the list of message lists the fake received.
    """
    calls = []

    def _install(reply):
        def fake_call(messages, temperature=None, max_tokens=None):
            calls.append(messages)
            if isinstance(reply, Exception):
                raise reply
            return reply
        monkeypatch.setattr("app.services.resume_ai.call_chat_completion", fake_call)
        return calls
    return _install

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

@pytest.fixture(scope="function")
def upload_resume(client, auth_headers):
    def _upload(user, filename="jane_doe_cv.pdf", content=b"%PDF-1.4 fake resume", content_type=PDF_TYPE):
        return client.post(
            "/api/resumes",
            files={"file": (filename, content, content_type)},
            headers=auth_headers(user),
        )
    return _upload

@pytest.fixture(scope="function")
def create_job(client, auth_headers):
    def _create(user, **overrides):
        payload = {
            "title": "Backend Engineer",
            "company": "Acme",
            "description": "Build and run Python services.",
            "requirements": "Python, SQL, Docker",
        }
        payload.update(overrides)
        return client.post("/api/job-descriptions", json=payload, headers=auth_headers(user))
    return _create
