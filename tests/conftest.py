"""
Shared fixtures: in-memory database, fake model backends, signed-in users.
"""
import io
import os
from types import SimpleNamespace

os.environ.setdefault("SECRET_KEY", "test-secret-key")

import fitz  # pymupdf
import pytest
from docx import Document as DocxDocument
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from covercraft.main import app
from covercraft.core import config
from covercraft.core.auth_dependency import get_db
from covercraft.core.security import hash_password, create_access_token
from covercraft.db.base import Base
from covercraft.db.models.user import User
from covercraft.db.models.profile import Profile
from covercraft.llm.provider import LLMProvider, LLMResponse
from covercraft.llm.openai_provider import get_llm_provider
import covercraft.db.models  # noqa: F401


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeProvider(LLMProvider):
    """Records every chat call and answers with canned content."""

    def __init__(self, content="Dear Hiring Manager,\n\nI am excited to apply.", error=None):
        self.content = content
        self.error = error
        self.calls = []

    def chat(self, messages, model, temperature=0.7, max_tokens=None):
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model=model)


class FakeCompletions:
    """Stands in for ``client.chat.completions`` of the OpenAI SDK."""

    def __init__(self, content):
        self.content = content
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        return SimpleNamespace(
            choices=[SimpleNamespace(
                message=SimpleNamespace(content=self.content),
                finish_reason="stop",
            )],
            usage=SimpleNamespace(prompt_tokens=120, completion_tokens=80),
        )


@pytest.fixture(autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def cv_bucket(tmp_path, monkeypatch):
    """Point the CV bucket at a temporary directory."""
    bucket = tmp_path / "cv-files"
    monkeypatch.setattr(config, "CV_STORAGE_DIR", str(bucket))
    return bucket


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def client(fake_provider):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_provider] = lambda: fake_provider
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_completions():
    return FakeCompletions("Dear Acme,...")


def _make_user(db_session, email, full_name):
    user = User(email=email, password_hash=hash_password("testpass123"))
    db_session.add(user)
    db_session.flush()
    db_session.add(Profile(id=user.id, full_name=full_name, email=email))
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_user(db_session):
    return _make_user(db_session, "jane@example.com", "Jane Doe")


@pytest.fixture
def other_user(db_session):
    return _make_user(db_session, "john@example.com", "John Roe")


@pytest.fixture
def auth_headers(test_user):
    token = create_access_token({"sub": test_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user):
    token = create_access_token({"sub": other_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def pdf_bytes():
    """A one-page PDF resume."""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Jane Doe Senior Python Engineer")
    page.insert_text((72, 96), "Five years building Go and Python services")
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def docx_bytes():
    """A two-paragraph DOCX resume."""
    doc = DocxDocument()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("Backend engineer with 5 years of Go and Python")
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()
