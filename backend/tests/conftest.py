"""Configure pytest for the NextHire backend."""

import os
import sys
from pathlib import Path

# Set test environment before any app imports
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["GATEKEEPER_VERIFY_TOKEN"] = "false"

backend_path = Path(__file__).parent.parent
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.security import PasswordHasher, TokenCodec  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.services.auth_service import AuthService  # noqa: E402
from app.services.credential_store import SqlCredentialStore  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh tables for each test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def codec():
    return TokenCodec(secret="test-secret", algorithm="HS256", expires_minutes=60 * 24)


@pytest.fixture
def service(db, hasher, codec):
    return AuthService(store=SqlCredentialStore(db), hasher=hasher, codec=codec)


@pytest.fixture
def client():
    """Create test client."""
    with TestClient(app) as c:
        yield c
