import os
import tempfile
from datetime import datetime, timedelta, timezone

# Settings are read at import time; point them at throwaway locations first.
_TMP_DIR = tempfile.mkdtemp(prefix="vendor-kyc-tests-")
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["JWT_SECRET"] = "test-secret"

from typing import AsyncGenerator

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import vendor_kyc.domain  # noqa: F401  (registers all tables on Base.metadata)
from vendor_kyc.core.config import settings
from vendor_kyc.core.security import Actor, Role
from vendor_kyc.db.base import Base, get_db
from vendor_kyc.main import app
from vendor_kyc.schemas.vendor import VendorRegistration
from vendor_kyc.services.storage import DocumentStorage, get_document_storage


async def _create_engine(url: str, **kwargs):
    engine = create_async_engine(url, **kwargs)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest.fixture
async def engine():
    """In-memory database shared by every session of one test."""
    engine = await _create_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    """On-disk database: each session gets its own connection, so writers really race."""
    engine = await _create_engine(f"sqlite+aiosqlite:///{tmp_path / 'kyc.db'}")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def file_session_factory(file_engine):
    return async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path) -> DocumentStorage:
    return DocumentStorage(tmp_path / "uploads", "/uploads")


@pytest.fixture
async def client(session_factory, storage) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, wired to the per-test database and upload dir."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_document_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Identities
# ---------------------------------------------------------------------------

@pytest.fixture
def reviewer() -> Actor:
    return Actor(user_id="admin-1", email="admin@kyc.test", role=Role.ADMIN, name="Admin")


@pytest.fixture
def make_vendor_actor():
    def _make(email: str = "a@x.com", user_id: str = "user-a") -> Actor:
        return Actor(user_id=user_id, email=email, role=Role.VENDOR)
    return _make


@pytest.fixture
def make_token():
    def _make(
        user_id: str,
        email: str,
        role: str,
        expires_in: timedelta = timedelta(hours=1),
        secret: str | None = None,
    ) -> str:
        claims = {
            "sub": user_id,
            "email": email,
            "role": role,
            "exp": datetime.now(timezone.utc) + expires_in,
        }
        return jwt.encode(claims, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return _make


@pytest.fixture
def auth_header(make_token):
    def _make(user_id: str, email: str, role: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id, email, role)}"}
    return _make


@pytest.fixture
def admin_headers(auth_header) -> dict[str, str]:
    return auth_header("admin-1", "admin@kyc.test", "admin")


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

@pytest.fixture
def registration_payload():
    """Camel-cased registration body, as the dashboard sends it."""

    def _make(email: str = "a@x.com", business_name: str = "Acme Traders") -> dict:
        return {
            "businessName": business_name,
            "businessCategory": "Trading",
            "contactPerson": "Asha Rao",
            "email": email,
            "phone": "+91-9800000000",
            "address": {
                "street": "12 MG Road",
                "city": "Bengaluru",
                "state": "Karnataka",
                "postalCode": "560001",
                "country": "India",
            },
        }
    return _make


@pytest.fixture
def make_registration(registration_payload):
    def _make(email: str = "a@x.com", business_name: str = "Acme Traders") -> VendorRegistration:
        return VendorRegistration.model_validate(registration_payload(email, business_name))
    return _make
