"""Global test fixtures for authflow."""

# ruff: noqa: E402
# Set test environment BEFORE importing library modules
import os


os.environ["AUTHFLOW_ENVIRONMENT"] = "testing"

import dataclasses
import uuid
from collections.abc import AsyncGenerator
from typing import Any

import fakeredis.aioredis
import pytest
import pytest_asyncio
from httpx import ASGITransport
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

from authflow.core.database import create_engine
from authflow.core.database import create_schema
from authflow.core.database import create_session_factory
from authflow.core.redis import RedisCacheStore
from authflow.domains.auth.factory import shared_service_factory
from authflow.domains.auth.ports import UserAdapter
from authflow.domains.auth.schemas import RegisterInput
from authflow.domains.auth.services import AuthService
from authflow.main import create_app
from authflow.security.jwt import JWTTokenManager


TEST_SECRET = "test-secret-key"


# =============================================================================
# IN-MEMORY COLLABORATORS
# =============================================================================


@dataclasses.dataclass
class Account:
    """Caller-defined user type used by the service tests."""

    id: str
    email: str
    password_hash: str
    name: str | None = None


class MemoryUserRepository:
    """Dictionary-backed user store."""

    def __init__(self) -> None:
        self.by_id: dict[str, Account] = {}
        self.by_email: dict[str, Account] = {}

    async def find_by_email(self, email: str) -> Account | None:
        return self.by_email.get(email)

    async def find_by_id(self, user_id: str) -> Account | None:
        return self.by_id.get(user_id)

    async def create(self, user: Account) -> Account:
        self.by_id[user.id] = user
        self.by_email[user.email] = user
        return user

    async def update(self, user: Account) -> Account:
        return await self.create(user)

    def remove(self, user: Account) -> None:
        del self.by_id[user.id]
        del self.by_email[user.email]


class PlainHasher:
    """Reversible hasher; counts calls so tests can assert on side effects."""

    def __init__(self) -> None:
        self.hash_calls = 0

    async def hash(self, password: str) -> str:
        self.hash_calls += 1
        return f"hashed:{password}"

    async def compare(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


def build_account(data: RegisterInput, password_hash: str) -> Account:
    return Account(
        id=uuid.uuid4().hex,
        email=data.email,
        password_hash=password_hash,
        name=data.attributes.get("name"),
    )


def account_claims(user: Account) -> dict[str, Any]:
    return {"email": user.email}


account_adapter = UserAdapter(
    build_user=build_account,
    get_user_id=lambda user: user.id,
    get_password_hash=lambda user: user.password_hash,
)


# =============================================================================
# REDIS FIXTURES
# =============================================================================


@pytest.fixture
def fake_redis() -> fakeredis.aioredis.FakeRedis:
    """Provide a fake Redis client for testing."""
    return fakeredis.aioredis.FakeRedis(decode_responses=True)


@pytest.fixture
def cache(fake_redis) -> RedisCacheStore:
    """Provide a revocation cache backed by fake Redis."""
    return RedisCacheStore(fake_redis)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def user_repo() -> MemoryUserRepository:
    return MemoryUserRepository()


@pytest.fixture
def hasher() -> PlainHasher:
    return PlainHasher()


@pytest.fixture
def token_manager() -> JWTTokenManager:
    """Provide a JWT token manager with a fixed test secret."""
    return JWTTokenManager(secret_key=TEST_SECRET)


@pytest.fixture
def auth_service(user_repo, hasher, token_manager, cache) -> AuthService[Account]:
    """Provide an AuthService with revocation enabled."""
    return AuthService(
        user_repo=user_repo,
        hasher=hasher,
        token=token_manager,
        users=account_adapter,
        cache=cache,
    )


@pytest.fixture
def auth_service_no_cache(user_repo, hasher, token_manager) -> AuthService[Account]:
    """Provide an AuthService without a revocation cache."""
    return AuthService(
        user_repo=user_repo,
        hasher=hasher,
        token=token_manager,
        users=account_adapter,
    )


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Provide an in-memory SQLite engine with the schema created."""
    engine = create_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession]:
    """Provide a database session that is rolled back after the test."""
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


# =============================================================================
# API CLIENT FIXTURES
# =============================================================================


@pytest_asyncio.fixture
async def client(auth_service) -> AsyncGenerator[AsyncClient]:
    """Provide an async HTTP client for API testing."""
    app = create_app(shared_service_factory(auth_service))

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
