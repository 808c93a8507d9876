"""Per-request AuthService construction.

A service factory is a zero-argument callable returning an async context
manager that yields a ready ``AuthService``. The HTTP layer opens one per
request, so request-scoped collaborators (database sessions) never leak
across requests.
"""

from collections.abc import AsyncGenerator
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio import async_sessionmaker

from authflow.core.database import get_session_context

from .adapters import default_user_adapter
from .entities import User
from .ports import CacheStore
from .ports import PasswordHasher
from .ports import TokenManager
from .ports import UserAdapter
from .repositories import UserRepository
from .services import AuthService


type AuthServiceFactory = Callable[[], AbstractAsyncContextManager[AuthService]]


def database_service_factory(
    session_factory: async_sessionmaker[AsyncSession],
    hasher: PasswordHasher,
    token: TokenManager,
    cache: CacheStore | None = None,
    users: UserAdapter[User] = default_user_adapter,
) -> AuthServiceFactory:
    """Build services backed by the SQLAlchemy user store.

    Each service gets its own session, committed when the caller's block
    succeeds and rolled back when it raises.

    Usage:
        ```python
        factory = database_service_factory(
            create_session_factory(create_engine()),
            hasher=BcryptPasswordHasher(),
            token=JWTTokenManager(),
            cache=RedisCacheStore.from_url(settings.redis_url),
        )
        app = create_app(factory)
        ```
    """

    @asynccontextmanager
    async def factory() -> AsyncGenerator[AuthService[User], None]:
        async with get_session_context(session_factory) as session:
            yield AuthService(
                user_repo=UserRepository(session),
                hasher=hasher,
                token=token,
                users=users,
                cache=cache,
            )

    return factory


def shared_service_factory(auth_service: AuthService) -> AuthServiceFactory:
    """Hand out one service whose collaborators are safe to share across requests."""

    @asynccontextmanager
    async def factory() -> AsyncGenerator[AuthService, None]:
        yield auth_service

    return factory
