"""Authentication domain services."""

import logging
import math
from datetime import UTC
from datetime import datetime

from authflow.abstract import Service
from authflow.core.config import get_settings
from authflow.exceptions import BlacklistedTokenException
from authflow.exceptions import InvalidCredentialsException
from authflow.exceptions import UserExistsException

from .ports import CacheStore
from .ports import PasswordHasher
from .ports import TokenClaims
from .ports import TokenManager
from .ports import UserAdapter
from .ports import UserRepository
from .schemas import LoginInput
from .schemas import LoginResult
from .schemas import RegisterInput
from .schemas import ValidationResult


logger = logging.getLogger(__name__)

# Value stored under a revocation key; only its presence matters
REVOKED_MARKER = "1"


class AuthService[UserT](Service):
    """Authentication service orchestrating registration, login and token checks.

    This service composes:
    - A user repository for persistence
    - A password hasher
    - A token manager for issuing and verifying tokens
    - An optional cache holding revocation markers (logout support)

    The service keeps no mutable state of its own and may be shared across
    concurrent requests. Without a cache, ``validate`` skips the revocation
    check and ``logout`` does nothing.

    Usage:
        ```python
        async with get_session_context() as session:
            auth_service = AuthService(
                user_repo=UserRepository(session),
                hasher=BcryptPasswordHasher(),
                token=JWTTokenManager(),
                users=default_user_adapter,
                cache=RedisCacheStore(redis),
            )
            user = await auth_service.register(RegisterInput(email=email, password=password))
            result = await auth_service.login(LoginInput(email=email, password=password))
        ```
    """

    def __init__(
        self,
        user_repo: UserRepository[UserT],
        hasher: PasswordHasher,
        token: TokenManager,
        users: UserAdapter[UserT],
        cache: CacheStore | None = None,
        *,
        blacklist_prefix: str | None = None,
    ) -> None:
        """Initialize auth service with dependencies.

        Args:
            user_repo: Repository for user operations.
            hasher: Password hasher.
            token: Token manager for issuing and verifying tokens.
            users: Operations on the user type.
            cache: Optional revocation cache. Revocation is disabled without one.
            blacklist_prefix: Revocation key prefix. Defaults to the configured one.
        """
        self._user_repo = user_repo
        self._hasher = hasher
        self._token = token
        self._users = users
        self._cache = cache
        self._blacklist_prefix = (
            blacklist_prefix if blacklist_prefix is not None else get_settings().blacklist_prefix
        )

    @property
    def users(self) -> UserAdapter[UserT]:
        """Operations on the user type this service was built with."""
        return self._users

    @property
    def revocation_enabled(self) -> bool:
        """Whether tokens can be revoked (a cache is configured)."""
        return self._cache is not None

    async def register(self, data: RegisterInput) -> UserT:
        """Register a new user.

        Args:
            data: Registration input.

        Returns:
            The user as persisted by the repository.

        Raises:
            UserExistsException: If the email is already registered.
        """
        existing = await self._user_repo.find_by_email(data.email)
        if existing is not None:
            raise UserExistsException()

        password_hash = await self._hasher.hash(data.password)
        user = self._users.build_user(data, password_hash)
        created = await self._user_repo.create(user)

        logger.info(f"Registered user {self._users.get_user_id(created)}")
        return created

    async def login(self, data: LoginInput) -> LoginResult[UserT]:
        """Authenticate with email and password and issue a token.

        Unknown email and wrong password raise the same exception so callers
        cannot tell which one occurred.

        Args:
            data: Login input.

        Returns:
            LoginResult with the user and a new token.

        Raises:
            InvalidCredentialsException: If the email is unknown or the password is wrong.
        """
        user = await self._user_repo.find_by_email(data.email)
        if user is None:
            logger.info("Login rejected")
            raise InvalidCredentialsException()

        matches = await self._hasher.compare(data.password, self._users.get_password_hash(user))
        if not matches:
            logger.info("Login rejected")
            raise InvalidCredentialsException()

        token = await self._token.issue(self._build_claims(user))

        logger.info(f"User {self._users.get_user_id(user)} logged in")
        return LoginResult(user=user, token=token)

    async def validate(self, token: str) -> ValidationResult[UserT]:
        """Check a token and resolve its subject.

        Every failure (verification error, revocation marker, repository error)
        collapses to ``ValidationResult(valid=False)`` with no cause attached.
        A valid token whose subject no longer exists is still valid, with
        ``user=None``.

        Args:
            token: Token string.

        Returns:
            ValidationResult for the token.
        """
        try:
            verified = await self._token.verify(token)

            if self._cache is not None:
                key = self._blacklist_key(verified.jti, token)
                if await self._cache.get(key) is not None:
                    raise BlacklistedTokenException()

            user = await self._user_repo.find_by_id(str(verified.claims["sub"]))
            return ValidationResult(valid=True, claims=verified.claims, user=user)
        except Exception as e:
            logger.debug(f"Token validation failed: {type(e).__name__}")
            return ValidationResult(valid=False)

    async def logout(self, token: str) -> None:
        """Revoke a token by writing a revocation marker.

        Does nothing when no cache is configured. The marker lives until the
        token would have expired anyway, or forever if the token has no expiry.

        Args:
            token: Token string to revoke.

        Raises:
            Any error raised by the token manager when the token cannot be verified.
        """
        if self._cache is None:
            return

        verified = await self._token.verify(token)
        key = self._blacklist_key(verified.jti, token)
        ttl = self._compute_ttl_seconds(verified.exp)
        await self._cache.set(key, REVOKED_MARKER, ttl)

        logger.info(f"Token revoked for subject {verified.claims.get('sub')}")

    def _build_claims(self, user: UserT) -> TokenClaims:
        """Build token claims; ``sub`` is set last so it cannot be overridden."""
        claims: TokenClaims = {}
        if self._users.build_claims is not None:
            claims.update(self._users.build_claims(user))
        claims["sub"] = self._users.get_user_id(user)
        return claims

    def _blacklist_key(self, jti: str | None, token: str) -> str:
        """Revocation key: token ID when present, raw token otherwise."""
        return f"{self._blacklist_prefix}{jti or token}"

    @staticmethod
    def _compute_ttl_seconds(exp: int | None, now: datetime | None = None) -> int | None:
        """Seconds until ``exp``, floored and clamped to at least 1.

        Args:
            exp: Expiration timestamp, or None for a token that never expires.
            now: Current time. Defaults to ``datetime.now(UTC)``.

        Returns:
            TTL in seconds, or None for no expiry.
        """
        if exp is None:
            return None
        now = now or datetime.now(UTC)
        remaining = math.floor(exp - now.timestamp())
        return max(remaining, 1)
