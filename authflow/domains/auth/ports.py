"""Capability interfaces the auth service depends on.

Consuming applications supply implementations of these protocols; the
``authflow.security``, ``authflow.core.redis`` and
``authflow.domains.auth.repositories`` modules ship reference ones.
"""

from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from typing import Protocol

from pydantic import BaseModel
from pydantic import Field

from .schemas import RegisterInput


# Token payload: always carries "sub", everything else is caller-defined
type TokenClaims = dict[str, Any]


class VerifiedToken(BaseModel):
    """Result of a successful token verification."""

    claims: TokenClaims = Field(description="Decoded token claims")
    jti: str | None = Field(default=None, description="Token unique ID")
    exp: int | None = Field(default=None, description="Expiration timestamp")


class UserRepository[UserT](Protocol):
    """Persistence for user entities.

    Errors raised by implementations propagate to the caller unmodified.
    """

    async def find_by_email(self, email: str) -> UserT | None: ...

    async def find_by_id(self, user_id: str) -> UserT | None: ...

    async def create(self, user: UserT) -> UserT: ...

    async def update(self, user: UserT) -> UserT: ...


class PasswordHasher(Protocol):
    """One-way password hashing."""

    async def hash(self, password: str) -> str: ...

    async def compare(self, password: str, hashed: str) -> bool: ...


class TokenManager(Protocol):
    """Token issuance and verification.

    ``verify`` must raise for any invalid, malformed, or expired token.
    """

    async def issue(self, claims: TokenClaims, *, expires_in_seconds: int | None = None) -> str: ...

    async def verify(self, token: str) -> VerifiedToken: ...


class CacheStore(Protocol):
    """Key-value cache used for revocation markers.

    A ``ttl_seconds`` of ``None`` means the entry never expires.
    """

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None: ...

    async def delete(self, key: str) -> None: ...


@dataclass(frozen=True, slots=True)
class UserAdapter[UserT]:
    """Operations the auth service needs on an otherwise opaque user type.

    Attributes:
        build_user: Build a new user from registration input and a password hash.
        get_user_id: Return the user's stable unique identifier.
        get_password_hash: Return the stored password hash.
        build_claims: Optional extra token claims for the user.
            A ``sub`` key returned here is always overridden by the user id.
    """

    build_user: Callable[[RegisterInput, str], UserT]
    get_user_id: Callable[[UserT], str]
    get_password_hash: Callable[[UserT], str]
    build_claims: Callable[[UserT], Mapping[str, Any]] | None = None
