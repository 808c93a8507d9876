"""Authentication domain.

This package provides the auth orchestration service and the
capability interfaces it depends on:
- AuthService: register, login, validate, logout
- Ports: UserRepository, PasswordHasher, TokenManager, CacheStore
- UserAdapter: operations on the caller's user type
"""

from .ports import CacheStore
from .ports import PasswordHasher
from .ports import TokenClaims
from .ports import TokenManager
from .ports import UserAdapter
from .ports import UserRepository
from .ports import VerifiedToken
from .schemas import LoginInput
from .schemas import LoginResult
from .schemas import RegisterInput
from .schemas import ValidationResult
from .services import AuthService


__all__ = [
    "AuthService",
    # Ports
    "CacheStore",
    "PasswordHasher",
    "TokenClaims",
    "TokenManager",
    "UserAdapter",
    "UserRepository",
    "VerifiedToken",
    # Schemas
    "LoginInput",
    "LoginResult",
    "RegisterInput",
    "ValidationResult",
]
