"""authflow: authentication orchestration over pluggable collaborators.

The AuthService composes a user store, a password hasher, a token manager
and an optional revocation cache behind four operations: register, login,
validate and logout. Reference collaborators live in ``authflow.security``,
``authflow.core.redis`` and ``authflow.domains.auth.repositories``.
"""

from .domains.auth import AuthService
from .domains.auth import CacheStore
from .domains.auth import LoginInput
from .domains.auth import LoginResult
from .domains.auth import PasswordHasher
from .domains.auth import RegisterInput
from .domains.auth import TokenClaims
from .domains.auth import TokenManager
from .domains.auth import UserAdapter
from .domains.auth import UserRepository
from .domains.auth import ValidationResult
from .domains.auth import VerifiedToken
from .exceptions import AuthException
from .exceptions import BaseAppException
from .exceptions import BlacklistedTokenException
from .exceptions import ExpiredTokenException
from .exceptions import InvalidCredentialsException
from .exceptions import InvalidTokenException
from .exceptions import UserExistsException
from .utilities.enums import AuthErrorCode


__version__ = "0.1.0"

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
    # Errors
    "AuthErrorCode",
    "AuthException",
    "BaseAppException",
    "BlacklistedTokenException",
    "ExpiredTokenException",
    "InvalidCredentialsException",
    "InvalidTokenException",
    "UserExistsException",
]
