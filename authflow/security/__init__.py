"""Security module.

This package provides reference collaborators and HTTP dependencies:
- JWT token management (issuance, verification)
- bcrypt password hashing
- FastAPI dependencies for protected endpoints (CurrentClaims, BearerToken)
"""

from .dependencies import BearerToken
from .dependencies import CurrentClaims
from .dependencies import get_auth_service
from .jwt import JWTTokenManager
from .password import BcryptPasswordHasher


__all__ = [
    "BcryptPasswordHasher",
    "BearerToken",
    "CurrentClaims",
    "JWTTokenManager",
    "get_auth_service",
]
