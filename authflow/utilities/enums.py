"""Shared enumeration module.

This module contains enumeration classes used across the library.
"""

from enum import StrEnum


class Environment(StrEnum):
    """Runtime environment enumeration.

    Used to control environment-specific behavior like debug mode and
    whether the HTTP docs are exposed.

    If an invalid or missing value is provided, defaults to DEVELOPMENT.
    """

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def _missing_(cls, value: object) -> "Environment":
        """Return default environment when value is invalid or missing.

        Args:
            value: The invalid value that was provided.

        Returns:
            DEVELOPMENT as the default environment.
        """
        return cls.DEVELOPMENT


class AuthErrorCode(StrEnum):
    """Closed set of error kinds raised by the authentication layer.

    Attributes:
        USER_EXISTS: Registration attempted for an email already on record.
        INVALID_CREDENTIALS: Unknown email or wrong password (never distinguished).
        TOKEN_INVALID: Token is malformed, expired, or otherwise rejected.
        TOKEN_BLACKLISTED: Token matched a revocation marker.
    """

    USER_EXISTS = "USER_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_BLACKLISTED = "TOKEN_BLACKLISTED"

    @classmethod
    def values(cls) -> list[str]:
        """Get list of all error code values.

        Example:
            AuthErrorCode.values()  # ["USER_EXISTS", "INVALID_CREDENTIALS", ...]
        """
        return [code.value for code in cls]
