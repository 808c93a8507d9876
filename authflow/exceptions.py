"""Application exceptions.

Every exception raised by the authentication layer derives from
``BaseAppException`` and carries the HTTP status code the FastAPI
exception handler responds with. Authentication failures additionally
carry an ``AuthErrorCode`` so callers can branch on the error kind.
"""

from fastapi import status

from authflow.utilities.enums import AuthErrorCode


class BaseAppException(Exception):
    """Base class for all application exceptions.

    Attributes:
        status_code: HTTP status code used when the exception reaches the API.
        default_message: Message used when none is supplied.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthException(BaseAppException):
    """Authentication failure tagged with an error kind.

    Attributes:
        code: The error kind callers branch on.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code: AuthErrorCode = AuthErrorCode.TOKEN_INVALID

    def __init__(self, code: AuthErrorCode | None = None, message: str | None = None) -> None:
        self.code = code or self.default_code
        super().__init__(message or self.default_message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class UserExistsException(AuthException):
    """Registration attempted for an email that is already registered."""

    status_code = status.HTTP_409_CONFLICT
    default_code = AuthErrorCode.USER_EXISTS
    default_message = "User already exists"


class InvalidCredentialsException(AuthException):
    """Login failed: unknown email or wrong password."""

    default_code = AuthErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class InvalidTokenException(AuthException):
    """Token is malformed, has a bad signature, or was otherwise rejected."""

    default_code = AuthErrorCode.TOKEN_INVALID
    default_message = "Invalid token"


class ExpiredTokenException(InvalidTokenException):
    """Token has expired."""

    default_message = "Token has expired"


class BlacklistedTokenException(AuthException):
    """Token matched a revocation marker."""

    default_code = AuthErrorCode.TOKEN_BLACKLISTED
    default_message = "Token has been revoked"
