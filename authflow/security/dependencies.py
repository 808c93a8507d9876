"""Security dependencies for FastAPI endpoints.

Provides authentication dependencies for protected routes.
"""

from collections.abc import AsyncGenerator
from typing import Annotated
from typing import Any

from fastapi import Depends
from fastapi import Request
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer

from authflow.domains.auth.services import AuthService
from authflow.exceptions import InvalidTokenException


# Bearer token security scheme for OpenAPI docs
bearer_scheme = HTTPBearer()


async def get_auth_service(request: Request) -> AsyncGenerator[AuthService, None]:
    """Provide an AuthService for the current request.

    Opens the service factory stored on the application by ``create_app``.
    With the database factory, the request's session commits after the
    endpoint succeeds and rolls back if it raises.
    """
    async with request.app.state.auth_service_factory() as auth_service:
        yield auth_service


async def _get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> str:
    """Extract the raw token from the Authorization header."""
    return credentials.credentials


async def _get_current_claims(
    token: Annotated[str, Depends(_get_bearer_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> dict[str, Any]:
    """Validate the bearer token and return its claims.

    Raises:
        InvalidTokenException: If the token is not valid for any reason.
    """
    result = await auth_service.validate(token)
    if not result.valid or result.claims is None:
        raise InvalidTokenException()

    return result.claims


# Type aliases for cleaner endpoint signatures
BearerToken = Annotated[str, Depends(_get_bearer_token)]
CurrentClaims = Annotated[dict[str, Any], Depends(_get_current_claims)]
