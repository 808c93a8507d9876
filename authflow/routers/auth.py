"""Authentication API routes."""

from typing import Annotated
from typing import Any

from fastapi import APIRouter
from fastapi import Depends
from fastapi import status
from pydantic import BaseModel
from pydantic import Field

from authflow.domains.auth.schemas import LoginInput
from authflow.domains.auth.schemas import RegisterInput
from authflow.domains.auth.services import AuthService
from authflow.security.dependencies import BearerToken
from authflow.security.dependencies import CurrentClaims
from authflow.security.dependencies import get_auth_service


# ─── Schemas ──────────────────────────────────────────────────────────────────


class RegisteredUser(BaseModel):
    """Response schema for a successful registration."""

    id: str = Field(description="User ID")


class TokenResponse(BaseModel):
    """Response schema for a successful login."""

    access_token: str = Field(description="Issued token")
    token_type: str = Field(default="bearer", description="Token type")
    user_id: str = Field(description="User ID")


class ValidationResponse(BaseModel):
    """Response schema for token validation."""

    valid: bool = Field(description="Whether the token is valid")
    claims: dict[str, Any] | None = Field(default=None, description="Token claims when valid")


class CurrentUserResponse(BaseModel):
    """Response schema for the authenticated subject."""

    sub: str = Field(description="User ID")
    claims: dict[str, Any] = Field(description="Token claims")


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


# ─── Router ───────────────────────────────────────────────────────────────────


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered"},
        409: {"description": "Email already registered"},
    },
)
async def register(request: RegisterInput, auth_service: AuthServiceDep) -> RegisteredUser:
    """Register a new user with email and password."""
    user = await auth_service.register(request)
    return RegisteredUser(id=auth_service.users.get_user_id(user))


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    summary="Login with email and password",
    responses={
        200: {"description": "Token issued"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(request: LoginInput, auth_service: AuthServiceDep) -> TokenResponse:
    """Exchange email and password for a token.

    Unknown email and wrong password produce the same response.
    """
    result = await auth_service.login(request)
    return TokenResponse(
        access_token=result.token,
        user_id=auth_service.users.get_user_id(result.user),
    )


@router.get(
    "/validate",
    status_code=status.HTTP_200_OK,
    summary="Validate a token",
    description="Report whether the bearer token is valid. Never fails for an invalid token.",
)
async def validate(token: BearerToken, auth_service: AuthServiceDep) -> ValidationResponse:
    """Validate the bearer token."""
    result = await auth_service.validate(token)
    return ValidationResponse(valid=result.valid, claims=result.claims)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout",
    description="Revoke the bearer token.",
    responses={
        204: {"description": "Logout successful, no content returned"},
        401: {"description": "Invalid or expired token"},
    },
)
async def logout(token: BearerToken, auth_service: AuthServiceDep) -> None:
    """Revoke the bearer token.

    Without a revocation cache configured this succeeds without effect and
    the token stays valid until it expires.
    """
    await auth_service.logout(token)


@router.get(
    "/me",
    status_code=status.HTTP_200_OK,
    summary="Current subject",
    responses={
        200: {"description": "Token is valid"},
        401: {"description": "Invalid, expired, or revoked token"},
    },
)
async def me(claims: CurrentClaims) -> CurrentUserResponse:
    """Return the subject and claims of the bearer token."""
    return CurrentUserResponse(sub=str(claims["sub"]), claims=claims)
