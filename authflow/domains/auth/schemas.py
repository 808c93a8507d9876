"""Authentication input and result schemas."""

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class RegisterInput(BaseModel):
    """Registration request.

    No format or strength rules are applied to email or password.
    """

    email: str = Field(description="Email address, used as the uniqueness key")
    password: str = Field(description="Plaintext password, hashed before storage")
    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form attributes passed through to the user builder",
    )


class LoginInput(BaseModel):
    """Login request."""

    email: str = Field(description="Email address")
    password: str = Field(description="Plaintext password")


class LoginResult[UserT](BaseModel):
    """Successful login: the authenticated user and a freshly issued token."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: UserT
    token: str


class ValidationResult[UserT](BaseModel):
    """Outcome of token validation.

    ``claims`` and ``user`` are only set when ``valid`` is True. A valid token
    whose subject no longer exists carries ``user=None``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    valid: bool
    claims: dict[str, Any] | None = None
    user: UserT | None = None
