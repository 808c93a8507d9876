"""User adapter for the reference ``User`` entity."""

import uuid
from typing import Any

from .entities import User
from .ports import UserAdapter
from .schemas import RegisterInput


def build_user(data: RegisterInput, password_hash: str) -> User:
    """Build a ``User`` from registration input.

    Recognized attributes: ``first_name`` and ``last_name``. Others are ignored.
    """
    return User(
        pk=uuid.uuid4(),
        email=data.email,
        password_hash=password_hash,
        first_name=data.attributes.get("first_name"),
        last_name=data.attributes.get("last_name"),
    )


def get_user_id(user: User) -> str:
    return str(user.pk)


def get_password_hash(user: User) -> str:
    return user.password_hash


def build_claims(user: User) -> dict[str, Any]:
    return {"email": user.email}


default_user_adapter: UserAdapter[User] = UserAdapter(
    build_user=build_user,
    get_user_id=get_user_id,
    get_password_hash=get_password_hash,
    build_claims=build_claims,
)
