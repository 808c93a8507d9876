"""Authentication domain entities."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy import String
from sqlalchemy import Uuid
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column
from sqlalchemy.sql import func

from authflow.abstract import Entity


class User(Entity):
    """User entity for the reference SQLAlchemy user store.

    Attributes:
        pk: UUID primary key.
        email: Unique email address (identifier).
        password_hash: Hashed password, never the plaintext.
        first_name: User's first name.
        last_name: User's last name.
        is_active: Whether the account may be used.
        join_date: Timestamp when user registered.
    """

    pk: Mapped[uuid.UUID] = mapped_column(
        "id",
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # account Uniqueness
    email: Mapped[str] = mapped_column(String(255), unique=True)
    password_hash: Mapped[str] = mapped_column(String(255))

    # Basic user information
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    is_active: Mapped[bool] = mapped_column(default=True)

    # Timestamps (timezone-aware UTC)
    join_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    @property
    def full_name(self) -> str:
        """Return user's full name."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)
