"""Declarative base for SQLAlchemy entities."""

from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.orm import declared_attr


class Entity(AsyncAttrs, DeclarativeBase):
    """Base class for all entities.

    Table names default to the lowercased class name in plural form
    (``User`` -> ``users``).
    """

    __abstract__ = True

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return f"{cls.__name__.lower()}s"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} pk={getattr(self, 'pk', None)!r}>"
