"""Base repository class for data access layer.

Provides generic read, create and update operations over an async
SQLAlchemy session. Repositories never commit; the caller owns the
transaction.
"""

from typing import Any

from sqlalchemy import ColumnElement
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .entity import Entity


# Type alias for filter conditions
type FilterType = ColumnElement[bool] | bool


class Repository[EntityT: Entity]:
    """Base repository with generic data access operations.

    Usage:
        ```python
        class UserRepository(Repository[User]):
            pass  # Entity type auto-detected from generic parameter

        async with get_session_context(session_factory) as session:
            repo = UserRepository(session)
            user = await repo.select_one(User.email == "test@example.com")
        ```

    Transactions (the context commits on success, rolls back on error):
        ```python
        async with get_session_context(session_factory) as session:
            user_repo = UserRepository(session)
            user = await user_repo.add(User(email="test@example.com", password_hash=hashed))
        ```

    Attributes:
        _entity: The SQLAlchemy entity class (auto-detected from type parameter).
        _session: The async database session.
    """

    _entity: type[Entity]
    __orig_bases__: tuple[type, ...]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Extract entity type when a subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._entity = cls.__orig_bases__[0].__args__[0]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self._session = session

    async def select_one(self, *filters: FilterType) -> EntityT | None:
        """Get a single entity by filters, return None if not found.

        Args:
            *filters: SQLAlchemy filter conditions.

        Returns:
            The matching entity or None.

        Raises:
            MultipleResultsFound: If more than one entity matches.
        """
        stmt = select(self._entity).where(*filters)
        result = await self._session.execute(stmt)
        return result.scalars().one_or_none()

    async def add(self, entity: EntityT, *, flush: bool = True) -> EntityT:
        """Add an entity instance to the session.

        Args:
            entity: The entity instance to persist.
            flush: Whether to flush immediately (default True).

        Returns:
            The persisted entity, refreshed with server-side defaults.

        Raises:
            IntegrityError: If a unique constraint is violated on flush.
        """
        self._session.add(entity)

        if flush:
            await self._session.flush()
            await self._session.refresh(entity)

        return entity

    async def save(self, entity: EntityT, *, flush: bool = True) -> EntityT:
        """Persist changes made to an entity instance.

        Detached instances are merged into the session first.

        Args:
            entity: The modified entity.
            flush: Whether to flush immediately (default True).

        Returns:
            The session-bound entity.
        """
        if entity not in self._session:
            entity = await self._session.merge(entity)

        if flush:
            await self._session.flush()

        return entity
