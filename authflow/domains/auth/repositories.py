"""Authentication domain repositories."""

from uuid import UUID

from authflow.abstract import Repository

from .entities import User


class UserRepository(Repository[User]):
    """SQLAlchemy-backed user store.

    Uniqueness of ``email`` is enforced by the database: when two concurrent
    registrations race past the existence check, the second flush raises
    ``IntegrityError``.
    """

    async def find_by_email(self, email: str) -> User | None:
        return await self.select_one(User.email == email)

    async def find_by_id(self, user_id: str) -> User | None:
        try:
            pk = UUID(user_id)
        except ValueError:
            return None
        return await self.select_one(User.pk == pk)

    async def create(self, user: User) -> User:
        return await self.add(user)

    async def update(self, user: User) -> User:
        return await self.save(user)
