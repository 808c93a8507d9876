"""Password hashing using bcrypt.

Reference ``PasswordHasher`` implementation. bcrypt is CPU bound, so
hashing and checking run in a worker thread to keep the event loop free.

Example:
    >>> hasher = BcryptPasswordHasher()
    >>> hashed = await hasher.hash("my_password")
    >>> await hasher.compare("my_password", hashed)
    True
"""

import asyncio
import logging

import bcrypt


logger = logging.getLogger(__name__)


class BcryptPasswordHasher:
    """Secure password hashing using bcrypt.

    Attributes:
        _rounds: Number of bcrypt rounds (log2 work factor).
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the password hasher.

        Args:
            rounds: Number of bcrypt rounds. Higher is more secure but slower.
        """
        self._rounds = rounds

    async def hash(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plain text password to hash.

        Returns:
            Bcrypt hash string with salt embedded.

        Raises:
            ValueError: If password is empty. bcrypt only uses the first
                72 bytes; bcrypt 5 rejects longer passwords with ValueError,
                earlier releases truncate them.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        return await asyncio.to_thread(self._hash, password)

    async def compare(self, password: str, hashed: str) -> bool:
        """Check a password against a hash.

        Args:
            password: Plain text password to verify.
            hashed: Bcrypt hash to verify against.

        Returns:
            True if password matches the hash, False otherwise
            (including for an empty password or a malformed hash).
        """
        if not password or not hashed:
            return False

        return await asyncio.to_thread(self._check, password, hashed)

    def _hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _check(password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Password verification failed: {e}")
            return False
