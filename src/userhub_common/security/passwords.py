"""Password hashing and verification using passlib with bcrypt."""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# bcrypt ignores everything past this many bytes
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Hash and verify passwords with a bcrypt ``CryptContext``."""

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the hasher.

        Args:
            rounds: bcrypt cost factor (4-31)
        """
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises:
            ValueError: If the password is longer than bcrypt can use
        """
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password exceeds {BCRYPT_MAX_BYTES} bytes")
        return self._context.hash(password)

    def verify(self, password: str | None, password_hash: str | None) -> bool:
        """Check a plaintext password against a stored hash.

        Returns False instead of raising when either value is missing or the
        stored hash is not a recognised format.
        """
        if not password or not password_hash:
            return False

        try:
            return self._context.verify(password, password_hash)
        except ValueError as e:
            logger.warning("Unusable password hash: %s", e)
            return False
