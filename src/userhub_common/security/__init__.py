"""Password hashing and token services."""

from userhub_common.security.passwords import PasswordHasher
from userhub_common.security.tokens import TokenService

__all__ = ["PasswordHasher", "TokenService"]
