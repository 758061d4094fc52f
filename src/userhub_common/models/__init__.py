"""Common models package."""

from userhub_common.models.principal import AuthenticatedPrincipal
from userhub_common.models.user import (
    CreateUserRequest,
    DeleteResponse,
    LoginRequest,
    LoginResponse,
    UpdateUserRequest,
    User,
    UserResponse,
)

__all__ = [
    "AuthenticatedPrincipal",
    "CreateUserRequest",
    "DeleteResponse",
    "LoginRequest",
    "LoginResponse",
    "UpdateUserRequest",
    "User",
    "UserResponse",
]
