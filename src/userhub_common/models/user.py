"""User models for the User API."""

from datetime import UTC, datetime
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


NewPassword = Annotated[str, Field(min_length=1), AfterValidator(_check_password_bytes)]


class User(BaseModel):
    """Stored user entity. Never returned to clients as-is."""

    id: int = Field(0, description="Unique identifier, assigned by the store")
    email: EmailStr = Field(..., description="Email address, unique per user")
    password_hash: str = Field(..., description="Hashed password")
    name: str | None = Field(None, description="Display name")
    created_at: datetime = Field(default_factory=_utcnow, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=_utcnow, description="Last update timestamp")


class UserResponse(BaseModel):
    """Public view of a user."""

    id: int = Field(..., description="Unique identifier for the user")
    email: EmailStr = Field(..., description="Email address of the user")
    name: str | None = Field(None, description="Display name of the user")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "id": 1,
                "email": "jane.doe@example.com",
                "name": "Jane Doe",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z",
            }
        }

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class CreateUserRequest(BaseModel):
    """Registration payload."""

    email: EmailStr = Field(..., description="Email address of the user")
    password: NewPassword = Field(..., description="Plain-text password, at most 72 bytes")
    name: str | None = Field(None, description="Display name of the user")

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "email": "jane.doe@example.com",
                "password": "s3cret-pass",
                "name": "Jane Doe",
            }
        }


class LoginRequest(BaseModel):
    """Login credentials."""

    email: EmailStr = Field(..., description="Email address of the user")
    password: str = Field(..., min_length=1, description="Plain-text password")


class UpdateUserRequest(BaseModel):
    """Profile update payload.

    ``id`` is accepted in the body but always replaced with the authenticated
    caller's id before the request reaches the service.
    """

    id: int | None = Field(None, description="Ignored; any value is accepted and replaced by the bearer token's user id")
    email: EmailStr | None = Field(None, description="New email address")
    password: NewPassword | None = Field(None, description="New plain-text password, at most 72 bytes")
    name: str | None = Field(None, description="New display name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane.doe@example.com",
                "name": "Jane D.",
            }
        }
    )

    @field_validator("id", mode="before")
    @classmethod
    def _keep_integer_id(cls, value: Any) -> int | None:
        # Any JSON value is accepted here; only an integer is kept, for logging
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None


class LoginResponse(BaseModel):
    """Issued session token with the user's profile."""

    token: str = Field(..., description="Bearer token")
    token_type: str = Field("Bearer", description="Token scheme for the Authorization header")
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse = Field(..., description="Authenticated user")


class DeleteResponse(BaseModel):
    """Confirmation returned after an account is deleted."""

    message: str = Field(..., description="Confirmation message")
