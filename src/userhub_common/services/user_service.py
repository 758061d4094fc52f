"""User service: registration, login, profile updates and account deletion."""

import logging
from datetime import UTC, datetime

from userhub_common.errors import BadRequestError, NotFoundError
from userhub_common.models.user import (
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    UpdateUserRequest,
    User,
    UserResponse,
)
from userhub_common.security.passwords import PasswordHasher
from userhub_common.security.tokens import TokenService
from userhub_common.services.user_store import UserStore

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for user accounts.

    Holds no mutable state of its own; concurrency safety comes from the
    injected store.
    """

    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService) -> None:
        """Initialize the user service.

        Args:
            store: User persistence
            hasher: Password hasher
            tokens: Access token issuer
        """
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    @staticmethod
    def _check_password(password: str) -> None:
        if not password.strip():
            raise BadRequestError("password must not be blank")

    def create(self, request: CreateUserRequest) -> UserResponse:
        """Register a new user.

        Raises:
            BadRequestError: If the password is blank
            ConflictError: If the email is already registered
        """
        self._check_password(request.password)

        user = User(
            email=request.email,
            password_hash=self.hasher.hash(request.password),
            name=request.name,
        )
        created = self.store.add(user)
        logger.info("Registered user %s", created.id)
        return UserResponse.from_user(created)

    def login(self, request: LoginRequest) -> LoginResponse:
        """Check credentials and issue an access token.

        Raises:
            NotFoundError: If no user has this email
            BadRequestError: If the password does not match
        """
        user = self.store.get_by_email(request.email)
        if user is None:
            raise NotFoundError(f"user with email {request.email} not found")

        if not self.hasher.verify(request.password, user.password_hash):
            logger.info("Failed login for user %s", user.id)
            raise BadRequestError("invalid password")

        token = self.tokens.issue(user)
        logger.info("User %s logged in", user.id)
        return LoginResponse(
            token=token,
            expires_in=self.tokens.expires_in,
            user=UserResponse.from_user(user),
        )

    def update(self, request: UpdateUserRequest) -> UserResponse:
        """Apply a partial profile update to ``request.id``.

        Raises:
            BadRequestError: If the id is missing or the new password is blank
            NotFoundError: If the user does not exist
            ConflictError: If the new email belongs to another user
        """
        if request.id is None:
            raise BadRequestError("user id is required")

        user = self.store.get(request.id)
        if user is None:
            raise NotFoundError(f"user {request.id} not found")

        changes = request.model_dump(exclude_unset=True, exclude_none=True, exclude={"id", "password"})
        if request.password is not None:
            self._check_password(request.password)
            changes["password_hash"] = self.hasher.hash(request.password)
        changes["updated_at"] = datetime.now(UTC)

        updated = self.store.update(user.model_copy(update=changes))
        logger.info("Updated user %s (%s)", updated.id, ", ".join(sorted(changes)))
        return UserResponse.from_user(updated)

    def delete_by_id(self, user_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the user does not exist
        """
        if not self.store.delete(user_id):
            raise NotFoundError(f"user {user_id} not found")
        logger.info("Deleted user %s", user_id)
