"""User stores: in-memory and Cosmos DB implementations."""

import logging
import threading
from abc import ABC, abstractmethod

from azure.core import MatchConditions
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from userhub_common.config.store_config import StoreConfig
from userhub_common.errors import ConflictError, NotFoundError
from userhub_common.infra.cosmos.cosmos_base import BaseCosmosClient
from userhub_common.models.user import User

logger = logging.getLogger(__name__)

# Holds the last allocated user id; never a numeric string, so it cannot clash with a user
ID_COUNTER_DOC = "user-id-counter"


def _email_key(email: str) -> str:
    return email.strip().lower()


class UserStore(ABC):
    """Abstract interface for user persistence."""

    @abstractmethod
    def add(self, user: User) -> User:
        """Store a new user and assign its id.

        Raises:
            ConflictError: If the email is already registered
        """
        pass

    @abstractmethod
    def get(self, user_id: int) -> User | None:
        """Get a user by ID."""
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive)."""
        pass

    @abstractmethod
    def update(self, user: User) -> User:
        """Replace a stored user.

        Raises:
            NotFoundError: If no user has ``user.id``
            ConflictError: If the new email belongs to another user
        """
        pass

    @abstractmethod
    def delete(self, user_id: int) -> bool:
        """Delete a user. Returns False if it did not exist."""
        pass


class InMemoryUserStore(UserStore):
    """Thread-safe in-process user store."""

    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._ids_by_email: dict[str, int] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def add(self, user: User) -> User:
        key = _email_key(user.email)
        with self._lock:
            if key in self._ids_by_email:
                raise ConflictError(f"email {user.email} is already registered")
            stored = user.model_copy(update={"id": self._next_id})
            self._next_id += 1
            self._users[stored.id] = stored
            self._ids_by_email[key] = stored.id
        return stored.model_copy()

    def get(self, user_id: int) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
        return user.model_copy() if user else None

    def get_by_email(self, email: str) -> User | None:
        with self._lock:
            user_id = self._ids_by_email.get(_email_key(email))
            user = self._users.get(user_id) if user_id is not None else None
        return user.model_copy() if user else None

    def update(self, user: User) -> User:
        key = _email_key(user.email)
        with self._lock:
            existing = self._users.get(user.id)
            if existing is None:
                raise NotFoundError(f"user {user.id} not found")
            owner = self._ids_by_email.get(key)
            if owner is not None and owner != user.id:
                raise ConflictError(f"email {user.email} is already registered")
            self._ids_by_email.pop(_email_key(existing.email), None)
            self._ids_by_email[key] = user.id
            self._users[user.id] = user.model_copy()
        return user.model_copy()

    def delete(self, user_id: int) -> bool:
        with self._lock:
            user = self._users.pop(user_id, None)
            if user is None:
                return False
            self._ids_by_email.pop(_email_key(user.email), None)
        return True


class UserDocument(User):
    """Cosmos document shape: the user plus a numeric copy of its id for MAX queries."""

    user_id: int


class CosmosUserStore(BaseCosmosClient[UserDocument], UserStore):
    """Cosmos DB implementation of UserStore.

    Documents are partitioned by ``/id`` (the stringified user id). Ids come
    from a counter document in the same container and are never reused.
    """

    MAX_ID_ATTEMPTS = 5

    def __init__(self, config: StoreConfig | None = None) -> None:
        """Initialize Cosmos DB user store.

        Args:
            config: Store configuration. If None, will load from environment.
        """
        container_name = config.cosmos_users_container if config else "users"
        super().__init__(container_name=container_name, partition_key_path="/id", config=config)

    @staticmethod
    def _to_user(doc: dict) -> User:
        return User.model_validate(doc)

    def _max_user_id(self) -> int:
        result = self.query_items("SELECT VALUE MAX(c.user_id) FROM c")
        return int(result[0]) if result and result[0] is not None else 0

    def _next_id(self) -> int:
        """Allocate the next user id from the counter document.

        The counter only grows, so ids of deleted users are never handed out
        again. Concurrent writers are serialised by the counter's etag.
        """
        for _ in range(self.MAX_ID_ATTEMPTS):
            try:
                counter = self.container.read_item(item=ID_COUNTER_DOC, partition_key=ID_COUNTER_DOC)
            except CosmosResourceNotFoundError:
                # First allocation: seed from any users stored before the counter existed
                first = self._max_user_id() + 1
                try:
                    self.container.create_item(body={"id": ID_COUNTER_DOC, "value": first})
                except CosmosResourceExistsError:
                    continue
                return first

            next_value = int(counter["value"]) + 1
            try:
                self.container.replace_item(
                    item=ID_COUNTER_DOC,
                    body={"id": ID_COUNTER_DOC, "value": next_value},
                    etag=counter["_etag"],
                    match_condition=MatchConditions.IfNotModified,
                )
            except CosmosAccessConditionFailedError:
                logger.debug("User id counter moved, retrying")
                continue
            return next_value

        raise ConflictError("could not allocate a user id, try again")

    def add(self, user: User) -> User:
        if self.get_by_email(user.email) is not None:
            raise ConflictError(f"email {user.email} is already registered")

        user_id = self._next_id()
        doc = UserDocument(**user.model_dump(exclude={"id"}), id=user_id, user_id=user_id)
        try:
            created = self.create_item(doc)
        except CosmosResourceExistsError as e:
            raise ConflictError(f"user {user_id} already exists") from e
        return self._to_user(created)

    def get(self, user_id: int) -> User | None:
        doc = self.read_item(str(user_id), partition_key=str(user_id))
        return self._to_user(doc) if doc else None

    def get_by_email(self, email: str) -> User | None:
        items = self.query_items(
            "SELECT * FROM c WHERE LOWER(c.email) = @email",
            parameters=[{"name": "@email", "value": _email_key(email)}],
        )
        return self._to_user(items[0]) if items else None

    def update(self, user: User) -> User:
        owner = self.get_by_email(user.email)
        if owner is not None and owner.id != user.id:
            raise ConflictError(f"email {user.email} is already registered")

        doc = UserDocument(**user.model_dump(), user_id=user.id)
        replaced = self.replace_item(doc)
        if replaced is None:
            raise NotFoundError(f"user {user.id} not found")
        return self._to_user(replaced)

    def delete(self, user_id: int) -> bool:
        return self.delete_item(str(user_id), partition_key=str(user_id))
