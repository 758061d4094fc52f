"""Common services package."""

from userhub_common.services.user_service import UserService
from userhub_common.services.user_store import CosmosUserStore, InMemoryUserStore, UserStore

__all__ = [
    "CosmosUserStore",
    "InMemoryUserStore",
    "UserService",
    "UserStore",
]
