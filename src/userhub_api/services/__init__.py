"""Service initialization and dependency injection."""

import logging
import threading

from fastapi import Depends

from userhub_api.config import Settings, get_settings
from userhub_common.security import PasswordHasher, TokenService
from userhub_common.services import CosmosUserStore, InMemoryUserStore, UserService, UserStore

logger = logging.getLogger(__name__)

# Service instances cache; providers run concurrently in the threadpool
_services_cache = {}
_services_lock = threading.Lock()


def reset_services_cache() -> None:
    """Drop cached service instances."""
    with _services_lock:
        _services_cache.clear()


def get_user_store(settings: Settings = Depends(get_settings)) -> UserStore:
    """Get the configured user store instance.

    Args:
        settings: Application settings

    Returns:
        UserStore for the configured backend
    """
    with _services_lock:
        if "user_store" not in _services_cache:
            if settings.user_store_backend == "cosmos":
                _services_cache["user_store"] = CosmosUserStore()
                logger.info("Initialized CosmosUserStore")
            else:
                _services_cache["user_store"] = InMemoryUserStore()
                logger.info("Initialized InMemoryUserStore")

        return _services_cache["user_store"]


def get_password_hasher(settings: Settings = Depends(get_settings)) -> PasswordHasher:
    """Get password hasher instance."""
    with _services_lock:
        if "password_hasher" not in _services_cache:
            _services_cache["password_hasher"] = PasswordHasher(rounds=settings.password_hash_rounds)
        return _services_cache["password_hasher"]


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    """Get token service instance.

    Args:
        settings: Application settings

    Returns:
        TokenService configured from settings
    """
    with _services_lock:
        if "token_service" not in _services_cache:
            _services_cache["token_service"] = TokenService(
                secret_key=settings.jwt_secret_key,
                algorithm=settings.jwt_algorithm,
                access_token_expire_minutes=settings.access_token_expire_minutes,
                issuer=settings.jwt_issuer,
            )
            logger.info("Initialized TokenService (algorithm=%s)", settings.jwt_algorithm)
        return _services_cache["token_service"]


def get_user_service(
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> UserService:
    """Get user service wired to the cached collaborators."""
    return UserService(store=store, hasher=hasher, tokens=tokens)
