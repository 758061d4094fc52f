"""Tests for the cached service providers."""

import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from userhub_api.config import Settings
from userhub_api.services import get_password_hasher, get_token_service, get_user_store, reset_services_cache


@pytest.fixture(autouse=True)
def fresh_cache():
    reset_services_cache()
    yield
    reset_services_cache()


def _slow_store():
    time.sleep(0.05)
    return object()


@pytest.mark.unit
def test_concurrent_first_calls_share_one_store(settings: Settings) -> None:
    with patch("userhub_api.services.InMemoryUserStore", side_effect=_slow_store) as store_cls:
        with ThreadPoolExecutor(max_workers=8) as pool:
            stores = list(pool.map(lambda _: get_user_store(settings), range(8)))

    assert store_cls.call_count == 1
    assert all(store is stores[0] for store in stores)


@pytest.mark.unit
def test_providers_are_cached_until_reset(settings: Settings) -> None:
    hasher = get_password_hasher(settings)
    tokens = get_token_service(settings)

    assert get_password_hasher(settings) is hasher
    assert get_token_service(settings) is tokens

    reset_services_cache()

    assert get_token_service(settings) is not tokens
