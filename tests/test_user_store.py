"""Tests for the in-memory user store."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from userhub_common.errors import ConflictError, NotFoundError
from userhub_common.models.user import User
from userhub_common.services import InMemoryUserStore


def _user(email: str, name: str | None = None) -> User:
    return User(email=email, password_hash="hash", name=name)


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.mark.unit
def test_add_assigns_increasing_ids(store: InMemoryUserStore) -> None:
    first = store.add(_user("a@example.com"))
    second = store.add(_user("b@example.com"))

    assert (first.id, second.id) == (1, 2)
    assert store.get(2).email == "b@example.com"


@pytest.mark.unit
def test_email_lookup_is_case_insensitive(store: InMemoryUserStore) -> None:
    store.add(_user("Mixed@example.com"))

    assert store.get_by_email("mixed@EXAMPLE.com") is not None
    with pytest.raises(ConflictError):
        store.add(_user("mixed@example.com"))


@pytest.mark.unit
def test_returned_users_are_copies(store: InMemoryUserStore) -> None:
    user = store.add(_user("a@example.com", name="A"))
    user.name = "changed"

    assert store.get(user.id).name == "A"


@pytest.mark.unit
def test_update_reindexes_email(store: InMemoryUserStore) -> None:
    user = store.add(_user("old@example.com"))

    store.update(user.model_copy(update={"email": "new@example.com"}))

    assert store.get_by_email("old@example.com") is None
    assert store.get_by_email("new@example.com").id == user.id


@pytest.mark.unit
def test_update_errors(store: InMemoryUserStore) -> None:
    a = store.add(_user("a@example.com"))
    store.add(_user("b@example.com"))

    with pytest.raises(ConflictError):
        store.update(a.model_copy(update={"email": "b@example.com"}))
    with pytest.raises(NotFoundError):
        store.update(a.model_copy(update={"id": 99}))


@pytest.mark.unit
def test_delete_frees_email(store: InMemoryUserStore) -> None:
    user = store.add(_user("a@example.com"))

    assert store.delete(user.id) is True
    assert store.delete(user.id) is False
    assert store.add(_user("a@example.com")).id == 2


@pytest.mark.unit
def test_concurrent_adds_get_unique_ids(store: InMemoryUserStore) -> None:
    with ThreadPoolExecutor(max_workers=8) as pool:
        users = list(pool.map(lambda i: store.add(_user(f"user{i}@example.com")), range(50)))

    assert sorted(u.id for u in users) == list(range(1, 51))
