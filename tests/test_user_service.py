"""Tests for UserService against the in-memory store."""

import pytest

from userhub_common.errors import BadRequestError, ConflictError, NotFoundError
from userhub_common.models.user import CreateUserRequest, LoginRequest, UpdateUserRequest
from userhub_common.security import PasswordHasher, TokenService
from userhub_common.services import InMemoryUserStore, UserService


@pytest.fixture
def tokens() -> TokenService:
    return TokenService("service-test-secret-key-that-is-long-enough")


@pytest.fixture
def service(tokens: TokenService) -> UserService:
    return UserService(store=InMemoryUserStore(), hasher=PasswordHasher(rounds=4), tokens=tokens)


@pytest.fixture
def jane(service: UserService):
    return service.create(CreateUserRequest(email="jane@example.com", password="pw-jane", name="Jane"))


@pytest.mark.unit
def test_create_hashes_password(service: UserService, jane) -> None:
    stored = service.store.get(jane.id)

    assert stored.password_hash != "pw-jane"
    assert service.hasher.verify("pw-jane", stored.password_hash)


@pytest.mark.unit
def test_create_duplicate_email(service: UserService, jane) -> None:
    with pytest.raises(ConflictError):
        service.create(CreateUserRequest(email="jane@example.com", password="other"))


@pytest.mark.unit
def test_login_issues_token_for_user(service: UserService, tokens: TokenService, jane) -> None:
    login = service.login(LoginRequest(email="jane@example.com", password="pw-jane"))

    assert tokens.verify(login.token).user_id == jane.id
    assert login.user == jane


@pytest.mark.unit
def test_login_failures(service: UserService, jane) -> None:
    with pytest.raises(NotFoundError):
        service.login(LoginRequest(email="ghost@example.com", password="pw-jane"))
    with pytest.raises(BadRequestError):
        service.login(LoginRequest(email="jane@example.com", password="nope"))


@pytest.mark.unit
def test_update_applies_only_provided_fields(service: UserService, jane) -> None:
    updated = service.update(UpdateUserRequest(id=jane.id, name="Jane D."))

    assert updated.name == "Jane D."
    assert updated.email == jane.email
    assert updated.updated_at >= jane.updated_at


@pytest.mark.unit
def test_update_requires_existing_id(service: UserService) -> None:
    with pytest.raises(BadRequestError):
        service.update(UpdateUserRequest(name="x"))
    with pytest.raises(NotFoundError):
        service.update(UpdateUserRequest(id=123, name="x"))


@pytest.mark.unit
def test_update_rejects_blank_password(service: UserService, jane) -> None:
    with pytest.raises(BadRequestError):
        service.update(UpdateUserRequest(id=jane.id, password="  "))


@pytest.mark.unit
def test_delete_by_id(service: UserService, jane) -> None:
    service.delete_by_id(jane.id)

    assert service.store.get(jane.id) is None
    with pytest.raises(NotFoundError):
        service.delete_by_id(jane.id)
