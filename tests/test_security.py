"""Tests for password hashing and bearer tokens."""

import jwt
import pytest

from userhub_common.errors import UnauthorizedError
from userhub_common.models.user import User
from userhub_common.security import PasswordHasher, TokenService

SECRET = "unit-test-secret-key-that-is-long-enough"


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def user() -> User:
    return User(id=42, email="jane@example.com", password_hash="x")


@pytest.mark.unit
def test_hash_and_verify(hasher: PasswordHasher) -> None:
    hashed = hasher.hash("s3cret")

    assert hashed != "s3cret"
    assert hasher.verify("s3cret", hashed)
    assert not hasher.verify("wrong", hashed)


@pytest.mark.unit
def test_hash_rejects_password_bcrypt_would_truncate(hasher: PasswordHasher) -> None:
    with pytest.raises(ValueError):
        hasher.hash("x" * 73)

    assert hasher.verify("x" * 72, hasher.hash("x" * 72))


@pytest.mark.unit
@pytest.mark.parametrize(("password", "password_hash"), [(None, "x"), ("s3cret", None), ("s3cret", "not-a-hash")])
def test_verify_rejects_unusable_input(hasher: PasswordHasher, password, password_hash) -> None:
    assert hasher.verify(password, password_hash) is False


@pytest.mark.unit
def test_token_round_trip_resolves_principal(user: User) -> None:
    tokens = TokenService(SECRET)

    principal = tokens.verify(tokens.issue(user))

    assert principal.user_id == 42
    assert principal.email == "jane@example.com"


@pytest.mark.unit
def test_expired_token_is_rejected(user: User) -> None:
    tokens = TokenService(SECRET, access_token_expire_minutes=-5)

    with pytest.raises(UnauthorizedError, match="expired"):
        tokens.verify(tokens.issue(user))


@pytest.mark.unit
def test_token_signed_with_other_key_is_rejected(user: User) -> None:
    forged = TokenService("some-other-secret-key-that-is-long-enough").issue(user)

    with pytest.raises(UnauthorizedError):
        TokenService(SECRET).verify(forged)


@pytest.mark.unit
def test_token_with_non_numeric_subject_is_rejected() -> None:
    token = jwt.encode({"sub": "abc", "exp": 9999999999}, SECRET, algorithm="HS256")

    with pytest.raises(UnauthorizedError, match="subject"):
        TokenService(SECRET).verify(token)


@pytest.mark.unit
def test_issuer_is_checked(user: User) -> None:
    token = TokenService(SECRET, issuer="someone-else").issue(user)

    with pytest.raises(UnauthorizedError):
        TokenService(SECRET, issuer="userhub").verify(token)


@pytest.mark.unit
def test_secret_is_required() -> None:
    with pytest.raises(ValueError):
        TokenService("")
