"""Tests for registration, login and token validation."""

from datetime import timedelta
from uuid import UUID

import pytest
from jose import jwt

from pvz_store.domain.users import UserRole
from pvz_store.errors import (
    InvalidClaims,
    InvalidToken,
    TokenEncodingFailed,
    UserAlreadyExists,
    UserNotFound,
    WeakPassword,
    WrongPassword,
)
from pvz_store.security import JwtCodec, PasswordHasher
from pvz_store.services.auth import DUMMY_EMAIL, AuthService, is_strong_password
from tests.conftest import STRONG_PASSWORD, InMemoryUserRepository

UID = "1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed"


@pytest.mark.parametrize(
    "password",
    ["Sh0rt!a", "alllower1!", "ALLUPPER1!", "NoDigits!!", "NoSymbol12"],
)
def test_weak_passwords_rejected(password: str) -> None:
    assert not is_strong_password(password)


def test_strong_password_accepted() -> None:
    assert is_strong_password(STRONG_PASSWORD)
    assert is_strong_password("Abcdef1_")


def test_register_rejects_weak_password(auth_service: AuthService) -> None:
    with pytest.raises(WeakPassword):
        auth_service.register("user@example.com", "password", UserRole.EMPLOYEE)


def test_register_stores_hash_not_password(
    auth_service: AuthService, user_repository: InMemoryUserRepository
) -> None:
    user = auth_service.register("user@example.com", STRONG_PASSWORD, UserRole.EMPLOYEE)

    stored = user_repository.users["user@example.com"]
    assert stored.user == user
    assert stored.password_hash != STRONG_PASSWORD
    assert stored.password_hash.startswith("$2")


def test_register_duplicate_email_fails(auth_service: AuthService) -> None:
    auth_service.register("user@example.com", STRONG_PASSWORD, UserRole.EMPLOYEE)
    with pytest.raises(UserAlreadyExists):
        auth_service.register("user@example.com", STRONG_PASSWORD, UserRole.MODERATOR)


def test_login_returns_token_for_registered_user(auth_service: AuthService) -> None:
    user = auth_service.register(
        "mod@example.com", STRONG_PASSWORD, UserRole.MODERATOR
    )

    token = auth_service.login("mod@example.com", STRONG_PASSWORD)
    principal = auth_service.validate_token(token)

    assert principal.user_id == user.id
    assert principal.email == "mod@example.com"
    assert principal.role is UserRole.MODERATOR


def test_login_unknown_user_fails(auth_service: AuthService) -> None:
    with pytest.raises(UserNotFound):
        auth_service.login("ghost@example.com", STRONG_PASSWORD)


def test_login_wrong_password_fails(auth_service: AuthService) -> None:
    auth_service.register("user@example.com", STRONG_PASSWORD, UserRole.EMPLOYEE)
    with pytest.raises(WrongPassword):
        auth_service.login("user@example.com", "Wr0ng-password")


def test_dummy_login_issues_token_for_role(auth_service: AuthService) -> None:
    token = auth_service.dummy_login(UserRole.EMPLOYEE)

    principal = auth_service.validate_token(token)

    assert principal.role is UserRole.EMPLOYEE
    assert principal.email == DUMMY_EMAIL
    assert isinstance(principal.user_id, UUID)


def test_token_carries_expected_claims(auth_service: AuthService) -> None:
    token = auth_service.dummy_login(UserRole.MODERATOR)

    claims = jwt.get_unverified_claims(token)

    assert set(claims) == {"uid", "email", "role", "exp"}
    assert claims["role"] == "moderator"


def test_token_signed_with_other_secret_rejected(auth_service: AuthService) -> None:
    foreign = JwtCodec(secret="another-secret").encode(
        {"uid": "x", "email": DUMMY_EMAIL, "role": "employee"}
    )
    with pytest.raises(InvalidToken):
        auth_service.validate_token(foreign)


def test_expired_token_rejected(
    auth_service: AuthService, user_repository: InMemoryUserRepository
) -> None:
    expired = AuthService(
        repository=user_repository,
        tokens=JwtCodec(secret="test-secret", ttl=timedelta(seconds=-10)),
        hasher=PasswordHasher(rounds=4),
    ).dummy_login(UserRole.EMPLOYEE)

    with pytest.raises(InvalidToken):
        auth_service.validate_token(expired)


def test_garbage_token_rejected(auth_service: AuthService) -> None:
    with pytest.raises(InvalidToken):
        auth_service.validate_token("not-a-jwt")


@pytest.mark.parametrize(
    "claims",
    [
        {"email": DUMMY_EMAIL, "role": "employee"},
        {"uid": "not-a-uuid", "email": DUMMY_EMAIL, "role": "employee"},
        {"uid": UID, "email": 5, "role": "employee"},
        {"uid": UID, "email": "a@b.c", "role": "admin"},
    ],
    ids=["missing-uid", "bad-uid", "non-string-email", "unknown-role"],
)
def test_malformed_claims_rejected(
    auth_service: AuthService, claims: dict[str, object]
) -> None:
    token = JwtCodec(secret="test-secret").encode(claims)
    with pytest.raises(InvalidClaims):
        auth_service.validate_token(token)


def test_password_hasher_rejects_malformed_hash() -> None:
    assert PasswordHasher(rounds=4).verify(STRONG_PASSWORD, "not-a-hash") is False


@pytest.mark.parametrize("algorithm", ["HS999", "RS256"])
def test_signing_failure_raises_token_encoding_failed(algorithm: str) -> None:
    with pytest.raises(TokenEncodingFailed):
        JwtCodec(secret="not-a-key", algorithm=algorithm).encode({"uid": UID})


def test_dummy_login_with_unusable_key_fails(
    user_repository: InMemoryUserRepository,
) -> None:
    service = AuthService(
        repository=user_repository,
        tokens=JwtCodec(secret="test-secret", algorithm="HS999"),
        hasher=PasswordHasher(rounds=4),
    )
    with pytest.raises(TokenEncodingFailed):
        service.dummy_login(UserRole.MODERATOR)


def test_token_without_expiry_rejected(auth_service: AuthService) -> None:
    unbounded = jwt.encode(
        {"uid": UID, "email": DUMMY_EMAIL, "role": "employee"},
        "test-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidToken):
        auth_service.validate_token(unbounded)
