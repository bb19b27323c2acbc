"""User registration, login and token validation."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID, uuid4

from pvz_store.domain.users import (
    AuthPrincipal,
    UserCredentials,
    UserRecord,
    UserRole,
)
from pvz_store.errors import (
    InvalidClaims,
    UserNotFound,
    WeakPassword,
    WrongPassword,
)
from pvz_store.security import JwtCodec, PasswordHasher

logger = logging.getLogger(__name__)

DUMMY_EMAIL = "test@test.com"
MIN_PASSWORD_LENGTH = 8

_PASSWORD_CLASSES = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"\d"),
    re.compile(r"[\W_]"),
)


class UserRepository(Protocol):
    """Persistence interface for users."""

    def create_user(self, email: str, password_hash: str, role: UserRole) -> UserRecord:
        """Create a user; raise UserAlreadyExists if the email is taken."""

    def get_by_email(self, email: str) -> UserCredentials | None:
        """Return the user and its password hash, if present."""


def is_strong_password(password: str) -> bool:
    """Check length and the upper, lower, digit and symbol classes."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return False
    return all(pattern.search(password) for pattern in _PASSWORD_CLASSES)


@dataclass
class AuthService:
    """Issues tokens and resolves them back into principals."""

    repository: UserRepository
    tokens: JwtCodec
    hasher: PasswordHasher

    def dummy_login(self, role: UserRole) -> str:
        """Issue a token for a throwaway identity with the given role."""
        principal = AuthPrincipal(user_id=uuid4(), email=DUMMY_EMAIL, role=role)
        return self._issue(principal)

    def register(self, email: str, password: str, role: UserRole) -> UserRecord:
        """Create a user after checking the password policy."""
        if not is_strong_password(password):
            raise WeakPassword
        password_hash = self.hasher.hash(password)
        return self.repository.create_user(email, password_hash, role)

    def login(self, email: str, password: str) -> str:
        """Check credentials and issue a token."""
        credentials = self.repository.get_by_email(email)
        if credentials is None:
            raise UserNotFound
        if not self.hasher.verify(password, credentials.password_hash):
            raise WrongPassword
        user = credentials.user
        return self._issue(
            AuthPrincipal(user_id=user.id, email=user.email, role=user.role)
        )

    def validate_token(self, token: str) -> AuthPrincipal:
        """Verify a bearer token and decode its claims."""
        claims = self.tokens.decode(token)
        try:
            return AuthPrincipal(
                user_id=UUID(str(claims["uid"])),
                email=_require_str(claims["email"]),
                role=UserRole(claims["role"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Token claims rejected: %s", exc)
            raise InvalidClaims from exc

    def _issue(self, principal: AuthPrincipal) -> str:
        return self.tokens.encode(
            {
                "uid": str(principal.user_id),
                "email": principal.email,
                "role": str(principal.role),
            }
        )


def _require_str(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError("email claim must be a string")
    return value
