"""Domain models for users and authenticated principals."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class UserRole(StrEnum):
    """Roles a user or token can carry."""

    EMPLOYEE = "employee"
    MODERATOR = "moderator"


@dataclass(frozen=True)
class UserRecord:
    """Represents a registered user without credentials."""

    id: UUID
    email: str
    role: UserRole


@dataclass(frozen=True)
class UserCredentials:
    """A user together with the stored password hash."""

    user: UserRecord
    password_hash: str


@dataclass(frozen=True)
class AuthPrincipal:
    """Identity resolved from a validated bearer token."""

    user_id: UUID
    email: str
    role: UserRole
