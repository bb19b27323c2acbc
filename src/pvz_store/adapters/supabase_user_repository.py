"""Supabase-backed user repository."""

import logging
from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from pvz_store.adapters.postgrest_errors import is_unique_violation
from pvz_store.domain.users import UserCredentials, UserRecord, UserRole
from pvz_store.errors import StorageError, UserAlreadyExists
from pvz_store.services.auth import UserRepository

logger = logging.getLogger(__name__)

_USERS_EMAIL_KEY = "users_email_key"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def create_user(self, email: str, password_hash: str, role: UserRole) -> UserRecord:
        """Create a new user row and return it."""
        try:
            response = (
                self.client.table("users")
                .insert(
                    {"email": email, "password_hash": password_hash, "role": str(role)}
                )
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc, _USERS_EMAIL_KEY):
                raise UserAlreadyExists from exc
            logger.exception("Failed to create user")
            raise StorageError("could not create user") from exc
        if not response.data:
            raise StorageError("could not create user")
        return _parse_user(response.data[0])

    def get_by_email(self, email: str) -> UserCredentials | None:
        """Return the user and password hash for an email, if present."""
        try:
            response = (
                self.client.table("users")
                .select("id, email, role, password_hash")
                .eq("email", email)
                .limit(1)
                .execute()
            )
        except APIError as exc:
            logger.exception("Failed to load user by email")
            raise StorageError("could not get user") from exc
        if not response.data:
            return None
        row = response.data[0]
        return UserCredentials(
            user=_parse_user(row), password_hash=str(row["password_hash"])
        )


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        email=str(row["email"]),
        role=UserRole(row["role"]),
    )
