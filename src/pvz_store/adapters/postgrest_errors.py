"""Helpers for interpreting PostgREST errors."""

from postgrest.exceptions import APIError

UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: APIError, constraint: str | None = None) -> bool:
    """Return whether the error is a unique violation, optionally on a constraint."""
    if error.code != UNIQUE_VIOLATION:
        return False
    if constraint is None:
        return True
    text = f"{error.message or ''} {error.details or ''}"
    return constraint in text
