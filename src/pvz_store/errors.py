"""Error kinds raised by services and storage adapters.

Every kind carries a stable string ``code``. The API layer maps the class to
an HTTP status and returns the code as the response message.
"""


class PvzStoreError(Exception):
    """Base class for all expected application errors."""

    code = "ERR_INTERNAL"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.code)


class InvalidRegistrationDate(PvzStoreError):
    code = "ERR_DATE_FROM_FUTURE_FOR_REGISTRATION_DATE"


class PickupPointAlreadyExists(PvzStoreError):
    code = "ERR_PVZ_ALREADY_EXIST"


class PickupPointNotFound(PvzStoreError):
    code = "ERR_PVZ_DOESNT_EXIST"


class ReceptionAlreadyOpen(PvzStoreError):
    code = "ERR_RECEPTION_ALREADY_EXIST"


class ReceptionNotFound(PvzStoreError):
    code = "ERR_RECEPTION_DOESNT_EXIST"


class ReceptionNotOpen(PvzStoreError):
    code = "ERR_WRONG_RECEPTION_STATUS"


class NoProductsToDelete(PvzStoreError):
    code = "ERR_NO_PRODUCTS_TO_DELETE"


class WeakPassword(PvzStoreError):
    code = "ERR_WRONG_PASSWORD_FORMAT"


class UserAlreadyExists(PvzStoreError):
    code = "ERR_USER_ALREADY_EXIST"


class UserNotFound(PvzStoreError):
    code = "ERR_USER_NOT_FOUND"


class WrongPassword(PvzStoreError):
    code = "ERR_WRONG_PASSWORD"


class Unauthenticated(PvzStoreError):
    code = "ERR_UNAUTHENTICATED"


class InvalidToken(PvzStoreError):
    code = "ERR_INVALID_AUTH_TOKEN"


class InvalidClaims(PvzStoreError):
    code = "ERR_CANNOT_PARSE_CLAIMS"


class ForbiddenRole(PvzStoreError):
    code = "ACCESS_IS_FORBIDDEN_FOR_CURRENT_ROLE"


class TokenEncodingFailed(PvzStoreError):
    code = "ERR_FAILED_TO_ENCODE_JWT"


class StorageError(PvzStoreError):
    """Unexpected failure talking to the database."""

    code = "ERR_STORAGE_FAILURE"
