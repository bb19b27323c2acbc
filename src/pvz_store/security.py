"""JWT signing and password hashing primitives."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from jose import jwt
from jose.exceptions import JOSEError
from passlib.context import CryptContext

from pvz_store.errors import InvalidToken, TokenEncodingFailed


@dataclass
class JwtCodec:
    """Signs and verifies HMAC JWTs with an expiry claim."""

    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(hours=24)

    def encode(self, claims: dict[str, object]) -> str:
        """Sign the claims, adding an ``exp`` claim."""
        payload = dict(claims)
        payload["exp"] = datetime.now(tz=UTC) + self.ttl
        try:
            return jwt.encode(payload, self.secret, algorithm=self.algorithm)
        except JOSEError as exc:
            raise TokenEncodingFailed(str(exc)) from exc

    def decode(self, token: str) -> dict[str, object]:
        """Verify the signature and the mandatory expiry; return the claims."""
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
        except JOSEError as exc:
            raise InvalidToken(str(exc)) from exc


@dataclass
class PasswordHasher:
    """bcrypt password hashing through passlib."""

    rounds: int = 10
    _context: CryptContext = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=self.rounds
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Return whether the password matches; malformed hashes never match."""
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            return False
