"""Auth service: password hashing, access tokens and credential checks.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import jwt

from domain.model.errors import AuthenticationError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
# bcrypt only reads this many bytes; bcrypt>=5 rejects longer input
BCRYPT_MAX_PASSWORD_BYTES = 72
JWT_ALGORITHM = "HS256"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """False for any password bcrypt could not have hashed, including over-long ones."""
    encoded = plain.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed.encode("utf-8"))


def parse_expires_in(value: timedelta | int | str) -> timedelta:
    """Convert a token lifetime into a timedelta.

    Accepts a timedelta, a number of seconds, or strings such as
    ``"90"``, ``"30s"``, ``"15m"``, ``"1h"`` and ``"7d"``.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)
    match = _DURATION_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid token lifetime: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def create_access_token(user: User, secret: str, expires_in: timedelta) -> str:
    """Create a signed JWT access token for a user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "email": user.email,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict:
    """Verify signature and expiry, return the claims.

    Raises:
        jose.JWTError: token is malformed, tampered with, or expired
    """
    return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])


@dataclass(frozen=True)
class AuthResult:
    user: User
    access_token: str


class AuthenticateUserUseCase:
    """Check credentials and issue an access token.

    Both "unknown email" and "wrong password" fail with the same
    AuthenticationError so callers cannot tell which one happened.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        jwt_secret: str,
        jwt_expires_in: timedelta | int | str = "1h",
        logger: logging.Logger | None = None,
    ):
        self.user_repo = user_repo
        self.jwt_secret = jwt_secret
        self.jwt_expires_in = parse_expires_in(jwt_expires_in)
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, email: str, password: str) -> AuthResult:
        user = await self.user_repo.find_by_email(email)
        if not user:
            self.logger.info("Authentication failed", extra={"email": email})
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not await asyncio.to_thread(verify_password, password, user.password):
            self.logger.info("Authentication failed", extra={"email": email})
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        token = create_access_token(user, self.jwt_secret, self.jwt_expires_in)
        self.logger.info("User authenticated", extra={"userId": user.id})
        return AuthResult(user=user, access_token=token)
