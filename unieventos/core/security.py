import uuid
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from unieventos.core import config

ALGORITHM = "HS256"

password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return password_hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    try:
        return password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def new_token_id() -> str:
    return uuid.uuid4().hex


def create_access_token(data: dict, jti: str, expires_delta: timedelta | None = None) -> str:
    """Sign an access token; ``jti`` must match the profile's current session id."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {**data, "jti": jti, "iat": now, "exp": expire}
    return jwt.encode(payload, config.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Raises jwt.InvalidTokenError subclasses on failure."""
    return jwt.decode(
        token,
        config.SECRET_KEY,
        algorithms=[ALGORITHM],
        options={"require": ["sub", "jti", "exp"]},
    )
