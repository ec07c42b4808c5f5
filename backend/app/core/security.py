import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from app.core.config import settings

ALGORITHM = "HS256"
TOKEN_SEPARATOR = "_"


def create_access_token(subject: str | Any, auth_key: str, expires_delta: timedelta) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"exp": expire, "sub": str(subject), "ak": auth_key}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def get_password_hash(password: str) -> str:
    return generate_password_hash(password, method="pbkdf2:sha256", salt_length=16)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    if not hashed_password:
        return False
    return check_password_hash(hashed_password, plain_password)


def generate_random_string(length: int = 32) -> str:
    """Random opaque string of URL-safe characters, ``length`` chars long."""
    return secrets.token_urlsafe(length)[:length]


def generate_expiring_token(now: int | None = None) -> str:
    """Build a ``<random>_<unixtime>`` token stamped with the issue time."""
    issued_at = int(time.time()) if now is None else int(now)
    return f"{generate_random_string()}{TOKEN_SEPARATOR}{issued_at}"


def token_timestamp(token: str) -> int | None:
    """Issue time embedded after the last separator, or None when malformed."""
    _, separator, tail = token.rpartition(TOKEN_SEPARATOR)
    if not separator:
        return None
    try:
        return int(tail)
    except ValueError:
        return None


def is_token_valid(token: str | None, expire: int, now: int | None = None) -> bool:
    if not token:
        return False
    timestamp = token_timestamp(token)
    if timestamp is None:
        return False
    current = int(time.time()) if now is None else int(now)
    return timestamp + expire >= current
