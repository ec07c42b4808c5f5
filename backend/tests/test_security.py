"""Token issuing and checking."""

import time
from datetime import timedelta

import jwt

from app.core import security
from app.core.config import settings


def test_expiring_token_embeds_issue_time():
    token = security.generate_expiring_token(now=1700000000)

    assert token.endswith("_1700000000")
    assert security.token_timestamp(token) == 1700000000


def test_token_timestamp_uses_last_separator():
    """The random part may contain underscores; only the tail is parsed."""
    assert security.token_timestamp("ab_cd_ef_1234") == 1234


def test_token_timestamp_of_malformed_token_is_none():
    assert security.token_timestamp("abcnotanumber") is None
    assert security.token_timestamp("abc_") is None
    assert security.token_timestamp("abc_12x") is None


def test_is_token_valid_boundaries():
    now = int(time.time())
    token = f"random_{now - 100}"

    assert security.is_token_valid(token, 100, now=now)
    assert not security.is_token_valid(token, 99, now=now)


def test_is_token_valid_rejects_empty_and_malformed():
    assert not security.is_token_valid("", 3600)
    assert not security.is_token_valid(None, 3600)
    assert not security.is_token_valid("abcnotanumber", 3600)


def test_random_strings_differ():
    first = security.generate_random_string()
    second = security.generate_random_string()

    assert len(first) == 32
    assert first != second


def test_password_hash_round_trip():
    hashed = security.get_password_hash("Abcdef1")

    assert hashed != "Abcdef1"
    assert security.verify_password("Abcdef1", hashed)
    assert not security.verify_password("abcdef1", hashed)
    assert not security.verify_password("Abcdef1", None)


def test_access_token_carries_auth_key():
    token = security.create_access_token(5, "key", expires_delta=timedelta(minutes=5))

    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[security.ALGORITHM])

    assert payload["sub"] == "5"
    assert payload["ak"] == "key"
