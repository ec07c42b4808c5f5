"""Account credential lifecycle.

Covers password hashing, the "remember me" auth key, the time-boxed
activation and password reset tokens, password strength rules and the
Registered -> Active transition. Persistence goes through the repository
passed in by the caller, so nothing here touches a database directly.
"""
import logging
from typing import TYPE_CHECKING

from pydantic import EmailStr, TypeAdapter, ValidationError

from app.core import security
from app.core.config import settings
from app.core.validation import Rule, ValidationErrors, required, validate
from app.models.user import User, UserRegister, UserStatus

if TYPE_CHECKING:
    from app.data_access.user import UserRepository

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100
PASSWORD_MESSAGE = (
    "Password must contain uppercase and lowercase letter, digit, "
    "and be at least 6 characters long."
)

_email_adapter = TypeAdapter(EmailStr)


def statuses() -> dict[int, str]:
    return {
        UserStatus.ACTIVE: "Active",
        UserStatus.BANNED: "Banned",
        UserStatus.REGISTERED: "Registered",
    }


def password_requirements(password: str | None) -> str | None:
    """Return the error message for a weak password, None when it is fine.

    Characters are classified with ``str.isupper``, ``str.islower`` and
    ``str.isdecimal`` so any Unicode letter or digit counts; length is in
    code points.
    """
    if not password:
        return PASSWORD_MESSAGE
    if (
        not any(ch.isupper() for ch in password)
        or not any(ch.islower() for ch in password)
        or not any(ch.isdecimal() for ch in password)
        or not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH
    ):
        return PASSWORD_MESSAGE
    return None


def is_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


REGISTRATION_RULES: tuple[Rule[UserRegister], ...] = (
    Rule("email", lambda f: required(f.email), "Email cannot be blank."),
    Rule("password", lambda f: required(f.password), "Password cannot be blank."),
    Rule("password_repeat", lambda f: required(f.password_repeat), "Repeat password cannot be blank."),
    Rule("email", lambda f: is_email(f.email), "Email is not a valid email address."),
    Rule("email", lambda f: len(f.email) <= 255, "Email should contain at most 255 characters."),
    Rule("password", lambda f: password_requirements(f.password) is None, PASSWORD_MESSAGE),
    Rule("password", lambda f: f.password == f.password_repeat, "Passwords must match."),
    Rule("tos", lambda f: f.tos is True, "You have to read and agree on ToS."),
)


def validate_registration(form: UserRegister) -> ValidationErrors:
    return validate(form, REGISTRATION_RULES)


def check_password(password: str | None) -> ValidationErrors:
    errors = ValidationErrors()
    message = password_requirements(password)
    if message is not None:
        errors.add("password", message)
    return errors


def validate_new_password(password: str, password_repeat: str) -> ValidationErrors:
    errors = check_password(password)
    if not errors and password != password_repeat:
        errors.add("password", "Passwords must match.")
    return errors


def is_password_reset_token_valid(
    token: str | None, expire: int | None = None, now: int | None = None
) -> bool:
    if expire is None:
        expire = settings.PASSWORD_RESET_TOKEN_EXPIRE
    return security.is_token_valid(token, expire, now=now)


def is_activation_token_valid(
    token: str | None, expire: int | None = None, now: int | None = None
) -> bool:
    if expire is None:
        expire = settings.ACTIVATION_TOKEN_EXPIRE
    return security.is_token_valid(token, expire, now=now)


def set_password(user: User, password: str) -> None:
    user.password_hash = security.get_password_hash(password)


def validate_password(user: User, password: str) -> bool:
    return security.verify_password(password, user.password_hash)


def generate_auth_key(user: User) -> None:
    user.auth_key = security.generate_random_string()


def validate_auth_key(user: User, auth_key: str | None) -> bool:
    return user.auth_key is not None and user.auth_key == auth_key


def generate_password_reset_token(user: User) -> None:
    user.password_reset_token = security.generate_expiring_token()


def remove_password_reset_token(user: User) -> None:
    user.password_reset_token = None


def generate_activation_token(user: User) -> None:
    user.activation_token = security.generate_expiring_token()


def remove_activation_token(user: User) -> None:
    user.activation_token = None


def register(user: User, password: str, repo: "UserRepository") -> ValidationErrors:
    errors = check_password(password)
    if errors:
        return errors

    set_password(user, password)
    generate_activation_token(user)
    generate_auth_key(user)
    user.status = UserStatus.REGISTERED

    errors = repo.save(user)
    if not errors:
        logger.info(f"Registered user {user.id}")
    return errors


def activate(user: User, repo: "UserRepository") -> bool:
    if user.status != UserStatus.REGISTERED:
        return False

    remove_activation_token(user)
    user.status = UserStatus.ACTIVE
    if repo.save(user):
        return False
    logger.info(f"Activated user {user.id}")
    return True


def change_password(user: User, password: str, repo: "UserRepository") -> ValidationErrors:
    errors = check_password(password)
    if errors:
        return errors

    set_password(user, password)
    generate_auth_key(user)
    remove_password_reset_token(user)

    errors = repo.save(user)
    if not errors:
        logger.info(f"Changed password of user {user.id}")
    return errors
