import logging
from datetime import datetime
from typing import Protocol

from sqlmodel import Session, select

from app.core.validation import ValidationErrors
from app.models.user import User, UserStatus
from app.services import account

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    def get(self, user_id: int) -> User | None: ...

    def save(self, user: User) -> ValidationErrors: ...


class SqlUserRepository:
    """Loads and persists users through a SQLModel session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def save(self, user: User) -> ValidationErrors:
        errors = ValidationErrors()
        query = select(User).where(User.email == user.email)
        if user.id is not None:
            query = query.where(User.id != user.id)
        if self.session.exec(query).first() is not None:
            errors.add("email", "This email has already been taken.")
            return errors

        user.updated_at = datetime.now()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return errors

    def find_identity(self, user_id: int) -> User | None:
        return self.session.exec(
            select(User).where(User.id == user_id, User.status == UserStatus.ACTIVE)
        ).first()

    def find_identity_by_access_token(self, token: str, type: str | None = None) -> User | None:
        raise NotImplementedError('"find_identity_by_access_token" is not implemented.')

    def find_by_email(self, email: str, status: int | None = UserStatus.ACTIVE) -> User | None:
        query = select(User).where(User.email == email)
        if status is not None:
            query = query.where(User.status == status)
        return self.session.exec(query).first()

    def find_by_password_reset_token(
        self, token: str, status: int | None = UserStatus.ACTIVE
    ) -> User | None:
        if not account.is_password_reset_token_valid(token):
            return None
        query = select(User).where(User.password_reset_token == token)
        if status is not None:
            query = query.where(User.status == status)
        return self.session.exec(query).first()

    def find_by_activation_token(self, token: str) -> User | None:
        if not account.is_activation_token_valid(token):
            return None
        return self.session.exec(
            select(User).where(
                User.activation_token == token,
                User.status == UserStatus.REGISTERED,
            )
        ).first()
