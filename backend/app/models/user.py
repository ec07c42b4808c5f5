from datetime import datetime
from enum import IntEnum

from pydantic import EmailStr
from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from app.models.types import BigIntPk


class UserStatus(IntEnum):
    REGISTERED = 1
    BANNED = 9
    ACTIVE = 10


# Shared properties
class UserBase(SQLModel):
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    level: int = Field(default=1) # 0 for admin, 1 for member
    status: int = Field(default=UserStatus.REGISTERED, index=True)


# Database model, database table inferred from class name
class User(UserBase, table=True):
    __tablename__ = "podium_user"
    id: int = Field(default=None, sa_column=Column(BigIntPk, primary_key=True, autoincrement=True))
    password_hash: str | None = Field(default=None, max_length=255)
    password_reset_token: str | None = Field(default=None, max_length=255, index=True)
    activation_token: str | None = Field(default=None, max_length=255, index=True)
    auth_key: str | None = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.level == 0


# Properties to receive via API on registration
class UserRegister(SQLModel):
    email: str = Field(max_length=255)
    password: str
    password_repeat: str
    tos: bool = False


# Properties to return via API, id is always required
class UserPublic(SQLModel):
    id: int
    email: str
    level: int
    status: int
    created_at: datetime


class UpdatePassword(SQLModel):
    current_password: str
    new_password: str
    new_password_repeat: str


# Generic message
class Message(SQLModel):
    message: str


# JSON payload containing access token
class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"


# Contents of JWT token
class TokenPayload(SQLModel):
    sub: str | None = None
    ak: str | None = None


class NewPassword(SQLModel):
    token: str
    new_password: str
    new_password_repeat: str
