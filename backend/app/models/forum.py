from sqlmodel import Field, SQLModel
from datetime import datetime
from sqlalchemy import BigInteger, Column, UniqueConstraint

from app.models.types import BigIntPk

class Forum(SQLModel, table=True):
    __tablename__ = "podium_forum"
    id: int = Field(default=None, sa_column=Column(BigIntPk, primary_key=True, autoincrement=True))
    name: str = Field(max_length=255)
    slug: str = Field(max_length=255, unique=True, index=True)

    category_id: int | None = Field(default=None, sa_type=BigInteger)

    # Guests only see visible forums
    visible: bool = Field(default=True)
    locked: bool = Field(default=False)

    updated_at: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)

class Moderator(SQLModel, table=True):
    __tablename__ = "podium_moderator"
    __table_args__ = (UniqueConstraint("user_id", "forum_id"),)
    id: int = Field(default=None, sa_column=Column(BigIntPk, primary_key=True, autoincrement=True))
    user_id: int = Field(foreign_key="podium_user.id", sa_type=BigInteger, index=True)
    forum_id: int = Field(foreign_key="podium_forum.id", sa_type=BigInteger, index=True)

class ForumCreate(SQLModel):
    name: str
    category_id: int | None = None
    visible: bool = True
    locked: bool = False
