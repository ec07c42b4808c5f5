from sqlmodel import Field, SQLModel
from datetime import datetime
from sqlalchemy import BigInteger, Column

from app.models.types import BigIntPk

class Post(SQLModel, table=True):
    __tablename__ = "podium_post"
    id: int = Field(default=None, sa_column=Column(BigIntPk, primary_key=True, autoincrement=True))
    thread_id: int = Field(foreign_key="podium_thread.id", sa_type=BigInteger, index=True)
    forum_id: int = Field(foreign_key="podium_forum.id", sa_type=BigInteger)
    author_id: int = Field(foreign_key="podium_user.id", sa_type=BigInteger)
    content: str

    edited: bool = Field(default=False)
    edited_at: datetime | None = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.now, index=True)
    updated_at: datetime = Field(default_factory=datetime.now)

class PostCreate(SQLModel):
    content: str

class PostUpdate(SQLModel):
    content: str

class PostPublic(SQLModel):
    id: int
    thread_id: int
    forum_id: int
    author_id: int
    content: str
    edited: bool
    edited_at: datetime | None
    created_at: datetime
    updated_at: datetime
