import re
from datetime import datetime

from sqlmodel import Field, SQLModel
from sqlalchemy import BigInteger, Column, UniqueConstraint

from app.core.validation import Rule, required
from app.models.types import BigIntPk

NAME_PATTERN = re.compile(r"[\w\s]{1,255}")
POST_MIN_LENGTH = 10


class Thread(SQLModel, table=True):
    __tablename__ = "podium_thread"
    id: int = Field(default=None, sa_column=Column(BigIntPk, primary_key=True, autoincrement=True))
    name: str = Field(max_length=255)
    slug: str = Field(max_length=255, unique=True, index=True)

    category_id: int | None = Field(default=None, sa_type=BigInteger)
    forum_id: int = Field(foreign_key="podium_forum.id", sa_type=BigInteger, index=True)
    author_id: int = Field(foreign_key="podium_user.id", sa_type=BigInteger, index=True)

    pinned: bool = Field(default=False)
    locked: bool = Field(default=False)

    # Denormalized from the thread's posts, kept current on post create/edit
    posts: int = Field(default=0)
    new_post_at: datetime | None = Field(default=None)
    edited_post_at: datetime | None = Field(default=None)

    updated_at: datetime = Field(default_factory=datetime.now, index=True)
    created_at: datetime = Field(default_factory=datetime.now)


class ThreadView(SQLModel, table=True):
    __tablename__ = "podium_thread_view"
    __table_args__ = (UniqueConstraint("user_id", "thread_id"),)
    id: int = Field(default=None, sa_column=Column(BigIntPk, primary_key=True, autoincrement=True))
    user_id: int = Field(foreign_key="podium_user.id", sa_type=BigInteger, index=True)
    thread_id: int = Field(foreign_key="podium_thread.id", sa_type=BigInteger, index=True)
    new_last_seen: datetime
    edited_last_seen: datetime


class Subscription(SQLModel, table=True):
    __tablename__ = "podium_subscription"
    __table_args__ = (UniqueConstraint("user_id", "thread_id"),)
    id: int = Field(default=None, sa_column=Column(BigIntPk, primary_key=True, autoincrement=True))
    user_id: int = Field(foreign_key="podium_user.id", sa_type=BigInteger, index=True)
    thread_id: int = Field(foreign_key="podium_thread.id", sa_type=BigInteger, index=True)
    created_at: datetime = Field(default_factory=datetime.now)


class ThreadCreate(SQLModel):
    name: str | None = None
    forum_id: int
    pinned: bool = False
    post: str | None = None
    # subscribe the author to replies
    subscribe: bool = False


class ThreadPublic(SQLModel):
    id: int
    name: str
    slug: str
    forum_id: int
    author_id: int
    pinned: bool
    locked: bool
    posts: int
    updated_at: datetime
    created_at: datetime

    icon: str
    css_class: str
    description: str


THREAD_RULES: tuple[Rule[ThreadCreate], ...] = (
    Rule("name", lambda t: required(t.name), "Topic can not be blank."),
    Rule(
        "name",
        lambda t: NAME_PATTERN.fullmatch(t.name) is not None,
        "Name must contain only letters, digits, underscores and spaces (255 characters max).",
    ),
    Rule("post", lambda t: required(t.post), "Post can not be blank.", on=("new",)),
    Rule(
        "post",
        lambda t: len(t.post) >= POST_MIN_LENGTH,
        f"Post should contain at least {POST_MIN_LENGTH} characters.",
        on=("new",),
    ),
)
