"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.api.deps import get_db
from app.core import security
from app.core.config import settings
from app.data_access.user import SqlUserRepository
from app.main import app
from app.models.forum import Forum
from app.models.post import Post
from app.models.thread import Thread
from app.models.user import User, UserStatus

PASSWORD = "Abcdef1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine) -> Generator[TestClient, None, None]:
    def get_test_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def users(session) -> SqlUserRepository:
    return SqlUserRepository(session)


def make_user(session: Session, email: str = "member@example.com", **overrides) -> User:
    values = {
        "email": email,
        "password_hash": security.get_password_hash(PASSWORD),
        "auth_key": security.generate_random_string(),
        "status": UserStatus.ACTIVE,
    }
    values.update(overrides)
    user = User(**values)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_forum(session: Session, name: str = "General", **overrides) -> Forum:
    forum = Forum(name=name, slug=overrides.pop("slug", name.lower()), **overrides)
    session.add(forum)
    session.commit()
    session.refresh(forum)
    return forum


def make_thread(session: Session, forum: Forum, author: User, name: str = "Hello", **overrides) -> Thread:
    values = {
        "name": name,
        "slug": overrides.pop("slug", f"{name.lower()}-{forum.id}-{author.id}"),
        "forum_id": forum.id,
        "author_id": author.id,
    }
    values.update(overrides)
    thread = Thread(**values)
    session.add(thread)
    session.commit()
    session.refresh(thread)
    return thread


def make_post(session: Session, thread: Thread, author: User, content: str = "Some post content", **overrides) -> Post:
    post = Post(thread_id=thread.id, forum_id=thread.forum_id, author_id=author.id, content=content, **overrides)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post


def auth_headers(user: User) -> dict[str, str]:
    token = security.create_access_token(
        user.id, user.auth_key, expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return {"Authorization": f"Bearer {token}"}
