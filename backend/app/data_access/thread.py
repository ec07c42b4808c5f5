import re
from collections.abc import Sequence
from datetime import datetime

from sqlmodel import Session, SQLModel, select

from app.core.validation import ValidationErrors, validate
from app.data_access.forum import get_mods
from app.models.forum import Forum
from app.models.post import Post
from app.models.thread import THREAD_RULES, Subscription, Thread, ThreadCreate, ThreadView
from app.models.user import User

_slug_pattern = re.compile(r"[\W_]+")


def slugify(value: str, fallback: str = "thread") -> str:
    normalized = _slug_pattern.sub("-", value.lower()).strip("-")
    if not normalized:
        return fallback
    return normalized[:240]


def unique_slug(db: Session, model: type[SQLModel], name: str) -> str:
    base = slugify(name)
    slug = base
    suffix = 1
    while db.exec(select(model).where(model.slug == slug)).first() is not None:
        suffix += 1
        slug = f"{base}-{suffix}"
    return slug


def search(db: Session, forum_id: int | None = None) -> Sequence[Thread]:
    query = select(Thread)
    if forum_id:
        query = query.where(Thread.forum_id == int(forum_id))
    query = query.order_by(Thread.pinned.desc(), Thread.updated_at.desc(), Thread.id.asc())
    return db.exec(query).all()


def search_by_user(db: Session, user_id: int, viewer: User | None = None) -> Sequence[Thread]:
    query = select(Thread).where(Thread.author_id == int(user_id))
    if viewer is None:
        # Guests only see threads of visible forums
        query = query.join(Forum, Forum.id == Thread.forum_id).where(Forum.visible == True)  # noqa: E712
    query = query.order_by(Thread.updated_at.desc(), Thread.id.asc())
    return db.exec(query).all()


def get_thread(db: Session, thread_id: int) -> Thread | None:
    return db.get(Thread, thread_id)


def get_view(db: Session, thread: Thread, viewer: User | None) -> ThreadView | None:
    if viewer is None:
        return None
    return db.exec(
        select(ThreadView).where(ThreadView.thread_id == thread.id, ThreadView.user_id == viewer.id)
    ).first()


def get_subscription(db: Session, thread: Thread, viewer: User | None) -> Subscription | None:
    if viewer is None:
        return None
    return db.exec(
        select(Subscription).where(Subscription.thread_id == thread.id, Subscription.user_id == viewer.id)
    ).first()


def get_views(db: Session, threads: Sequence[Thread], viewer: User | None) -> dict[int, ThreadView]:
    if viewer is None or not threads:
        return {}
    views = db.exec(
        select(ThreadView).where(
            ThreadView.user_id == viewer.id,
            ThreadView.thread_id.in_([thread.id for thread in threads]),
        )
    ).all()
    return {view.thread_id: view for view in views}


def mark_seen(db: Session, thread_id: int, user_id: int, seen_at: datetime | None = None) -> ThreadView:
    seen_at = seen_at or datetime.now()
    view = db.exec(
        select(ThreadView).where(ThreadView.thread_id == thread_id, ThreadView.user_id == user_id)
    ).first()
    if view is None:
        view = ThreadView(thread_id=thread_id, user_id=user_id, new_last_seen=seen_at, edited_last_seen=seen_at)
    else:
        view.new_last_seen = seen_at
        view.edited_last_seen = seen_at
    db.add(view)
    db.commit()
    db.refresh(view)
    return view


def latest_post(db: Session, thread: Thread) -> Post | None:
    return db.exec(select(Post).where(Post.thread_id == thread.id).order_by(Post.id.desc())).first()


def first_post(db: Session, thread: Thread) -> Post | None:
    return db.exec(select(Post).where(Post.thread_id == thread.id).order_by(Post.id.asc())).first()


def first_new_not_seen(db: Session, thread: Thread, view: ThreadView | None) -> Post | None:
    query = select(Post).where(Post.thread_id == thread.id)
    if view is not None:
        query = query.where(Post.created_at > view.new_last_seen)
    return db.exec(query.order_by(Post.id.asc())).first()


def first_edited_not_seen(db: Session, thread: Thread, view: ThreadView | None) -> Post | None:
    query = select(Post).where(Post.thread_id == thread.id, Post.edited_at != None)  # noqa: E711
    if view is not None:
        query = query.where(Post.edited_at > view.edited_last_seen)
    return db.exec(query.order_by(Post.id.asc())).first()


def first_to_see(db: Session, thread: Thread, viewer: User | None) -> Post | None:
    """The post a viewer should land on when opening the thread."""
    view = get_view(db, thread, viewer)
    return (
        first_new_not_seen(db, thread, view)
        or first_edited_not_seen(db, thread, view)
        or latest_post(db, thread)
    )


def validate_thread(thread: ThreadCreate, scenario: str | None = None) -> ValidationErrors:
    return validate(thread, THREAD_RULES, scenario=scenario)


def create_thread(db: Session, forum: Forum, thread: ThreadCreate, author: User) -> tuple[Thread | None, ValidationErrors]:
    errors = validate_thread(thread, scenario="new")
    if errors:
        return None, errors

    now = datetime.now()
    db_thread = Thread(
        name=thread.name.strip(),
        slug=unique_slug(db, Thread, thread.name),
        category_id=forum.category_id,
        forum_id=forum.id,
        author_id=author.id,
        pinned=thread.pinned,
        locked=forum.locked,
        posts=1,
        new_post_at=now,
        created_at=now,
        updated_at=now,
    )
    db.add(db_thread)
    db.commit()
    db.refresh(db_thread)

    first = Post(
        thread_id=db_thread.id,
        forum_id=forum.id,
        author_id=author.id,
        content=thread.post,
        created_at=now,
        updated_at=now,
    )
    db.add(first)
    if thread.subscribe:
        db.add(Subscription(thread_id=db_thread.id, user_id=author.id))
    db.commit()
    db.refresh(db_thread)
    return db_thread, errors


def is_moderator(db: Session, user: User | None, forum: Forum) -> bool:
    if user is None:
        return False
    return user.is_admin or user.id in get_mods(db, forum)
