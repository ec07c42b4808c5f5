from typing import List, Sequence
from datetime import datetime

from fastapi import APIRouter, HTTPException
from sqlmodel import Session

from app.api.deps import CurrentUser, OptionalUser, SessionDep, validation_failed
from app.core.config import settings
from app.data_access import post as post_access
from app.data_access import thread as thread_access
from app.models.forum import Forum
from app.models.post import PostCreate, PostPublic
from app.models.thread import Thread, ThreadCreate, ThreadPublic, ThreadView
from app.models.user import User
from app.services import thread_state
from app.tasks.thread import record_thread_view

router = APIRouter(prefix="/thread", tags=["thread"])


def to_public(thread: Thread, view: ThreadView | None) -> ThreadPublic:
    state = thread_state.classify(thread, view, settings.HOT_MINIMUM)
    return ThreadPublic(
        **thread.model_dump(),
        icon=state.icon,
        css_class=state.css_class,
        description=state.description,
    )


def to_public_list(session: Session, threads: Sequence[Thread], viewer: User | None) -> List[ThreadPublic]:
    views = thread_access.get_views(session, threads, viewer)
    return [to_public(thread, views.get(thread.id)) for thread in threads]


def get_thread_or_404(session: Session, thread_id: int) -> Thread:
    db_thread = thread_access.get_thread(session, thread_id)
    if db_thread is None:
        raise HTTPException(status_code=404, detail="Thread not found")
    return db_thread


@router.get("/", response_model=List[ThreadPublic])
def search_threads(session: SessionDep, current_user: OptionalUser, forum_id: int | None = None):
    """
    Threads of a forum (or all forums), pinned first then most recently updated.
    """
    threads = thread_access.search(session, forum_id)
    return to_public_list(session, threads, current_user)


@router.get("/user/{user_id}", response_model=List[ThreadPublic])
def search_threads_by_user(session: SessionDep, user_id: int, current_user: OptionalUser):
    threads = thread_access.search_by_user(session, user_id, viewer=current_user)
    return to_public_list(session, threads, current_user)


@router.post("/", response_model=ThreadPublic)
def create_thread(session: SessionDep, thread: ThreadCreate, current_user: CurrentUser):
    forum = session.get(Forum, thread.forum_id)
    if forum is None:
        raise HTTPException(status_code=404, detail="Forum not found")
    if forum.locked and not thread_access.is_moderator(session, current_user, forum):
        raise HTTPException(status_code=403, detail="Forum is locked")
    if thread.pinned and not thread_access.is_moderator(session, current_user, forum):
        raise HTTPException(status_code=403, detail="Only moderators can pin threads")

    db_thread, errors = thread_access.create_thread(session, forum, thread, current_user)
    if errors:
        raise validation_failed(errors)
    # the author has seen their own first post
    view = thread_access.mark_seen(session, db_thread.id, current_user.id, db_thread.new_post_at)
    return to_public(db_thread, view)


@router.get("/{thread_id}", response_model=ThreadPublic)
def get_thread(session: SessionDep, thread_id: int, current_user: OptionalUser):
    db_thread = get_thread_or_404(session, thread_id)
    return to_public(db_thread, thread_access.get_view(session, db_thread, current_user))


@router.get("/{thread_id}/posts", response_model=List[PostPublic])
def get_posts(session: SessionDep, thread_id: int, limit: int = 10, offset: int = 0):
    get_thread_or_404(session, thread_id)
    return post_access.get_posts_by_thread(session, thread_id, limit=limit, offset=offset)


@router.get("/{thread_id}/first-to-see", response_model=PostPublic)
def get_first_to_see(session: SessionDep, thread_id: int, current_user: OptionalUser):
    db_thread = get_thread_or_404(session, thread_id)
    db_post = thread_access.first_to_see(session, db_thread, current_user)
    if db_post is None:
        raise HTTPException(status_code=404, detail="Thread has no posts")
    return db_post


@router.post("/{thread_id}/post", response_model=PostPublic)
def create_post(session: SessionDep, thread_id: int, post: PostCreate, current_user: CurrentUser):
    db_thread = get_thread_or_404(session, thread_id)
    forum = session.get(Forum, db_thread.forum_id)
    if db_thread.locked and not thread_access.is_moderator(session, current_user, forum):
        raise HTTPException(status_code=403, detail="Thread is locked")
    if not post.content.strip():
        raise HTTPException(status_code=422, detail={"content": ["Post can not be blank."]})
    return post_access.create_post(session, db_thread, post, current_user)


@router.post("/{thread_id}/view")
def insert_thread_view(session: SessionDep, thread_id: int, current_user: CurrentUser):
    get_thread_or_404(session, thread_id)
    # Send the view event to Celery task queue
    task = record_thread_view.delay(thread_id, current_user.id, datetime.now().isoformat())
    return task.id
