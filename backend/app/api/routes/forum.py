from typing import List

from fastapi import APIRouter, HTTPException
from sqlmodel import select

from app.api.deps import OptionalUser, SessionDep, SuperUser
from app.core.redis import redis_conn
from app.data_access.forum import add_moderator
from app.data_access.thread import unique_slug
from app.models.forum import Forum, ForumCreate, Moderator
from app.models.user import User

router = APIRouter(prefix="/forum", tags=["forum"])

# Constants for caching
FORUMS_CACHE_KEY = "all_forums"
FORUMS_CACHE_TTL = 6 * 60 * 60  # 6 hours in seconds

@router.post("/", response_model=Forum)
async def create_forum(forum: ForumCreate, session: SessionDep, current_user: SuperUser):
    db_forum = Forum(**forum.model_dump(), slug=unique_slug(session, Forum, forum.name))
    session.add(db_forum)
    session.commit()
    session.refresh(db_forum)

    # Invalidate the forums cache when new forum is created
    await redis_conn.remove(FORUMS_CACHE_KEY)

    return db_forum

@router.get("/", response_model=List[Forum])
async def get_forums(session: SessionDep, current_user: OptionalUser):
    # Try to get forums from cache first
    forums = await redis_conn.get_cached_object(FORUMS_CACHE_KEY, Forum)

    if forums is None:
        forums = session.exec(select(Forum).order_by(Forum.id.asc())).all()
        await redis_conn.cache_list(FORUMS_CACHE_KEY, forums, FORUMS_CACHE_TTL)

    if current_user is None:
        return [forum for forum in forums if forum.visible]
    return forums

@router.post("/{forum_id}/moderator/{user_id}", response_model=Moderator)
def add_forum_moderator(forum_id: int, user_id: int, session: SessionDep, current_user: SuperUser):
    forum = session.get(Forum, forum_id)
    if forum is None:
        raise HTTPException(status_code=404, detail="Forum not found")
    user = session.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return add_moderator(session, forum, user)
