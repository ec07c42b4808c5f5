from typing import List

from fastapi import APIRouter, HTTPException, Query
from sqlmodel import select

from app.api.deps import CurrentUser, SessionDep
from app.data_access import post as post_access
from app.data_access.thread import is_moderator
from app.models.forum import Forum
from app.models.post import Post, PostPublic, PostUpdate

router = APIRouter(prefix="/post", tags=["post"])

@router.get("/", response_model=List[PostPublic])
def get_posts_by_ids(
    session: SessionDep,
    post_ids: List[int] = Query(..., description="List of post IDs to fetch")
):
    """
    Retrieve multiple posts by their IDs.
    """
    if not post_ids:
        return []
    statement = select(Post).where(Post.id.in_(post_ids)).order_by(Post.id.asc())
    return session.exec(statement).all()

@router.patch("/{post_id}", response_model=PostPublic)
def edit_post(session: SessionDep, post_id: int, body: PostUpdate, current_user: CurrentUser):
    """
    Edit a post; readers of the thread see it as edited until they open it again.
    """
    db_post = post_access.get_post(session, post_id)
    if db_post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    forum = session.get(Forum, db_post.forum_id)
    if db_post.author_id != current_user.id and not is_moderator(session, current_user, forum):
        raise HTTPException(status_code=403, detail="You can only edit your own posts")
    if not body.content.strip():
        raise HTTPException(status_code=422, detail={"content": ["Post can not be blank."]})
    return post_access.edit_post(session, db_post, body.content)
