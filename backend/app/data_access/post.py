from datetime import datetime

from sqlmodel import Session, select, update

from app.models.post import Post, PostCreate
from app.models.thread import Thread
from app.models.user import User

def create_post(db: Session, thread: Thread, post: PostCreate, user: User) -> Post:
    now = datetime.now()
    db_post = Post(
        **post.model_dump(),
        thread_id=thread.id,
        forum_id=thread.forum_id,
        author_id=user.id,
        created_at=now,
        updated_at=now,
    )
    db.add(db_post)
    # atomic increment post count
    q = update(Thread).where(Thread.id == thread.id).values(
        posts=Thread.posts + 1, new_post_at=now, updated_at=now
    )
    db.exec(q)
    db.commit()
    db.refresh(db_post)
    db.refresh(thread)
    return db_post

def edit_post(db: Session, post: Post, content: str) -> Post:
    now = datetime.now()
    post.content = content
    post.edited = True
    post.edited_at = now
    post.updated_at = now
    db.add(post)
    q = update(Thread).where(Thread.id == post.thread_id).values(edited_post_at=now)
    db.exec(q)
    db.commit()
    db.refresh(post)
    return post

def get_post(db: Session, post_id: int) -> Post | None:
    return db.get(Post, post_id)

def get_posts_by_thread(db: Session, thread_id: int, limit: int = 10, offset: int = 0) -> list[Post]:
    return db.exec(
        select(Post).where(Post.thread_id == thread_id).order_by(Post.id.asc()).offset(offset).limit(limit)
    ).all()
