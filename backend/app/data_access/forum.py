from sqlmodel import Session, select

from app.models.forum import Forum, Moderator
from app.models.user import User


def get_mods(db: Session, forum: Forum) -> list[int]:
    """Ids of the users moderating the forum."""
    return list(db.exec(select(Moderator.user_id).where(Moderator.forum_id == forum.id)).all())


def add_moderator(db: Session, forum: Forum, user: User) -> Moderator:
    moderator = db.exec(
        select(Moderator).where(Moderator.forum_id == forum.id, Moderator.user_id == user.id)
    ).first()
    if moderator is None:
        moderator = Moderator(forum_id=forum.id, user_id=user.id)
        db.add(moderator)
        db.commit()
        db.refresh(moderator)
    return moderator
