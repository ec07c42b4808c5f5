import logging

from sqlmodel import Session, SQLModel, create_engine, select

from app.core.config import settings
from app.core.security import generate_random_string, get_password_hash
from app.data_access.thread import slugify
from app.models.forum import Forum, Moderator  # noqa: F401
from app.models.post import Post  # noqa: F401
from app.models.thread import Subscription, Thread, ThreadView  # noqa: F401
from app.models.user import User, UserStatus

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.SQLALCHEMY_DATABASE_URI.startswith("sqlite") else {}
engine = create_engine(settings.SQLALCHEMY_DATABASE_URI, connect_args=connect_args)


# make sure all SQLModel models are imported (app.models) before initializing DB
# otherwise, SQLModel might fail to initialize relationships properly


def init_db(session: Session) -> None:
    # Tables should be created with Alembic migrations in production
    SQLModel.metadata.create_all(session.get_bind())

    # Create admin user if not exists.
    admin_user = session.exec(
        select(User).where(User.email == settings.FIRST_SUPERUSER)
    ).first()
    if admin_user is None:
        admin_user = User(
            email=settings.FIRST_SUPERUSER,
            password_hash=get_password_hash(settings.FIRST_SUPERUSER_PASSWORD),
            auth_key=generate_random_string(),
            status=UserStatus.ACTIVE,
            level=0,
        )
        session.add(admin_user)
        session.commit()
        logger.info(f"Created first superuser {settings.FIRST_SUPERUSER}")
    # Create default forum if not exists
    forum = session.exec(select(Forum)).first()
    if forum is None:
        forum = Forum(name="General", slug=slugify("General"))
        session.add(forum)
        session.commit()
