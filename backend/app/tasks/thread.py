import logging
from datetime import datetime

from sqlmodel import Session

from app.core import db
from app.data_access.thread import mark_seen
from app.worker import celery

logger = logging.getLogger(__name__)


@celery.task
def record_thread_view(thread_id: int, user_id: int, seen_at: str | None = None) -> int:
  """Move the viewer's last-seen markers of a thread to ``seen_at`` (ISO format)."""
  moment = datetime.fromisoformat(seen_at) if seen_at else datetime.now()
  with Session(db.engine) as session:
    view_id = mark_seen(session, thread_id, user_id, moment).id
  logger.debug(f"User {user_id} saw thread {thread_id} at {moment}")
  return view_id
