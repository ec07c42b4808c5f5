"""Viewer-relative thread status.

A thread is shown with an icon, a CSS class and a short description that
depend on its flags (locked, pinned, hot) and on what the current viewer has
already seen. The viewer's ``ThreadView`` is passed in explicitly; ``None``
means the viewer never opened the thread (guests always get ``None``).
"""
from dataclasses import dataclass
from datetime import datetime

from app.models.thread import Thread, ThreadView

ICON_HOT = "fire"
ICON_LOCKED = "lock"
ICON_NEW = "leaf"
ICON_NO_NEW = "comment"
ICON_PINNED = "pushpin"

DESC_EDITED = "Edited Posts"
DESC_HOT = "Hot Thread"
DESC_NEW = "New Posts"
DESC_NO_NEW = "No New Posts"
DESC_LOCKED = "Locked Thread"
DESC_PINNED = "Pinned Thread"

CLASS_DEFAULT = "default"
CLASS_EDITED = "edited"
CLASS_NEW = "new"

UNSEEN_NEW = "new"
UNSEEN_EDITED = "edited"


@dataclass(frozen=True)
class ThreadState:
    icon: str
    css_class: str
    description: str


def _after(moment: datetime | None, seen: datetime | None) -> bool:
    if moment is None:
        return False
    if seen is None:
        return True
    return moment > seen


def unseen(thread: Thread, view: ThreadView | None) -> str | None:
    """What the viewer has not seen yet: new posts, edited posts or nothing."""
    if view is None:
        return UNSEEN_NEW
    if _after(thread.new_post_at, view.new_last_seen):
        return UNSEEN_NEW
    if _after(thread.edited_post_at, view.edited_last_seen):
        return UNSEEN_EDITED
    return None


def _flag(thread: Thread, hot_minimum: int) -> tuple[str, str] | None:
    if thread.locked:
        return ICON_LOCKED, DESC_LOCKED
    if thread.pinned:
        return ICON_PINNED, DESC_PINNED
    if thread.posts >= hot_minimum:
        return ICON_HOT, DESC_HOT
    return None


def icon(thread: Thread, view: ThreadView | None, hot_minimum: int) -> str:
    flag = _flag(thread, hot_minimum)
    if flag is not None:
        return flag[0]
    if unseen(thread, view) is not None:
        return ICON_NEW
    return ICON_NO_NEW


def description(thread: Thread, view: ThreadView | None, hot_minimum: int) -> str:
    flag = _flag(thread, hot_minimum)
    state = unseen(thread, view)
    if state is None:
        return flag[1] if flag is not None else DESC_NO_NEW

    detail = DESC_NEW if state == UNSEEN_NEW else DESC_EDITED
    if flag is None:
        return detail
    return f"{flag[1]} ({detail})"


def css_class(thread: Thread, view: ThreadView | None) -> str:
    state = unseen(thread, view)
    if state == UNSEEN_NEW:
        return CLASS_NEW
    if state == UNSEEN_EDITED:
        return CLASS_EDITED
    return CLASS_DEFAULT


def classify(thread: Thread, view: ThreadView | None, hot_minimum: int) -> ThreadState:
    return ThreadState(
        icon=icon(thread, view, hot_minimum),
        css_class=css_class(thread, view),
        description=description(thread, view, hot_minimum),
    )
