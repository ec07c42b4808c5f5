"""Viewer-relative thread icon, class and description."""

from datetime import datetime, timedelta

import pytest

from app.models.thread import Thread, ThreadView
from app.services import thread_state

HOT = 10
SEEN = datetime(2024, 1, 1, 12, 0)
BEFORE = SEEN - timedelta(hours=1)
AFTER = SEEN + timedelta(hours=1)


def thread(**overrides) -> Thread:
    values = {
        "id": 1,
        "name": "Topic",
        "slug": "topic",
        "forum_id": 1,
        "author_id": 1,
        "posts": 1,
        "new_post_at": BEFORE,
        "edited_post_at": None,
    }
    values.update(overrides)
    return Thread(**values)


def view(new_last_seen: datetime = SEEN, edited_last_seen: datetime = SEEN) -> ThreadView:
    return ThreadView(user_id=1, thread_id=1, new_last_seen=new_last_seen, edited_last_seen=edited_last_seen)


@pytest.mark.parametrize(
    "flags, current_view",
    [
        ({}, None),
        ({"pinned": True}, None),
        ({"posts": HOT}, view()),
        ({"pinned": True, "posts": HOT, "new_post_at": AFTER}, view()),
        ({"edited_post_at": AFTER}, view()),
    ],
)
def test_locked_thread_always_shows_lock(flags, current_view):
    locked = thread(locked=True, **flags)

    assert thread_state.icon(locked, current_view, HOT) == thread_state.ICON_LOCKED


def test_never_viewed_plain_thread_is_new():
    state = thread_state.classify(thread(), None, HOT)

    assert state.icon == thread_state.ICON_NEW
    assert state.css_class == thread_state.CLASS_NEW
    assert state.description == thread_state.DESC_NEW


def test_seen_plain_thread_has_no_new_posts():
    state = thread_state.classify(thread(), view(), HOT)

    assert state == thread_state.ThreadState(
        icon=thread_state.ICON_NO_NEW,
        css_class=thread_state.CLASS_DEFAULT,
        description=thread_state.DESC_NO_NEW,
    )


def test_flag_precedence_pinned_over_hot():
    pinned_hot = thread(pinned=True, posts=HOT * 2)

    assert thread_state.icon(pinned_hot, view(), HOT) == thread_state.ICON_PINNED
    assert thread_state.description(pinned_hot, view(), HOT) == thread_state.DESC_PINNED


def test_hot_threshold_is_inclusive():
    assert thread_state.icon(thread(posts=HOT), view(), HOT) == thread_state.ICON_HOT
    assert thread_state.icon(thread(posts=HOT - 1), view(), HOT) == thread_state.ICON_NO_NEW


def test_new_posts_since_last_seen():
    fresh = thread(new_post_at=AFTER)

    assert thread_state.icon(fresh, view(), HOT) == thread_state.ICON_NEW
    assert thread_state.css_class(fresh, view()) == thread_state.CLASS_NEW
    assert thread_state.description(fresh, view(), HOT) == "New Posts"


def test_flagged_thread_appends_new_posts_to_description():
    hot = thread(posts=HOT, new_post_at=AFTER)

    assert thread_state.icon(hot, view(), HOT) == thread_state.ICON_HOT
    assert thread_state.description(hot, view(), HOT) == "Hot Thread (New Posts)"
    assert thread_state.description(thread(pinned=True), None, HOT) == "Pinned Thread (New Posts)"


def test_edited_posts_since_last_seen():
    edited = thread(edited_post_at=AFTER)

    assert thread_state.icon(edited, view(), HOT) == thread_state.ICON_NEW
    assert thread_state.css_class(edited, view()) == thread_state.CLASS_EDITED
    assert thread_state.description(edited, view(), HOT) == "Edited Posts"


def test_flagged_edited_thread_keeps_flag_in_description():
    locked = thread(locked=True, edited_post_at=AFTER)

    assert thread_state.description(locked, view(), HOT) == "Locked Thread (Edited Posts)"
    assert thread_state.icon(locked, view(), HOT) == thread_state.ICON_LOCKED


def test_new_posts_win_over_edits():
    both = thread(new_post_at=AFTER, edited_post_at=AFTER)

    assert thread_state.css_class(both, view()) == thread_state.CLASS_NEW
    assert thread_state.description(both, view(), HOT) == "New Posts"


def test_class_ignores_flags():
    flagged = thread(locked=True, pinned=True, posts=HOT * 3)

    assert thread_state.css_class(flagged, view()) == thread_state.CLASS_DEFAULT
    assert thread_state.css_class(flagged, None) == thread_state.CLASS_NEW


def test_missing_activity_timestamps_are_not_unread():
    quiet = thread(new_post_at=None, edited_post_at=None)

    assert thread_state.unseen(quiet, view()) is None
