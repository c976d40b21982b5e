"""
Tests for application state transitions.
"""

from datetime import datetime, timedelta

from noticeboard.board import state as transitions
from noticeboard.board.types import FeedPost, Poll, PollOption, Submission, Viewer

NOW = datetime(2024, 3, 1, 12, 0)
ADMIN = Viewer(id="admin-1", full_name="Dr. Admin", is_admin=True)
STUDENT = Viewer(id="student-1", full_name="Sarah Johnson")


def make_posts():
    poll = Poll(
        question="Which day?",
        options=[PollOption(id="o1", text="Mon", votes=2), PollOption(id="o2", text="Tue", votes=1)],
        total_votes=3,
    )
    return [
        FeedPost(id="old", content="old", created_at=NOW - timedelta(hours=2), likes_count=3),
        FeedPost(id="poll", kind="poll", created_at=NOW, poll=poll),
    ]


def make_submissions():
    return [
        Submission(id="s1", category="other", content="a", urgency="low", created_at=NOW, updated_at=NOW),
        Submission(id="s2", category="safety", content="b", urgency="high", created_at=NOW, updated_at=NOW),
    ]


def test_initial_state_is_anonymous_feed():
    state = transitions.initial_state()
    assert state.viewer.is_anonymous
    assert state.active_tab == "feed"
    assert state.posts == []


def test_admin_tab_hidden_from_non_admins():
    assert transitions.available_tabs(STUDENT) == ["feed", "anonymous"]
    assert transitions.available_tabs(ADMIN) == ["feed", "anonymous", "admin"]

    student_state = transitions.initial_state(STUDENT)
    assert transitions.select_tab(student_state, "admin") is student_state
    assert transitions.select_tab(student_state, "anonymous").active_tab == "anonymous"
    assert transitions.select_tab(transitions.initial_state(ADMIN), "admin").active_tab == "admin"


def test_posts_loaded_sorts_newest_first():
    state = transitions.posts_loaded(transitions.initial_state(STUDENT), make_posts())
    assert [post.id for post in state.posts] == ["poll", "old"]


def test_submissions_only_loaded_for_admin():
    student_state = transitions.submissions_loaded(transitions.initial_state(STUDENT), make_submissions())
    assert student_state.submissions == []

    admin_state = transitions.submissions_loaded(transitions.initial_state(ADMIN), make_submissions())
    assert [s.id for s in admin_state.submissions] == ["s2", "s1"]


def test_vote_cast_once():
    state = transitions.posts_loaded(transitions.initial_state(STUDENT), make_posts())

    voted = transitions.vote_cast(state, "poll", "o2")
    poll = transitions.find_post(voted, "poll").poll
    assert poll.user_vote == "o2"
    assert poll.total_votes == 4

    assert transitions.vote_cast(voted, "poll", "o1") is voted
    assert transitions.vote_cast(voted, "missing", "o1") is voted
    assert transitions.find_post(state, "poll").poll.user_vote is None


def test_like_transitions():
    state = transitions.posts_loaded(transitions.initial_state(STUDENT), make_posts())

    liked = transitions.like_toggled(state, "old")
    assert transitions.find_post(liked, "old").pending_like is True

    unliked = transitions.like_set(liked, "old", False)
    assert transitions.find_post(unliked, "old").pending_like is None


def test_status_changed_requires_admin():
    admin_state = transitions.submissions_loaded(transitions.initial_state(ADMIN), make_submissions())
    updated = transitions.status_changed(admin_state, "s1", "resolved", now=NOW + timedelta(minutes=1))
    assert transitions.find_submission(updated, "s1").status == "resolved"
    assert transitions.find_submission(updated, "s1").updated_at == NOW + timedelta(minutes=1)

    student_state = admin_state.model_copy(update={"viewer": STUDENT})
    assert transitions.status_changed(student_state, "s1", "resolved") is student_state


def test_notices_and_sign_out():
    state = transitions.notify(transitions.initial_state(ADMIN), "Vote Recorded", "Thanks!", level="success")
    state = transitions.notify(state, "Oops", level="error")
    assert [notice.title for notice in state.notices] == ["Vote Recorded", "Oops"]

    state = transitions.dismiss_notice(state, 0)
    assert [notice.title for notice in state.notices] == ["Oops"]

    signed_out = transitions.signed_out(state)
    assert signed_out.viewer.is_anonymous
    assert signed_out.notices == []


def test_vote_cast_prefers_confirmed_post():
    state = transitions.posts_loaded(transitions.initial_state(STUDENT), make_posts())
    local = transitions.find_post(state, "poll")
    confirmed = local.model_copy(update={"poll": local.poll.model_copy(update={
        "options": [PollOption(id="o1", text="Mon", votes=4), PollOption(id="o2", text="Tue", votes=6)],
        "total_votes": 10,
        "user_vote": "o2",
    })})

    voted = transitions.vote_cast(state, "poll", "o2", confirmed=confirmed)

    assert transitions.find_post(voted, "poll") == confirmed


def test_status_changed_prefers_confirmed_submission():
    admin_state = transitions.submissions_loaded(transitions.initial_state(ADMIN), make_submissions())
    confirmed = transitions.find_submission(admin_state, "s1").model_copy(
        update={"status": "reviewed", "updated_at": NOW + timedelta(days=1)}
    )

    updated = transitions.status_changed(admin_state, "s1", "reviewed", confirmed=confirmed)

    assert transitions.find_submission(updated, "s1") == confirmed
    student_state = admin_state.model_copy(update={"viewer": STUDENT})
    assert transitions.status_changed(student_state, "s1", "reviewed", confirmed=confirmed) is student_state
