"""
Tests for the posts, poll and like endpoints.
"""

from noticeboard.core.config import settings
from tests.conftest import viewer_headers


def create_poll(client, author, question="Which day works best?", options=("Monday", "Wednesday", "Friday")):
    response = client.post(
        "/api/posts/",
        json={"kind": "poll", "poll_question": question},
        headers=viewer_headers(author),
    )
    assert response.status_code == 200, response.text
    post_id = response.json()["id"]

    response = client.post(
        f"/api/posts/{post_id}/options",
        json={"options": list(options)},
        headers=viewer_headers(author),
    )
    assert response.status_code == 200, response.text
    return post_id, response.json()


def test_create_query_and_list(client, make_profile):
    author = make_profile("Sarah Johnson")

    response = client.post(
        "/api/posts/",
        json={"kind": "query", "content": "  Is the gym open on Sunday?  "},
        headers=viewer_headers(author),
    )

    assert response.status_code == 200
    created = response.json()
    assert created["kind"] == "query"
    assert created["created_at"].endswith("Z")

    posts = client.get("/api/posts/").json()
    assert len(posts) == 1
    assert posts[0]["content"] == "Is the gym open on Sunday?"
    assert posts[0]["author_name"] == "Sarah Johnson"
    assert posts[0]["poll"] is None
    assert posts[0]["user_liked"] is False


def test_create_post_requires_viewer(client):
    response = client.post("/api/posts/", json={"kind": "query", "content": "hi"})
    assert response.status_code == 401

    response = client.post(
        "/api/posts/", json={"kind": "query", "content": "hi"}, headers={"X-Viewer-Id": "nobody"}
    )
    assert response.status_code == 401


def test_empty_query_rejected(client, make_profile):
    author = make_profile()
    response = client.post(
        "/api/posts/", json={"kind": "query", "content": "   "}, headers=viewer_headers(author)
    )
    assert response.status_code == 400


def test_poll_without_question_rejected(client, make_profile):
    author = make_profile()
    response = client.post("/api/posts/", json={"kind": "poll"}, headers=viewer_headers(author))
    assert response.status_code == 400


def test_poll_options_in_order(client, make_profile):
    author = make_profile("Prof. Michael Chen")
    post_id, options = create_poll(client, author)

    assert [option["text"] for option in options] == ["Monday", "Wednesday", "Friday"]

    post = client.get(f"/api/posts/{post_id}").json()
    assert post["kind"] == "poll"
    assert post["poll"]["question"] == "Which day works best?"
    assert [option["text"] for option in post["poll"]["options"]] == ["Monday", "Wednesday", "Friday"]
    assert post["poll"]["total_votes"] == 0
    assert post["poll"]["user_vote"] is None


def test_poll_options_are_fixed_and_bounded(client, make_profile):
    author = make_profile()
    other = make_profile("Alex Kumar")
    post_id, _ = create_poll(client, author)

    again = client.post(
        f"/api/posts/{post_id}/options", json={"options": ["X", "Y"]}, headers=viewer_headers(author)
    )
    assert again.status_code == 409

    response = client.post(
        "/api/posts/", json={"kind": "poll", "poll_question": "Q?"}, headers=viewer_headers(author)
    )
    fresh_id = response.json()["id"]

    too_few = client.post(
        f"/api/posts/{fresh_id}/options", json={"options": ["Only"]}, headers=viewer_headers(author)
    )
    assert too_few.status_code == 400
    too_many = client.post(
        f"/api/posts/{fresh_id}/options",
        json={"options": ["A", "B", "C", "D", "E"]},
        headers=viewer_headers(author),
    )
    assert too_many.status_code == 400
    blank = client.post(
        f"/api/posts/{fresh_id}/options", json={"options": ["A", "  "]}, headers=viewer_headers(author)
    )
    assert blank.status_code == 400
    not_author = client.post(
        f"/api/posts/{fresh_id}/options", json={"options": ["A", "B"]}, headers=viewer_headers(other)
    )
    assert not_author.status_code == 403


def test_vote_once_per_poll(client, make_profile, notifier):
    author = make_profile()
    voter = make_profile("Alex Kumar")
    post_id, options = create_poll(client, author)
    queue = notifier.subscribe()

    response = client.put(
        f"/api/posts/{post_id}/vote", json={"option_id": options[1]["id"]}, headers=viewer_headers(voter)
    )
    assert response.status_code == 200
    poll = response.json()["poll"]
    assert poll["user_vote"] == options[1]["id"]
    assert [option["votes"] for option in poll["options"]] == [0, 1, 0]
    assert poll["total_votes"] == 1
    assert queue.get_nowait() == {"type": "change", "table": "poll_votes", "event": "INSERT", "id": post_id}

    same = client.put(
        f"/api/posts/{post_id}/vote", json={"option_id": options[1]["id"]}, headers=viewer_headers(voter)
    )
    assert same.status_code == 200
    assert same.json()["poll"]["total_votes"] == 1
    assert queue.empty()

    switch = client.put(
        f"/api/posts/{post_id}/vote", json={"option_id": options[0]["id"]}, headers=viewer_headers(voter)
    )
    assert switch.status_code == 409

    # other viewers do not see this vote as theirs
    post = client.get(f"/api/posts/{post_id}", headers=viewer_headers(author)).json()
    assert post["poll"]["user_vote"] is None
    assert post["poll"]["total_votes"] == 1


def test_vote_revision_when_enabled(client, make_profile, monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_VOTE_REVISION", True)
    author = make_profile()
    voter = make_profile("Alex Kumar")
    post_id, options = create_poll(client, author)

    client.put(f"/api/posts/{post_id}/vote", json={"option_id": options[0]["id"]}, headers=viewer_headers(voter))
    response = client.put(
        f"/api/posts/{post_id}/vote", json={"option_id": options[2]["id"]}, headers=viewer_headers(voter)
    )

    assert response.status_code == 200
    poll = response.json()["poll"]
    assert poll["user_vote"] == options[2]["id"]
    assert [option["votes"] for option in poll["options"]] == [0, 0, 1]
    assert poll["total_votes"] == 1


def test_vote_unknown_option(client, make_profile):
    author = make_profile()
    post_id, _ = create_poll(client, author)
    response = client.put(
        f"/api/posts/{post_id}/vote", json={"option_id": "nope"}, headers=viewer_headers(author)
    )
    assert response.status_code == 400

    missing = client.put("/api/posts/missing/vote", json={"option_id": "x"}, headers=viewer_headers(author))
    assert missing.status_code == 404


def test_like_is_idempotent(client, make_profile, notifier):
    author = make_profile()
    fan = make_profile("Alex Kumar")
    post_id = client.post(
        "/api/posts/", json={"kind": "query", "content": "hello"}, headers=viewer_headers(author)
    ).json()["id"]
    queue = notifier.subscribe()

    first = client.post(f"/api/posts/{post_id}/like", headers=viewer_headers(fan))
    second = client.post(f"/api/posts/{post_id}/like", headers=viewer_headers(fan))

    assert first.json() == {"post_id": post_id, "liked": True, "likes_count": 1}
    assert second.json()["likes_count"] == 1
    assert queue.qsize() == 1

    listed = client.get("/api/posts/", headers=viewer_headers(fan)).json()
    assert listed[0]["user_liked"] is True
    assert client.get("/api/posts/", headers=viewer_headers(author)).json()[0]["user_liked"] is False

    unliked = client.delete(f"/api/posts/{post_id}/like", headers=viewer_headers(fan))
    assert unliked.json() == {"post_id": post_id, "liked": False, "likes_count": 0}

    again = client.delete(f"/api/posts/{post_id}/like", headers=viewer_headers(fan))
    assert again.json()["likes_count"] == 0


def test_list_newest_first(client, make_profile):
    author = make_profile()
    for text in ("first", "second", "third"):
        client.post("/api/posts/", json={"kind": "query", "content": text}, headers=viewer_headers(author))

    contents = [post["content"] for post in client.get("/api/posts/").json()]
    assert contents[0] == "third"
    assert sorted(contents) == ["first", "second", "third"]
