# tests/test_comments_api.py
import pytest


@pytest.fixture
def topic(create_topic):
    return create_topic()


def _comment(client, topic_id, content="Is this still available?", email="buyer@example.com"):
    res = client.post(
        "/api/comments",
        json={"content": content, "userEmail": email, "topicId": topic_id},
    )
    assert res.status_code == 201, res.text
    return res.json()


def test_create_and_list_newest_first(client, topic):
    first = _comment(client, topic["id"], "first")
    second = _comment(client, topic["id"], "second")

    assert second["topicId"] == topic["id"]
    assert second["userEmail"] == "buyer@example.com"

    res = client.get("/api/comments", params={"topicId": topic["id"]})
    assert res.status_code == 200
    assert [c["id"] for c in res.json()] == [second["id"], first["id"]]


def test_list_only_returns_comments_of_topic(client, create_topic):
    a = create_topic(title="a")
    b = create_topic(title="b")
    _comment(client, a["id"], "on a")
    _comment(client, b["id"], "on b")

    res = client.get("/api/comments", params={"topicId": a["id"]})
    assert [c["content"] for c in res.json()] == ["on a"]


def test_list_requires_topic_id(client):
    res = client.get("/api/comments")
    assert res.status_code == 400
    assert res.json()["message"] == "Topic ID is required"


@pytest.mark.parametrize("missing", ["content", "userEmail", "topicId"])
def test_create_requires_fields(client, topic, missing):
    body = {"content": "hi", "userEmail": "buyer@example.com", "topicId": topic["id"]}
    body.pop(missing)
    res = client.post("/api/comments", json=body)
    assert res.status_code == 400
    assert res.json()["message"] == "Missing required fields"


def test_create_rejects_blank_content(client, topic):
    res = client.post(
        "/api/comments",
        json={"content": "   ", "userEmail": "buyer@example.com", "topicId": topic["id"]},
    )
    assert res.status_code == 400


def test_create_for_unknown_topic_is_404(client):
    res = client.post(
        "/api/comments",
        json={"content": "hi", "userEmail": "buyer@example.com", "topicId": "c" * 32},
    )
    assert res.status_code == 404


def test_create_with_malformed_topic_id_is_400(client):
    res = client.post(
        "/api/comments",
        json={"content": "hi", "userEmail": "buyer@example.com", "topicId": "nope"},
    )
    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_ID"


def test_create_without_body_is_400(client):
    res = client.post("/api/comments")
    assert res.status_code == 400


def test_update_comment(client, topic):
    c = _comment(client, topic["id"], "typo")
    res = client.put(f"/api/comments/{c['id']}", json={"content": "fixed"})
    assert res.status_code == 200
    assert res.json()["content"] == "fixed"
    assert res.json()["id"] == c["id"]


def test_update_comment_rejects_blank(client, topic):
    c = _comment(client, topic["id"])
    res = client.put(f"/api/comments/{c['id']}", json={"content": ""})
    assert res.status_code == 400


def test_update_unknown_comment_is_404(client):
    res = client.put("/api/comments/" + "d" * 32, json={"content": "x"})
    assert res.status_code == 404


def test_delete_comment(client, topic):
    c = _comment(client, topic["id"])
    res = client.delete(f"/api/comments/{c['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Comment deleted"}
    assert client.get("/api/comments", params={"topicId": topic["id"]}).json() == []

    assert client.delete(f"/api/comments/{c['id']}").status_code == 404
