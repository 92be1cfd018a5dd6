"""End-to-end tests for the comment API."""

import json

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from board.interface.api.app import create_app
from tests.conftest import GIF_BYTES, PNG_BYTES
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by an all-mock container."""
    app_instance = create_app(container=build_test_container())
    with TestClient(app_instance) as test_client:
        yield test_client


def as_user(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


def post_comment(client, user_id="A", **data):
    response = client.post("/comments", data=data, headers=as_user(user_id))
    assert response.status_code == 201, response.text
    return response.json()["comment"]


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestCommentEndpoints:
    """End-to-end tests for comment API endpoints."""

    def test_create_requires_identity(self, client):
        response = client.post("/comments", data={"text": "anonymous"})

        assert response.status_code == 401

    def test_create_and_get(self, client):
        # Arrange
        created = post_comment(client, text="Hello")

        # Act
        response = client.get(f"/comments/{created['comment_id']}")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["comment"]["text"] == "Hello"
        assert body["comment"]["author_id"] == "A"
        assert body["replies"] == []

    def test_empty_comment_is_bad_request(self, client):
        response = client.post("/comments", data={"text": "  "}, headers=as_user("A"))

        assert response.status_code == 400

    def test_get_unknown_and_malformed_ids(self, client):
        missing = client.get("/comments/8d3c2a4e-0000-4000-8000-000000000000")

        assert missing.status_code == 404
        assert client.get("/comments/not-a-uuid").status_code == 400

    def test_image_upload(self, client):
        response = client.post(
            "/comments",
            data={"text": "look"},
            files={"images": ("photo.png", PNG_BYTES, "image/png")},
            headers=as_user("A"),
        )

        assert response.status_code == 201
        [attachment] = response.json()["comment"]["attachments"]
        assert attachment["kind"] == "image"
        assert attachment["content_type"] == "image/png"

    def test_mislabelled_image_is_rejected(self, client):
        response = client.post(
            "/comments",
            files={"images": ("photo.png", GIF_BYTES, "image/png")},
            headers=as_user("A"),
        )

        assert response.status_code == 400
        assert client.get("/comments").json()["total"] == 0

    def test_oversized_file_is_413(self, client):
        response = client.post(
            "/comments",
            data={"text": "notes"},
            files={"attachment": ("notes.txt", b"x" * (100 * 1024 + 1), "text/plain")},
            headers=as_user("A"),
        )

        assert response.status_code == 413

    def test_reply_and_list(self, client):
        root = post_comment(client, text="Question")
        response = client.post(
            f"/comments/{root['comment_id']}/replies",
            data={"text": "Answer"},
            headers=as_user("B"),
        )
        assert response.status_code == 201

        listing = client.get("/comments", params={"sort": "asc"}).json()

        assert listing["total"] == 2
        assert listing["comments"][0]["children"] == [
            response.json()["comment"]["comment_id"]
        ]

    def test_reply_to_missing_parent(self, client):
        response = client.post(
            "/comments/8d3c2a4e-0000-4000-8000-000000000000/replies",
            data={"text": "orphan"},
            headers=as_user("B"),
        )

        assert response.status_code == 404

    def test_update_by_author_and_by_stranger(self, client):
        comment = post_comment(client, text="draft")

        forbidden = client.patch(
            f"/comments/{comment['comment_id']}",
            data={"text": "vandalised"},
            headers=as_user("B"),
        )
        edited = client.patch(
            f"/comments/{comment['comment_id']}",
            data={"text": "final"},
            headers=as_user("A"),
        )

        assert forbidden.status_code == 403
        assert edited.status_code == 200
        assert edited.json()["comment"]["text"] == "final"
        assert edited.json()["comment"]["version"] == 2

    def test_update_removing_only_image_is_rejected(self, client):
        response = client.post(
            "/comments",
            files={"images": ("photo.png", PNG_BYTES, "image/png")},
            headers=as_user("A"),
        )
        comment = response.json()["comment"]
        [image] = comment["attachments"]

        rejected = client.patch(
            f"/comments/{comment['comment_id']}",
            data={
                "remove_attachments": json.dumps(
                    [{"url": image["url"], "kind": "image"}]
                )
            },
            headers=as_user("A"),
        )

        assert rejected.status_code == 400
        current = client.get(f"/comments/{comment['comment_id']}").json()
        assert len(current["comment"]["attachments"]) == 1

    def test_update_with_malformed_remove_list(self, client):
        comment = post_comment(client, text="x")

        response = client.patch(
            f"/comments/{comment['comment_id']}",
            data={"remove_attachments": "not json"},
            headers=as_user("A"),
        )

        assert response.status_code == 400

    def test_delete_cascades_and_search_forgets(self, client):
        # Arrange
        root = post_comment(client, "A", text="Hello")
        client.post(
            f"/comments/{root['comment_id']}/replies",
            data={"text": "Hi"},
            headers=as_user("B"),
        )
        assert client.get("/comments", params={"search": "hello"}).json()["total"] == 1

        # Act
        forbidden = client.delete(f"/comments/{root['comment_id']}", headers=as_user("B"))
        deleted = client.delete(f"/comments/{root['comment_id']}", headers=as_user("A"))

        # Assert
        assert forbidden.status_code == 403
        assert deleted.status_code == 200
        assert len(deleted.json()["deleted_ids"]) == 2
        assert client.get("/comments").json()["total"] == 0
        assert client.get("/comments", params={"search": "Hello"}).json()["comments"] == []

    def test_blank_search(self, client):
        post_comment(client, text="anything")

        response = client.get("/comments", params={"search": ""})

        assert response.status_code == 200
        assert response.json()["comments"] == []

    def test_user_comments(self, client):
        post_comment(client, "A", text="one")
        post_comment(client, "B", text="two")

        response = client.get("/users/A/comments")

        assert response.status_code == 200
        assert [c["text"] for c in response.json()["comments"]] == ["one"]


class TestCommentEvents:
    """End-to-end tests for the live event stream."""

    def test_stream_receives_events_after_subscribing(self, client):
        with client.websocket_connect("/ws/comments?channels=created,deleted") as ws:
            comment = post_comment(client, text="live")
            client.delete(f"/comments/{comment['comment_id']}", headers=as_user("A"))

            added = ws.receive_json()
            removed = ws.receive_json()

        assert added["event"] == "commentAdded"
        assert added["data"]["comment_id"] == comment["comment_id"]
        assert removed == {
            "event": "commentDeleted",
            "data": {"id": comment["comment_id"]},
        }

    def test_unknown_channel_is_refused(self, client):
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect("/ws/comments?channels=voted") as ws:
                ws.receive_json()
