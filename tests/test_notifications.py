# tests/test_notifications.py

"""
Tests for notification scoping, the live feed and the notification routes.
"""

import threading
import time

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect
from unittest.mock import patch

from core.change_feed import SIGNED_IN, SIGNED_OUT, ChangeFeed, EventBroker, change_feed
from core.errors import UpdateFailed
from repositories.notification_repo import NotificationRepository, NotificationScope
from services.notification_pipeline import NotificationFeed, publish_auth_state


ME = "test-user-id"


def note(nid, target_user_id=None, status="unread", target_property_id=None, title=None):
    return {
        "id": nid,
        "title": title or f"Notice {nid}",
        "message": "Rent is due",
        "type": "payment",
        "status": status,
        "target_user_id": target_user_id,
        "target_property_id": target_property_id,
    }


@pytest.fixture
def inbox(fake_db):
    fake_db.seed(
        "notifications",
        note("n1", target_user_id=ME),
        note("n2"),
        note("n3", target_user_id="someone-else"),
        note("n4", target_user_id=ME, status="read"),
        note("n5", target_user_id=ME, target_property_id="prop-2"),
        note("n6", target_property_id="prop-1"),
    )
    return fake_db


@pytest.fixture
def repo(inbox):
    return NotificationRepository(inbox)


def ids(rows):
    return [r["id"] for r in rows]


def status_of(db, nid):
    return next(r["status"] for r in db.rows("notifications") if r["id"] == nid)


# -----------------------------------------------------
# Scope
# -----------------------------------------------------
def test_user_scope_sees_own_and_broadcast(repo):
    rows = repo.list(NotificationScope.for_user(ME))
    assert ids(rows) == ["n6", "n5", "n4", "n2", "n1"]


def test_property_scope_narrows(repo):
    rows = repo.list(NotificationScope.for_user(ME, property_id="prop-1"))
    assert ids(rows) == ["n6", "n4", "n2", "n1"]


def test_backoffice_scope_sees_everything(repo):
    assert len(repo.list(NotificationScope.backoffice())) == 6


def test_scope_matches_rows():
    scope = NotificationScope.for_user(ME, property_id="prop-1")
    assert scope.matches({"target_user_id": ME, "target_property_id": "prop-1"})
    assert scope.matches({"target_user_id": None, "target_property_id": None})
    assert not scope.matches({"target_user_id": "other", "target_property_id": None})
    assert not scope.matches({"target_user_id": ME, "target_property_id": "prop-2"})
    assert NotificationScope.backoffice().matches({"target_user_id": "other"})


# -----------------------------------------------------
# Writes
# -----------------------------------------------------
def test_create_stamps_unread(repo):
    row = repo.create({"title": "Hello", "message": "Welcome", "type": "system", "status": "read"})
    assert row["status"] == "unread"


def test_mark_read(repo, inbox):
    repo.mark_read("n1")
    assert status_of(inbox, "n1") == "read"


def test_mark_all_read_only_touches_visible_unread(repo, inbox):
    updated = repo.mark_all_read(NotificationScope.for_user(ME))

    assert updated == 4
    for nid in ("n1", "n2", "n4", "n5", "n6"):
        assert status_of(inbox, nid) == "read"
    # targeted at another user: untouched
    assert status_of(inbox, "n3") == "unread"


def test_mark_all_read_failure(repo, inbox):
    inbox.fail("notifications", "update", "permission denied for table notifications")
    with pytest.raises(UpdateFailed) as exc:
        repo.mark_all_read(NotificationScope.for_user(ME))
    assert "permission denied" in exc.value.message


# -----------------------------------------------------
# Live feed
# -----------------------------------------------------
@pytest.fixture
def feed(repo):
    updates = []
    f = NotificationFeed(repo, NotificationScope.for_user(ME), on_update=updates.append)
    f.updates = updates
    f.start()
    yield f
    f.stop()


def test_feed_loads_on_start(feed):
    assert feed.reload_count == 1
    assert ids(feed.items) == ["n6", "n5", "n4", "n2", "n1"]
    assert feed.unread_count == 4
    assert feed.updates[-1] == feed.items


def test_feed_reloads_on_matching_insert(feed, repo):
    repo.create({"title": "New", "message": "Hi", "target_user_id": ME})

    assert feed.reload_count == 2
    assert feed.items[0]["title"] == "New"
    assert feed.unread_count == 5


def test_feed_ignores_other_users_notifications(feed, repo):
    repo.create({"title": "Not yours", "message": "Hi", "target_user_id": "someone-else"})
    assert feed.reload_count == 1


def test_feed_reloads_on_delete(feed):
    feed.delete("n1")
    assert feed.reload_count == 2
    assert "n1" not in ids(feed.items)


def test_feed_mark_all_read_reloads_per_row(feed):
    assert feed.mark_all_read() == 4
    assert feed.unread_count == 0
    assert feed.reload_count == 1 + 4


def test_feed_keeps_last_list_when_reload_fails(feed, inbox):
    before = list(feed.items)
    inbox.fail("notifications", "select")

    change_feed.publish_row("notifications", "INSERT", note("n9"))

    assert feed.items == before
    assert feed.reload_count == 1


def test_sign_out_clears_and_sign_in_reloads(feed, repo):
    publish_auth_state(SIGNED_OUT, ME)
    assert feed.items == []
    assert feed.updates[-1] == []

    # changes while signed out do not repopulate
    repo.create({"title": "Later", "message": "Hi"})
    assert feed.items == []

    publish_auth_state(SIGNED_IN, ME)
    assert len(feed.items) == 6


class SlowRepo:
    """Notification repo whose list() can be held mid-query."""

    def __init__(self):
        self.hold = False
        self.entered = threading.Event()
        self.release = threading.Event()

    def list(self, scope):
        if self.hold:
            self.entered.set()
            self.release.wait(2)
        return [note("n1", target_user_id=ME)]


def test_sign_out_during_reload_leaves_feed_cleared():
    repo = SlowRepo()
    changes, auth = ChangeFeed(), EventBroker("auth")
    updates = []
    f = NotificationFeed(repo, NotificationScope.for_user(ME), on_update=updates.append, feed=changes, auth_feed=auth)
    f.start()
    repo.hold = True

    reloading = threading.Thread(target=changes.publish_row, args=("notifications", "INSERT", note("n9", target_user_id=ME)))
    reloading.start()
    assert repo.entered.wait(2)

    signing_out = threading.Thread(target=publish_auth_state, args=(SIGNED_OUT, ME, auth))
    signing_out.start()
    time.sleep(0.05)
    repo.release.set()
    reloading.join(2)
    signing_out.join(2)

    assert f.signed_in is False
    assert f.items == []
    assert updates[-1] == []
    f.stop()


def test_other_users_sign_out_is_ignored(feed):
    publish_auth_state(SIGNED_OUT, "someone-else")
    assert len(feed.items) == 5


def test_stop_cancels_subscriptions(repo):
    f = NotificationFeed(repo, NotificationScope.for_user(ME)).start()
    count = change_feed.subscriber_count()

    f.stop()

    assert change_feed.subscriber_count() == count - 1
    repo.create({"title": "Quiet", "message": "Hi"})
    assert f.reload_count == 1


# -----------------------------------------------------
# Routes
# -----------------------------------------------------
def test_list_route(client: TestClient, as_user, inbox):
    response = client.get("/notifications")

    assert response.status_code == 200
    body = response.json()
    assert body["unread_count"] == 4
    assert [n["id"] for n in body["data"]] == ["n6", "n5", "n4", "n2", "n1"]


def test_read_all_route(client: TestClient, as_user, inbox):
    response = client.post("/notifications/read-all")

    assert response.status_code == 200
    assert response.json() == {"success": True, "updated": 4}
    assert status_of(inbox, "n3") == "unread"


def test_mark_read_route(client: TestClient, as_user, inbox):
    response = client.patch("/notifications/n1/read")

    assert response.status_code == 200
    assert response.json()["status"] == "read"


def test_mark_read_route_not_found(client: TestClient, as_user, inbox):
    response = client.patch("/notifications/missing/read")

    assert response.status_code == 404
    assert response.json() == {"detail": "Notification not found"}


def test_delete_route(client: TestClient, as_user, inbox):
    response = client.delete("/notifications/n2")

    assert response.status_code == 200
    assert "n2" not in [r["id"] for r in inbox.rows("notifications")]


def test_websocket_streams_and_clears_on_sign_out(client: TestClient, inbox):
    inbox.add_identity(ME, "test@example.com", token="ws-token")

    with patch("routers.notifications.get_user_client", return_value=inbox):
        with client.websocket_connect("/notifications/ws?token=ws-token") as ws:
            first = ws.receive_json()
            assert first["unread_count"] == 4

            NotificationRepository(inbox).create({"title": "Live", "message": "Hi", "target_user_id": ME})
            second = ws.receive_json()
            assert second["unread_count"] == 5
            assert second["data"][0]["title"] == "Live"

            ws.send_json({"event": "SIGNED_OUT"})
            cleared = ws.receive_json()
            assert cleared == {"unread_count": 0, "data": []}


def test_websocket_ignores_non_json_frames(client: TestClient, inbox):
    inbox.add_identity(ME, "test@example.com", token="ws-token")

    with patch("routers.notifications.get_user_client", return_value=inbox):
        with client.websocket_connect("/notifications/ws?token=ws-token") as ws:
            assert ws.receive_json()["unread_count"] == 4

            ws.send_text("hello?")
            ws.send_json({"event": "SIGNED_OUT"})

            assert ws.receive_json() == {"unread_count": 0, "data": []}


def test_websocket_rejects_bad_token(client: TestClient, inbox):
    with patch("routers.notifications.get_user_client", return_value=inbox):
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect("/notifications/ws?token=bogus") as ws:
                ws.receive_json()
