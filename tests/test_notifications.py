# tests for device-local notifications

import pytest

from hopeocd.services.notifications import (
    Notification,
    NotificationCenter,
    load_notifications,
    save_notifications,
    storage_key,
)
from tests.conftest import USER_ID


def _note(title="Daily Check-in"):
    return Notification(type="reminder", title=title, message="How are you feeling today?")


class TestNotificationCenter:
    def test_newest_first_and_capped(self):
        center = NotificationCenter(limit=3)
        for n in range(5):
            center.add(_note(f"note {n}"))
        assert [n.title for n in center.items] == ["note 4", "note 3", "note 2"]

    def test_unread_count(self):
        center = NotificationCenter()
        a = center.add(_note())
        center.add(_note())
        assert center.unread_count == 2
        assert center.mark_read(a.id) is True
        assert center.unread_count == 1

    def test_unknown_ids(self):
        center = NotificationCenter()
        assert center.mark_read("nope") is False
        assert center.remove("nope") is False

    def test_save_and_load(self, storage):
        key = storage_key("notifications", USER_ID)
        center = NotificationCenter()
        center.add(_note())
        save_notifications(storage, key, center)

        loaded = load_notifications(storage, key)
        assert [n.id for n in loaded.items] == [n.id for n in center.items]
        assert key == f"notifications-{USER_ID}"


class TestNotificationRoutes:
    async def test_add_list_read_delete(self, user_client):
        resp = await user_client.post("/notifications", json={
            "type": "encouragement",
            "title": "Nice work",
            "message": "Three check-ins in a row.",
            "actionUrl": "/?tab=progress",
        })
        assert resp.status_code == 201
        note = resp.json()
        assert note["read"] is False
        assert note["actionUrl"] == "/?tab=progress"

        listed = (await user_client.get("/notifications")).json()
        assert listed["unreadCount"] == 1

        resp = await user_client.post(f"/notifications/{note['id']}/read")
        assert resp.json()["unreadCount"] == 0

        resp = await user_client.delete(f"/notifications/{note['id']}")
        assert resp.status_code == 204
        assert (await user_client.get("/notifications")).json()["notifications"] == []

    async def test_bad_type(self, user_client):
        resp = await user_client.post("/notifications", json={"type": "spam", "title": "x", "message": "y"})
        assert resp.status_code == 422

    async def test_unknown_notification(self, user_client):
        resp = await user_client.post("/notifications/nope/read")
        assert resp.status_code == 404
