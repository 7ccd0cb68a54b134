"""
Integration tests for /api/notification endpoints.
"""

from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from repositories.db_models import Notification


def _body(recipients, type_="message"):
    return {
        "recipients": recipients,
        "notification": {
            "title": "New message",
            "msg": "Hello there",
            "sender": "alice",
            "context_id": 3,
            "type": type_,
        },
    }


class TestNotificationsAPI:
    """Tests for notification endpoints."""

    def test_send_and_get(self, client, make_user):
        make_user("bob")

        response = client.post("/api/notification/send", json=_body(["bob"]))

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "New message"
        assert data["type"] == "message"
        assert data["date_time"] is not None

        fetched = client.get(f"/api/notification/{data['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["msg"] == "Hello there"

        flags = client.get("/api/user/bob/unread").json()
        assert flags == {
            "username": "bob",
            "community_notifs": False,
            "message_notifs": True,
        }

    def test_send_no_matching_recipient_500(self, client, db_session):
        response = client.post("/api/notification/send", json=_body(["ghost"]))

        assert response.status_code == 500
        assert response.json()["detail"] == "2: Update failed"
        assert db_session.query(Notification).count() == 0

    def test_send_save_failure_500(self, client, make_user):
        make_user("bob")

        with patch(
            "services.notification_service.NotificationRepository.flush",
            side_effect=OperationalError("INSERT", {}, Exception("disk full")),
        ):
            response = client.post("/api/notification/send", json=_body(["bob"]))

        assert response.status_code == 500
        assert response.json()["detail"] == "1: disk full"

    def test_send_requires_recipients(self, client):
        response = client.post("/api/notification/send", json=_body([]))

        assert response.status_code == 400

    def test_send_rejects_empty_message(self, client, make_user):
        make_user("bob")
        body = _body(["bob"])
        body["notification"]["msg"] = ""

        response = client.post("/api/notification/send", json=body)

        assert response.status_code == 400

    def test_get_missing_404(self, client):
        response = client.get("/api/notification/31337")

        assert response.status_code == 404
