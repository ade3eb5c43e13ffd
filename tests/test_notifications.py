"""Tests for in-app notifications."""
from __future__ import annotations

from fastapi.testclient import TestClient

from academy.services.gamification import BadgeAward, GamificationService
from academy.services.notifications import NotificationService


def test_notify_award_for_level_up_and_badges(db_session, student, seeded_badges) -> None:
    record = GamificationService(db_session).award_xp(student.id, 1000)

    created = NotificationService(db_session).notify_award(student.id, record, record.new_badges)

    assert [item.type for item in created] == ["level_up", "badge_earned"]
    assert created[0].title == "Niveau 4 atteint !"
    assert "Collecteur d'XP" in created[1].content


def test_no_notification_without_news(db_session, student) -> None:
    record = GamificationService(db_session).award_xp(student.id, 10)

    assert NotificationService(db_session).notify_award(student.id, record, []) == []


def test_notification_endpoints(client: TestClient, student_headers, student, db_session) -> None:
    service = NotificationService(db_session)
    award = BadgeAward(user_id=student.id, badge_id=1, badge_name="Premier Pas", earned_at=None)
    service.notify_award(student.id, None, [award, award])

    assert client.get("/api/v1/notifications/unread-count", headers=student_headers).json() == {"unread": 2}

    listed = client.get("/api/v1/notifications", headers=student_headers).json()
    assert len(listed) == 2
    first_id = listed[0]["id"]

    marked = client.post(f"/api/v1/notifications/{first_id}/read", headers=student_headers)
    assert marked.status_code == 200
    assert marked.json()["isRead"] is True

    unread = client.get(
        "/api/v1/notifications", params={"unreadOnly": True}, headers=student_headers
    ).json()
    assert first_id not in [item["id"] for item in unread]
    assert len(unread) == 1

    cleared = client.post("/api/v1/notifications/read-all", headers=student_headers)
    assert cleared.json() == {"unread": 0}


def test_cannot_read_someone_elses_notification(
    client: TestClient, student_headers, user_factory, db_session
) -> None:
    other = user_factory()
    award = BadgeAward(user_id=other.id, badge_id=1, badge_name="Premier Pas", earned_at=None)
    created = NotificationService(db_session).notify_award(other.id, None, [award])

    response = client.post(f"/api/v1/notifications/{created[0].id}/read", headers=student_headers)
    assert response.status_code == 404
