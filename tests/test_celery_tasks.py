"""Tests for Celery badge tasks."""
from __future__ import annotations

import uuid
from unittest.mock import patch

import pytest
from sqlalchemy.orm import sessionmaker

from academy.db.models import Badge, ModuleProgress, UserBadge
from academy.tasks.badges import evaluate_all_badges, evaluate_user_badges
from academy.utils.exceptions import NotFoundError


@pytest.fixture()
def task_session_factory(db_session):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=db_session.bind)
    sessions: list = []

    def create_session():
        session = factory()
        sessions.append(session)
        return session

    try:
        yield create_session
    finally:
        for session in sessions:
            session.close()


@pytest.fixture()
def finished_module(db_session, student, catalog):
    db_session.add(
        ModuleProgress(user_id=student.id, module_id=catalog["twitch"].id, status="completed", progress=100)
    )
    db_session.commit()


def test_evaluate_user_badges(db_session, task_session_factory, student, seeded_badges, finished_module):
    with patch("academy.tasks.badges.SessionLocal", side_effect=task_session_factory):
        result = evaluate_user_badges.run(str(student.id))

    assert result == {
        "user_id": str(student.id),
        "newly_awarded": 1,
        "badge_names": ["Premier Pas"],
    }
    assert db_session.query(UserBadge).filter(UserBadge.user_id == student.id).count() == 1


def test_evaluate_user_badges_rejects_bad_ids(task_session_factory):
    with patch("academy.tasks.badges.SessionLocal", side_effect=task_session_factory):
        with pytest.raises(ValueError):
            evaluate_user_badges.run("not-a-uuid")
        with pytest.raises(NotFoundError):
            evaluate_user_badges.run(str(uuid.uuid4()))


def test_evaluate_all_badges_sweeps_active_users(
    db_session, task_session_factory, student, user_factory, seeded_badges, finished_module
):
    user_factory(xp=1000, level=4)
    user_factory(xp=5000, level=8, is_active=False)

    with patch("academy.tasks.badges.SessionLocal", side_effect=task_session_factory):
        result = evaluate_all_badges.run()

    assert result == {"users_checked": 2, "total_awarded": 2, "failures": 0}

    with patch("academy.tasks.badges.SessionLocal", side_effect=task_session_factory):
        again = evaluate_all_badges.run()

    assert again["total_awarded"] == 0


def test_sweep_survives_malformed_badges(
    db_session, task_session_factory, student, finished_module, seeded_badges
):
    db_session.add(Badge(name="Inconnu", icon="x", color="#fff", criteria={"type": "mystery"}))
    db_session.commit()

    with patch("academy.tasks.badges.SessionLocal", side_effect=task_session_factory):
        result = evaluate_all_badges.run()

    assert result["failures"] == 0
    assert result["total_awarded"] == 1
