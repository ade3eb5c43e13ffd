"""Tests for optimistic concurrency on XP awards."""
from __future__ import annotations

import pytest
from sqlalchemy import update
from tenacity import wait_none

from academy.core.leveling import level_for
from academy.db.models import User
from academy.services.gamification import GamificationService
from academy.utils.exceptions import ConcurrencyConflictError


COMPETING_AWARD = 30


def competing_award(db_session, user_id, current_xp: int, current_version: int) -> None:
    """Commit another writer's award between our read and our write."""

    db_session.execute(
        update(User)
        .where(User.id == user_id)
        .values(
            xp=current_xp + COMPETING_AWARD,
            level=level_for(current_xp + COMPETING_AWARD),
            xp_version=current_version + 1,
        )
    )
    db_session.commit()


def test_conflicting_write_is_retried_without_losing_updates(
    db_session, student, monkeypatch
) -> None:
    service = GamificationService(db_session, retry_wait=wait_none())
    original_load = service._load_progress_row
    calls: list[int] = []

    def load_then_interfere(user_id):
        row = original_load(user_id)
        calls.append(row.xp_version)
        if len(calls) == 1:
            competing_award(db_session, user_id, row.xp, row.xp_version)
        return row

    monkeypatch.setattr(service, "_load_progress_row", load_then_interfere)

    record = service.award_xp(student.id, 150)

    assert calls[:2] == [0, 1]
    assert record.xp == 150 + COMPETING_AWARD
    assert record.level == 2
    db_session.refresh(student)
    assert (student.xp, student.level, student.xp_version) == (180, 2, 2)


def test_conflicts_exhaust_retries(db_session, student, monkeypatch) -> None:
    service = GamificationService(db_session, max_attempts=3, retry_wait=wait_none())
    original_load = service._load_progress_row
    attempts: list[int] = []

    def always_interfere(user_id):
        row = original_load(user_id)
        attempts.append(row.xp_version)
        competing_award(db_session, user_id, row.xp, row.xp_version)
        return row

    monkeypatch.setattr(service, "_load_progress_row", always_interfere)

    with pytest.raises(ConcurrencyConflictError):
        service.award_xp(student.id, 150)

    assert len(attempts) == 3
    db_session.refresh(student)
    assert student.xp == 3 * COMPETING_AWARD
    assert student.xp_version == 3


def test_level_and_xp_stay_consistent_across_many_awards(db_session, student) -> None:
    service = GamificationService(db_session)
    total = 0
    for amount in (5, 95, 250, 49, 1, 600, 1234):
        total += amount
        record = service.award_xp(student.id, amount)
        assert record.xp == total
        assert record.level == level_for(total)

    db_session.refresh(student)
    assert student.level == level_for(student.xp)
