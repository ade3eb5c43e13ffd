"""Tests for badge criteria parsing and evaluation."""
from __future__ import annotations

import pytest

from academy.core.badge_criteria import (
    LevelReached,
    ModulesCompleted,
    PerfectScore,
    QuizzesPassed,
    UserStats,
    XpAccumulated,
    criteria_progress,
    dump_criteria,
    is_satisfied,
    parse_criteria,
)
from academy.utils.exceptions import ValidationError


STATS = UserStats(total_xp=450, level=3, completed_modules=2, passed_quizzes=4, perfect_scores=1)


@pytest.mark.parametrize(
    ("raw", "expected_type"),
    [
        ({"type": "modules_completed", "count": 1}, ModulesCompleted),
        ({"type": "quizzes_passed", "count": 10}, QuizzesPassed),
        ({"type": "perfect_score", "count": 1}, PerfectScore),
        ({"type": "level_reached", "level": 5}, LevelReached),
        ({"type": "xp_accumulated", "amount": 1000}, XpAccumulated),
    ],
)
def test_parse_known_variants(raw: dict, expected_type: type) -> None:
    criteria = parse_criteria(raw)
    assert isinstance(criteria, expected_type)
    assert dump_criteria(criteria) == raw


@pytest.mark.parametrize(
    "raw",
    [
        {"type": "streak_days", "count": 3},
        {"type": "modules_completed"},
        {"type": "modules_completed", "count": 0},
        {"type": "level_reached", "level": 2, "count": 1},
        {"count": 1},
        "modules_completed",
        None,
    ],
)
def test_malformed_criteria_raise_validation_error(raw) -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_criteria(raw)
    assert exc_info.value.message == "Invalid badge criteria"


def test_parsed_instance_is_returned_unchanged() -> None:
    criteria = ModulesCompleted(count=3)
    assert parse_criteria(criteria) is criteria


@pytest.mark.parametrize(
    ("criteria", "satisfied"),
    [
        (ModulesCompleted(count=2), True),
        (ModulesCompleted(count=3), False),
        (QuizzesPassed(count=4), True),
        (QuizzesPassed(count=10), False),
        (PerfectScore(count=1), True),
        (PerfectScore(count=2), False),
        (LevelReached(level=3), True),
        (LevelReached(level=5), False),
        (XpAccumulated(amount=450), True),
        (XpAccumulated(amount=1000), False),
    ],
)
def test_is_satisfied(criteria, satisfied: bool) -> None:
    assert is_satisfied(criteria, STATS) is satisfied


def test_criteria_progress_reports_current_and_target() -> None:
    assert criteria_progress(QuizzesPassed(count=10), STATS) == (4, 10)
    assert criteria_progress(XpAccumulated(amount=1000), STATS) == (450, 1000)
    assert criteria_progress(LevelReached(level=5), STATS) == (3, 5)
