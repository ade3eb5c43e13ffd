"""Badge award criteria as a small tagged predicate language.

Each badge stores exactly one criterion as JSON, e.g.
``{"type": "modules_completed", "count": 1}``. Criteria are parsed into
typed variants at the persistence boundary and evaluated against a
:class:`UserStats` snapshot.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from academy.utils.exceptions import ValidationError


class _Criterion(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ModulesCompleted(_Criterion):
    type: Literal["modules_completed"] = "modules_completed"
    count: int = Field(ge=1)


class QuizzesPassed(_Criterion):
    type: Literal["quizzes_passed"] = "quizzes_passed"
    count: int = Field(ge=1)


class PerfectScore(_Criterion):
    type: Literal["perfect_score"] = "perfect_score"
    count: int = Field(ge=1)


class LevelReached(_Criterion):
    type: Literal["level_reached"] = "level_reached"
    level: int = Field(ge=1)


class XpAccumulated(_Criterion):
    type: Literal["xp_accumulated"] = "xp_accumulated"
    amount: int = Field(ge=0)


BadgeCriteria = Annotated[
    Union[ModulesCompleted, QuizzesPassed, PerfectScore, LevelReached, XpAccumulated],
    Field(discriminator="type"),
]

_criteria_adapter: TypeAdapter[BadgeCriteria] = TypeAdapter(BadgeCriteria)


@dataclass(frozen=True, slots=True)
class UserStats:
    """Aggregate statistics a badge criterion can look at."""

    total_xp: int
    level: int
    completed_modules: int
    passed_quizzes: int
    perfect_scores: int


def parse_criteria(raw: Any) -> BadgeCriteria:
    """Validate stored JSON into a criterion, raising ``ValidationError``."""

    if isinstance(raw, _Criterion):
        return raw
    try:
        return _criteria_adapter.validate_python(raw)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid badge criteria",
            details={"criteria": raw, "errors": exc.errors(include_url=False)},
        ) from exc


def criteria_progress(criteria: BadgeCriteria, stats: UserStats) -> tuple[int, int]:
    """Return ``(current, target)`` for ``criteria`` given ``stats``."""

    if isinstance(criteria, ModulesCompleted):
        return stats.completed_modules, criteria.count
    if isinstance(criteria, QuizzesPassed):
        return stats.passed_quizzes, criteria.count
    if isinstance(criteria, PerfectScore):
        return stats.perfect_scores, criteria.count
    if isinstance(criteria, LevelReached):
        return stats.level, criteria.level
    if isinstance(criteria, XpAccumulated):
        return stats.total_xp, criteria.amount
    raise ValidationError(f"Unsupported badge criteria: {criteria!r}")


def is_satisfied(criteria: BadgeCriteria, stats: UserStats) -> bool:
    current, target = criteria_progress(criteria, stats)
    return current >= target


def dump_criteria(criteria: BadgeCriteria) -> dict[str, Any]:
    return criteria.model_dump()


__all__ = [
    "BadgeCriteria",
    "LevelReached",
    "ModulesCompleted",
    "PerfectScore",
    "QuizzesPassed",
    "UserStats",
    "XpAccumulated",
    "criteria_progress",
    "dump_criteria",
    "is_satisfied",
    "parse_criteria",
]
