"""Level progression derived from accumulated experience points.

A learner at ``xp`` points sits at ``floor(sqrt(xp / 100)) + 1``. Level *n*
therefore begins at ``100 * (n - 1) ** 2`` XP: 0, 100, 400, 900, ...

The square root is taken with :func:`math.isqrt` on ``xp // 100``, which is
exactly ``floor(sqrt(xp / 100))`` for every non-negative integer and keeps
very large XP totals free of floating point error.
"""
from __future__ import annotations

import math

XP_PER_LEVEL_UNIT = 100

LEVEL_TITLES = {
    1: "Débutant",
    2: "Novice",
    3: "Intermédiaire",
}
TOP_LEVEL_TITLE = "Expert"


def _check_xp(xp: int) -> None:
    if xp < 0:
        raise ValueError(f"XP must be non-negative, got {xp}")


def level_for(xp: int) -> int:
    """Return the level reached with ``xp`` experience points."""

    _check_xp(xp)
    return math.isqrt(xp // XP_PER_LEVEL_UNIT) + 1


def xp_threshold(level: int) -> int:
    """Return the XP at which ``level`` begins."""

    if level < 1:
        raise ValueError(f"Level must be positive, got {level}")
    return XP_PER_LEVEL_UNIT * (level - 1) ** 2


def xp_to_next_level(xp: int) -> int:
    """Return how many XP are still missing to reach the next level."""

    return xp_threshold(level_for(xp) + 1) - xp


def level_progress(xp: int) -> int:
    """Return the percentage (0-100) travelled through the current level."""

    level = level_for(xp)
    floor_xp = xp_threshold(level)
    span = xp_threshold(level + 1) - floor_xp
    return (xp - floor_xp) * 100 // span


def level_title(level: int) -> str:
    return LEVEL_TITLES.get(level, TOP_LEVEL_TITLE)


__all__ = [
    "level_for",
    "level_progress",
    "level_title",
    "xp_threshold",
    "xp_to_next_level",
]
