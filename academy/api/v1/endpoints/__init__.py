"""API endpoint modules for v1."""

from academy.api.v1.endpoints import (
    admin,
    auth,
    badges,
    challenges,
    leaderboard,
    modules,
    notifications,
    progress,
    quiz_attempts,
    simulations,
    users,
)

__all__ = [
    "admin",
    "auth",
    "badges",
    "challenges",
    "leaderboard",
    "modules",
    "notifications",
    "progress",
    "quiz_attempts",
    "simulations",
    "users",
]
