"""Database models package."""
from academy.db.models.user import User
from academy.db.models.content import Module, Quiz
from academy.db.models.progress import (
    DailyChallengeCompletion,
    ModuleProgress,
    QuizAttempt,
    SimulationUsage,
)
from academy.db.models.badge import Badge, UserBadge
from academy.db.models.notification import Notification

__all__ = [
    "User",
    "Module",
    "Quiz",
    "ModuleProgress",
    "QuizAttempt",
    "SimulationUsage",
    "DailyChallengeCompletion",
    "Badge",
    "UserBadge",
    "Notification",
]
