"""Pydantic schemas package."""

from academy.schemas.activity import (
    DailyChallengeRead,
    DailyChallengeResponse,
    ModuleCreate,
    ModuleProgressRead,
    ModuleProgressResponse,
    ModuleProgressUpdate,
    ModuleRead,
    NotificationRead,
    PlatformStats,
    QuizAttemptCreate,
    QuizAttemptRead,
    QuizAttemptResponse,
    QuizCreate,
    QuizRead,
    SimulationUsageRead,
    SimulationUseResponse,
    UnreadCountResponse,
)
from academy.schemas.auth import Token, TokenPayload
from academy.schemas.gamification import (
    AwardXpRequest,
    BadgeAwardRead,
    BadgeCheckResponse,
    BadgeCreate,
    BadgeProgressRead,
    BadgeRead,
    LeaderboardEntryRead,
    ProgressRecordRead,
    UserSummaryResponse,
)
from academy.schemas.user import UserBase, UserCreate, UserLogin, UserRead, UserUpdate

__all__ = [
    "AwardXpRequest",
    "BadgeAwardRead",
    "BadgeCheckResponse",
    "BadgeCreate",
    "BadgeProgressRead",
    "BadgeRead",
    "DailyChallengeRead",
    "DailyChallengeResponse",
    "LeaderboardEntryRead",
    "ModuleCreate",
    "ModuleProgressRead",
    "ModuleProgressResponse",
    "ModuleProgressUpdate",
    "ModuleRead",
    "NotificationRead",
    "PlatformStats",
    "ProgressRecordRead",
    "QuizAttemptCreate",
    "QuizAttemptRead",
    "QuizAttemptResponse",
    "QuizCreate",
    "QuizRead",
    "SimulationUsageRead",
    "SimulationUseResponse",
    "Token",
    "TokenPayload",
    "UnreadCountResponse",
    "UserBase",
    "UserCreate",
    "UserLogin",
    "UserRead",
    "UserSummaryResponse",
    "UserUpdate",
]
