"""Pydantic schemas for modules, quizzes and other XP-earning activities."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import Field

from academy.schemas.gamification import BadgeAwardRead, CamelModel, ProgressRecordRead


class ModuleCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    content: Optional[str] = None
    video_url: Optional[str] = Field(default=None, max_length=500)
    order: int = 0
    xp_reward: int = Field(default=100, ge=0)
    platform: Optional[str] = Field(default=None, max_length=50)
    is_published: bool = False


class ModuleRead(ModuleCreate):
    id: int


class QuizCreate(CamelModel):
    module_id: int
    title: str = Field(min_length=1, max_length=255)
    questions: List[Any] = Field(default_factory=list)
    xp_reward: int = Field(default=50, ge=0)
    passing_score: int = Field(default=70, ge=0, le=100)


class QuizRead(QuizCreate):
    id: int


class ModuleProgressUpdate(CamelModel):
    module_id: int
    status: Literal["not_started", "in_progress", "completed"]
    progress: int = Field(default=0, ge=0, le=100)


class ModuleProgressRead(CamelModel):
    id: int
    module_id: int
    status: str
    progress: int
    completed_at: Optional[datetime] = None


class QuizAttemptCreate(CamelModel):
    quiz_id: int
    score: int = Field(ge=0, le=100, description="Percentage of correct answers")
    answers: List[Any] = Field(default_factory=list)


class QuizAttemptRead(CamelModel):
    id: int
    quiz_id: int
    score: int
    passed: bool
    completed_at: Optional[datetime] = None


class SimulationUsageRead(CamelModel):
    id: int
    simulation_type: str
    used_at: Optional[datetime] = None


class DailyChallengeRead(CamelModel):
    id: int
    challenge_date: date
    completed_at: Optional[datetime] = None


class _ActivityResponse(CamelModel):
    award: Optional[ProgressRecordRead] = None
    new_badges: List[BadgeAwardRead] = Field(default_factory=list)


class ModuleProgressResponse(_ActivityResponse):
    progress: ModuleProgressRead


class QuizAttemptResponse(_ActivityResponse):
    attempt: QuizAttemptRead


class SimulationUseResponse(_ActivityResponse):
    usage: SimulationUsageRead


class DailyChallengeResponse(_ActivityResponse):
    completion: DailyChallengeRead


class PlatformStats(CamelModel):
    total_students: int
    total_modules: int
    total_quizzes: int
    average_progress: int


class NotificationRead(CamelModel):
    id: int
    user_id: uuid.UUID
    type: str
    title: str
    content: str
    is_read: bool
    created_at: Optional[datetime] = None


class UnreadCountResponse(CamelModel):
    unread: int
