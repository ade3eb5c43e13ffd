"""Pydantic schemas for XP, levels, badges and leaderboards.

Response keys are camelCase to match the web client; snake_case input is
accepted as well.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from academy.core.badge_criteria import BadgeCriteria
from academy.core.leveling import xp_to_next_level


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class BadgeAwardRead(CamelModel):
    badge_id: int
    badge_name: str
    earned_at: datetime


class ProgressRecordRead(CamelModel):
    """XP and level after an award, plus whatever it unlocked."""

    user_id: uuid.UUID
    xp: int
    level: int
    previous_level: Optional[int] = None
    leveled_up: bool = False
    xp_to_next_level: int
    new_badges: List[BadgeAwardRead] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: Any) -> "ProgressRecordRead":
        return cls(
            user_id=record.user_id,
            xp=record.xp,
            level=record.level,
            previous_level=record.previous_level,
            leveled_up=record.leveled_up,
            xp_to_next_level=xp_to_next_level(record.xp),
            new_badges=[BadgeAwardRead.model_validate(award) for award in record.new_badges],
        )


class AwardXpRequest(CamelModel):
    amount: int = Field(ge=0, description="XP to add; XP never decreases")


class UserSummaryResponse(CamelModel):
    completed_modules: int
    in_progress_modules: int
    passed_quizzes: int
    perfect_scores: int
    average_score: int
    total_badges: int
    xp: int
    level: int
    level_title: str
    level_progress: int
    xp_to_next_level: int


class BadgeCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    icon: str = Field(default="award", max_length=50)
    color: str = Field(default="#3b82f6", max_length=20)
    criteria: BadgeCriteria
    xp_reward: int = Field(default=25, ge=0)


class BadgeRead(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: str
    color: str
    criteria: Dict[str, Any]
    xp_reward: int


class BadgeProgressRead(CamelModel):
    badge: BadgeRead
    current_progress: int
    target_progress: int
    earned: bool
    earned_at: Optional[datetime] = None


class BadgeCheckResponse(CamelModel):
    new_badges: List[BadgeAwardRead] = Field(default_factory=list)
    total_unlocked: int


class LeaderboardEntryRead(CamelModel):
    rank: int
    user_id: uuid.UUID
    display_name: str
    xp: int
    level: int


__all__ = [
    "AwardXpRequest",
    "BadgeAwardRead",
    "BadgeCheckResponse",
    "BadgeCreate",
    "BadgeProgressRead",
    "BadgeRead",
    "CamelModel",
    "LeaderboardEntryRead",
    "ProgressRecordRead",
    "UserSummaryResponse",
]
