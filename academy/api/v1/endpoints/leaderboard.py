"""Leaderboard endpoint."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from academy.api import deps
from academy.db.models.user import User
from academy.schemas import LeaderboardEntryRead
from academy.services.gamification import GamificationService

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=list[LeaderboardEntryRead])
def read_leaderboard(
    limit: Optional[int] = Query(None, ge=1, le=100),
    service: GamificationService = Depends(deps.get_gamification_service),
    _: User = Depends(deps.get_current_user),
) -> list[LeaderboardEntryRead]:
    """Return the top learners by XP."""

    return [LeaderboardEntryRead.model_validate(entry) for entry in service.get_leaderboard(limit)]
