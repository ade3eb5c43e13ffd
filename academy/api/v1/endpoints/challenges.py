"""Daily challenge endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.api import deps
from academy.api.v1.endpoints.award_utils import award_fields
from academy.db.models.user import User
from academy.schemas import DailyChallengeRead, DailyChallengeResponse
from academy.services.activity import ActivityService
from academy.utils.exceptions import AcademyException, to_http_exception

router = APIRouter(prefix="/challenges", tags=["challenges"])


@router.post("/daily", response_model=DailyChallengeResponse, status_code=status.HTTP_201_CREATED)
def complete_daily_challenge(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    service: ActivityService = Depends(deps.get_activity_service),
) -> DailyChallengeResponse:
    """Complete today's challenge. Only one completion per day counts."""

    try:
        outcome = service.complete_daily_challenge(current_user.id)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc

    return DailyChallengeResponse(
        completion=DailyChallengeRead.model_validate(outcome.item),
        **award_fields(db, current_user.id, outcome),
    )
