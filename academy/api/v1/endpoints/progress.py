"""Module progress and learner summary endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.api import deps
from academy.api.v1.endpoints.award_utils import award_fields
from academy.db.models.user import User
from academy.schemas import (
    ModuleProgressRead,
    ModuleProgressResponse,
    ModuleProgressUpdate,
    UserSummaryResponse,
)
from academy.services.activity import ActivityService
from academy.services.gamification import GamificationService
from academy.utils.exceptions import AcademyException, to_http_exception

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/modules", response_model=list[ModuleProgressRead])
def list_module_progress(
    current_user: User = Depends(deps.get_current_user),
    service: ActivityService = Depends(deps.get_activity_service),
) -> list[ModuleProgressRead]:
    return service.list_module_progress(current_user.id)


@router.post("/modules", response_model=ModuleProgressResponse)
def update_module_progress(
    payload: ModuleProgressUpdate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    service: ActivityService = Depends(deps.get_activity_service),
) -> ModuleProgressResponse:
    """Record progress on a module. Completing it the first time earns its XP."""

    try:
        outcome = service.update_module_progress(
            current_user.id,
            payload.module_id,
            status=payload.status,
            progress=payload.progress,
        )
    except AcademyException as exc:
        raise to_http_exception(exc) from exc

    return ModuleProgressResponse(
        progress=ModuleProgressRead.model_validate(outcome.item),
        **award_fields(db, current_user.id, outcome),
    )


@router.get("/summary", response_model=UserSummaryResponse)
def read_summary(
    current_user: User = Depends(deps.get_current_user),
    service: GamificationService = Depends(deps.get_gamification_service),
) -> UserSummaryResponse:
    """Return module, quiz, badge and level totals for the dashboard."""

    try:
        summary = service.get_user_summary(current_user.id)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc
    return UserSummaryResponse.model_validate(summary)
