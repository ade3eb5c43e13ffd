"""Administrative endpoints: catalog management, badge catalog and manual XP grants."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.api import deps
from academy.core.badge_criteria import dump_criteria
from academy.schemas import (
    AwardXpRequest,
    BadgeCreate,
    BadgeRead,
    ModuleCreate,
    ModuleRead,
    PlatformStats,
    ProgressRecordRead,
    QuizCreate,
    QuizRead,
)
from academy.services.catalog import CatalogService
from academy.services.gamification import BadgeDefinition, GamificationService
from academy.services.notifications import NotificationService
from academy.utils.exceptions import AcademyException, to_http_exception

router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(deps.get_current_admin)]
)


@router.get("/stats", response_model=PlatformStats)
def read_platform_stats(db: Session = Depends(deps.get_db)) -> PlatformStats:
    """Totals for the admin dashboard."""

    return PlatformStats(**CatalogService(db).platform_stats())


@router.get("/modules", response_model=list[ModuleRead])
def list_all_modules(db: Session = Depends(deps.get_db)) -> list[ModuleRead]:
    return CatalogService(db).list_modules(published_only=False)


@router.post("/modules", response_model=ModuleRead, status_code=status.HTTP_201_CREATED)
def create_module(payload: ModuleCreate, db: Session = Depends(deps.get_db)) -> ModuleRead:
    return CatalogService(db).create_module(payload)


@router.post("/quizzes", response_model=QuizRead, status_code=status.HTTP_201_CREATED)
def create_quiz(payload: QuizCreate, db: Session = Depends(deps.get_db)) -> QuizRead:
    try:
        return CatalogService(db).create_quiz(payload)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc


@router.post("/badges", response_model=BadgeRead, status_code=status.HTTP_201_CREATED)
def create_badge(
    payload: BadgeCreate,
    service: GamificationService = Depends(deps.get_gamification_service),
) -> BadgeRead:
    definition = BadgeDefinition(
        name=payload.name,
        description=payload.description,
        icon=payload.icon,
        color=payload.color,
        criteria=dump_criteria(payload.criteria),
        xp_reward=payload.xp_reward,
    )
    try:
        return service.create_badge(definition)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc


@router.delete("/badges/{badge_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_badge(
    badge_id: int,
    service: GamificationService = Depends(deps.get_gamification_service),
) -> None:
    """Delete a badge that nobody has earned yet."""

    try:
        service.delete_badge(badge_id)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc


@router.post("/users/{user_id}/xp", response_model=ProgressRecordRead)
def grant_xp(
    user_id: uuid.UUID,
    payload: AwardXpRequest,
    db: Session = Depends(deps.get_db),
    service: GamificationService = Depends(deps.get_gamification_service),
) -> ProgressRecordRead:
    """Grant XP to a learner by hand, e.g. for an offline event."""

    try:
        record = service.award_xp(user_id, payload.amount)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc

    NotificationService(db).notify_award(user_id, record, record.new_badges)
    return ProgressRecordRead.from_record(record)
