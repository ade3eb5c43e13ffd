"""Badge endpoints for tracking learner achievements."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.api import deps
from academy.db.models.user import User
from academy.schemas import BadgeAwardRead, BadgeCheckResponse, BadgeProgressRead, BadgeRead
from academy.services.gamification import GamificationService
from academy.services.notifications import NotificationService
from academy.utils.cache import build_cache_key, cache_backend
from academy.utils.exceptions import AcademyException, to_http_exception

router = APIRouter(prefix="/badges", tags=["badges"])


@router.get("", response_model=list[BadgeRead])
def list_badges(
    *,
    service: GamificationService = Depends(deps.get_gamification_service),
    _: User = Depends(deps.get_current_user),
) -> list[BadgeRead]:
    """Return all badge definitions."""

    cache_key = build_cache_key(scope="catalog")
    cached = cache_backend.get("badges", cache_key)
    if cached is not None:
        return cached

    payload = [BadgeRead.model_validate(badge).model_dump(mode="json") for badge in service.list_badges()]
    cache_backend.set("badges", cache_key, payload, ttl_seconds=300)
    return payload


@router.get("/my", response_model=list[BadgeProgressRead])
def get_my_badges(
    *,
    service: GamificationService = Depends(deps.get_gamification_service),
    current_user: User = Depends(deps.get_current_user),
) -> list[BadgeProgressRead]:
    """Return every badge with the authenticated user's progress toward it."""

    try:
        progress = service.get_user_badges(current_user.id)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc
    return [BadgeProgressRead.model_validate(item) for item in progress]


@router.post("/check", response_model=BadgeCheckResponse)
def check_badges(
    *,
    db: Session = Depends(deps.get_db),
    service: GamificationService = Depends(deps.get_gamification_service),
    current_user: User = Depends(deps.get_current_user),
) -> BadgeCheckResponse:
    """Manually trigger a badge check for the authenticated user."""

    try:
        newly_earned = service.evaluate_badges(current_user.id)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc

    NotificationService(db).notify_award(current_user.id, None, newly_earned)
    return BadgeCheckResponse(
        new_badges=[BadgeAwardRead.model_validate(award) for award in newly_earned],
        total_unlocked=len(newly_earned),
    )
