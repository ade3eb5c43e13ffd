"""In-app notification endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from academy.api import deps
from academy.db.models.user import User
from academy.schemas import NotificationRead, UnreadCountResponse
from academy.services.notifications import NotificationService
from academy.utils.exceptions import NotFoundError, handle_not_found

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
) -> list[NotificationRead]:
    return NotificationService(db).list_for_user(current_user.id, unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCountResponse)
def read_unread_count(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread=NotificationService(db).unread_count(current_user.id))


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
) -> NotificationRead:
    try:
        return NotificationService(db).mark_read(current_user.id, notification_id)
    except NotFoundError as exc:
        raise handle_not_found(exc) from exc


@router.post("/read-all", response_model=UnreadCountResponse)
def mark_all_notifications_read(
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
) -> UnreadCountResponse:
    """Mark everything read and return the new unread count."""

    service = NotificationService(db)
    service.mark_all_read(current_user.id)
    return UnreadCountResponse(unread=service.unread_count(current_user.id))
