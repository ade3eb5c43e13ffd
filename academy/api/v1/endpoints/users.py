"""User management endpoints."""
from __future__ import annotations

import uuid
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from academy.api import deps
from academy.db.models.user import User
from academy.schemas import UserRead, UserUpdate
from academy.services.users import UserService
from academy.utils.cache import build_cache_key, cache_backend
from academy.utils.exceptions import NotFoundError, handle_not_found

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(deps.get_current_user)) -> UserRead:
    """Return the authenticated user profile, including XP and level."""

    cache_key = build_cache_key(user_id=str(current_user.id))
    cached = cache_backend.get("user:profile", cache_key)
    if cached is not None:
        return cached

    payload = UserRead.model_validate(current_user).model_dump(mode="json")
    cache_backend.set("user:profile", cache_key, payload, ttl_seconds=300)
    return payload


@router.patch("/me", response_model=UserRead)
def update_current_user(
    payload: UserUpdate,
    current_user: User = Depends(deps.get_current_user),
    db: Session = Depends(deps.get_db),
) -> UserRead:
    """Allow the authenticated user to update their name."""

    service = UserService(db)
    updated = service.update_profile(current_user, payload)
    cache_key = build_cache_key(user_id=str(updated.id))
    cache_backend.invalidate("user:profile", key=cache_key)
    return UserRead.model_validate(updated)


@router.get("", response_model=list[UserRead])
def list_users(
    role: Optional[Literal["student", "admin"]] = Query(None),
    search: Optional[str] = Query(None, min_length=1, max_length=100),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(deps.get_db),
    _: User = Depends(deps.get_current_admin),
) -> list[User]:
    """Admin view of accounts, newest first, filterable by role or name/email."""

    service = UserService(db)
    return service.list_accounts(role=role, search=search, limit=limit, offset=offset)


@router.get("/{user_id}", response_model=UserRead)
def read_user_by_id(
    user_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    _: User = Depends(deps.get_current_user),
) -> UserRead:
    cache_key = build_cache_key(user_id=str(user_id))
    cached = cache_backend.get("user:profile", cache_key)
    if cached is not None:
        return cached

    service = UserService(db)
    try:
        user = service.get(user_id)
    except NotFoundError as exc:
        raise handle_not_found(exc) from exc
    payload = UserRead.model_validate(user).model_dump(mode="json")
    cache_backend.set("user:profile", cache_key, payload, ttl_seconds=300)
    return payload
