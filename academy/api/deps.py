"""Shared API dependencies."""
from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from academy.config import settings
from academy.core.security import InvalidTokenError, decode_token
from academy.db.models.user import User
from academy.db.session import get_db
from academy.schemas import TokenPayload
from academy.services.activity import ActivityService
from academy.services.gamification import GamificationService
from academy.utils.exceptions import PermissionDeniedError, handle_permission_denied

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the Authorization header."""

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(token)
        if payload.get("type") != "access":
            raise InvalidTokenError("Token must be an access token")
        token_data = TokenPayload.model_validate(payload)
    except (InvalidTokenError, ValidationError) as exc:
        raise credentials_exception from exc

    user = db.get(User, uuid.UUID(str(token_data.sub)))
    if not user or not user.is_active:
        raise credentials_exception
    return user


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise handle_permission_denied(PermissionDeniedError("Admin access required"))
    return current_user


def get_gamification_service(db: Session = Depends(get_db)) -> GamificationService:
    return GamificationService(db)


def get_activity_service(
    db: Session = Depends(get_db),
    gamification: GamificationService = Depends(get_gamification_service),
) -> ActivityService:
    return ActivityService(db, gamification=gamification)
