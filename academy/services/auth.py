"""Authentication service layer."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from academy.config import settings
from academy.core.security import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
)
from academy.db.models.user import User
from academy.schemas.auth import Token
from academy.schemas.user import UserCreate
from academy.utils.exceptions import AuthenticationError, ValidationError


class EmailAlreadyExistsError(ValidationError):
    """Raised when attempting to register with an email that already exists."""


class AuthService:
    """User registration and credential checks."""

    def __init__(self, db: Session):
        self.db = db

    def register_user(self, payload: UserCreate) -> User:
        """Create a new account; its progress record starts at 0 XP, level 1."""

        existing_user = self.db.scalar(select(User).where(User.email == payload.email))
        if existing_user:
            raise EmailAlreadyExistsError("A user with this email already exists.")

        user = User(
            email=payload.email,
            hashed_password=get_password_hash(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            role="student",
            xp=0,
            level=1,
            xp_version=0,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise EmailAlreadyExistsError("A user with this email already exists.") from exc
        self.db.refresh(user)
        return user

    def authenticate_user(self, email: str, password: str) -> User:
        user = self.db.scalar(select(User).where(User.email == email))
        if not user or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Incorrect email or password")
        return user

    def create_tokens(self, user: User) -> Token:
        return Token(
            access_token=create_access_token(str(user.id)),
            refresh_token=create_refresh_token(str(user.id)),
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            role=user.role,
        )
