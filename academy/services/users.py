"""Learner and admin account lookups and profile edits."""
from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from academy.db.models.user import User
from academy.schemas.user import UserUpdate
from academy.utils.exceptions import NotFoundError


class UserService:
    """Account reads and name edits.

    XP, level and ``xp_version`` belong to the gamification engine and are
    never written from here.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: uuid.UUID) -> User:
        account = self.db.get(User, user_id)
        if account is None:
            raise NotFoundError(f"User {user_id} not found")
        return account

    def update_profile(self, account: User, changes: UserUpdate) -> User:
        for name, value in changes.model_dump(exclude_unset=True).items():
            setattr(account, name, value)
        self.db.commit()
        self.db.refresh(account)
        return account

    def list_accounts(
        self,
        *,
        role: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[User]:
        """Newest accounts first, optionally narrowed to a role or a name/email match."""

        stmt = select(User)
        if role is not None:
            stmt = stmt.where(User.role == role)
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    User.email.ilike(pattern),
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                )
            )
        stmt = stmt.order_by(User.created_at.desc(), User.email).offset(offset).limit(limit)
        return list(self.db.scalars(stmt))
