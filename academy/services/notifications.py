"""In-app notifications raised when a learner levels up or earns badges."""
from __future__ import annotations

import uuid
from typing import List

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from academy.core.leveling import level_title
from academy.db.models.notification import Notification
from academy.services.gamification import BadgeAward, ProgressRecord
from academy.utils.exceptions import NotFoundError


class NotificationService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def notify_award(
        self, user_id: uuid.UUID, record: ProgressRecord | None, badges: List[BadgeAward]
    ) -> List[Notification]:
        """Create notifications for a level-up and for each new badge."""

        created: List[Notification] = []
        if record is not None and record.leveled_up:
            created.append(
                Notification(
                    user_id=user_id,
                    type="level_up",
                    title=f"Niveau {record.level} atteint !",
                    content=f"Vous êtes désormais {level_title(record.level)} avec {record.xp} XP.",
                )
            )
        for award in badges:
            created.append(
                Notification(
                    user_id=user_id,
                    type="badge_earned",
                    title="Nouveau badge débloqué",
                    content=f"Félicitations, vous avez obtenu le badge « {award.badge_name} ».",
                )
            )
        if created:
            self.db.add_all(created)
            self.db.commit()
        return created

    def list_for_user(self, user_id: uuid.UUID, *, unread_only: bool = False) -> List[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        if unread_only:
            stmt = stmt.where(Notification.is_read.is_(False))
        return list(self.db.scalars(stmt))

    def unread_count(self, user_id: uuid.UUID) -> int:
        return (
            self.db.scalar(
                select(func.count(Notification.id)).where(
                    Notification.user_id == user_id, Notification.is_read.is_(False)
                )
            )
            or 0
        )

    def mark_read(self, user_id: uuid.UUID, notification_id: int) -> Notification:
        notification = self.db.get(Notification, notification_id)
        if notification is None or notification.user_id != user_id:
            raise NotFoundError(f"Notification {notification_id} not found")
        notification.is_read = True
        self.db.commit()
        return notification

    def mark_all_read(self, user_id: uuid.UUID) -> int:
        result = self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        count = result.rowcount
        self.db.commit()
        self.db.expire_all()
        return count
