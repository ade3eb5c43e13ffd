"""Celery tasks for badge evaluation."""
from __future__ import annotations

from uuid import UUID

from loguru import logger
from sqlalchemy import select

from academy.celery_app import celery_app
from academy.db.models.user import User
from academy.db.session import SessionLocal
from academy.services.gamification import GamificationService
from academy.utils.exceptions import AcademyException


@celery_app.task(name="academy.tasks.badges.evaluate_user_badges")
def evaluate_user_badges(user_id: str) -> dict[str, int | list[str] | str]:
    """Award any badges a single user has become eligible for."""

    try:
        user_uuid = UUID(user_id)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid user ID: {user_id}") from exc

    db = SessionLocal()
    try:
        awards = GamificationService(db).evaluate_badges(user_uuid)
        logger.info("User badge evaluation completed", user_id=user_id, awarded=len(awards))
        return {
            "user_id": user_id,
            "newly_awarded": len(awards),
            "badge_names": [award.badge_name for award in awards],
        }
    except AcademyException as exc:
        logger.error("Badge evaluation failed", user_id=user_id, error=exc.message)
        raise
    finally:
        db.close()


@celery_app.task(name="academy.tasks.badges.evaluate_all_badges")
def evaluate_all_badges() -> dict[str, int]:
    """Reconcile badges for every active user (nightly).

    Catches up on awards that were granted without a following evaluation.
    One user's failure does not stop the sweep.
    """

    db = SessionLocal()
    try:
        user_ids = db.scalars(select(User.id).where(User.is_active.is_(True))).all()

        total_checked = 0
        total_awarded = 0
        failures = 0
        for user_id in user_ids:
            try:
                awards = GamificationService(db).evaluate_badges(user_id)
            except AcademyException as exc:
                failures += 1
                logger.error(
                    "Badge evaluation failed for user", user_id=str(user_id), error=exc.message
                )
                continue
            total_checked += 1
            total_awarded += len(awards)

            if total_checked % 100 == 0:
                logger.info("Badge sweep progress", checked=total_checked, total=len(user_ids))

        logger.info(
            "Badge sweep completed",
            users_checked=total_checked,
            total_awarded=total_awarded,
            failures=failures,
        )
        return {
            "users_checked": total_checked,
            "total_awarded": total_awarded,
            "failures": failures,
        }
    finally:
        db.close()
