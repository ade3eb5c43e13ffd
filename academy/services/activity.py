"""Learner activities that earn XP: modules, quizzes, simulations, daily challenges."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, List

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from academy.config import settings
from academy.db.models.content import Module, Quiz
from academy.db.models.progress import (
    DailyChallengeCompletion,
    ModuleProgress,
    QuizAttempt,
    SimulationUsage,
)
from academy.services.gamification import (
    AchievementEvent,
    BadgeAward,
    GamificationService,
    ProgressRecord,
)
from academy.utils.exceptions import (
    AcademyException,
    DuplicateCompletionError,
    NotFoundError,
    PersistenceError,
)


@dataclass
class ActivityOutcome:
    """What an activity produced: the stored row plus any XP award."""

    item: Any
    award: ProgressRecord | None = None
    new_badges: List[BadgeAward] = field(default_factory=list)


class ActivityService:
    """Persist learner activity and forward achievements to the gamification engine."""

    def __init__(self, db: Session, *, gamification: GamificationService | None = None) -> None:
        self.db = db
        self.gamification = gamification or GamificationService(db)

    def _award(self, user_id: uuid.UUID, event: AchievementEvent, item: Any) -> ActivityOutcome:
        record = self.gamification.record_event(user_id, event)
        return ActivityOutcome(item=item, award=record, new_badges=list(record.new_badges))

    def _commit(self, what: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError(f"Failed to store {what}") from exc

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------
    def list_module_progress(self, user_id: uuid.UUID) -> List[ModuleProgress]:
        return list(
            self.db.scalars(
                select(ModuleProgress)
                .where(ModuleProgress.user_id == user_id)
                .order_by(ModuleProgress.module_id)
            )
        )

    def update_module_progress(
        self, user_id: uuid.UUID, module_id: int, *, status: str, progress: int
    ) -> ActivityOutcome:
        """Upsert progress on a module; the first completion earns the module's XP."""

        module = self.db.get(Module, module_id)
        if module is None:
            raise NotFoundError(f"Module {module_id} not found")

        row = self.db.scalars(
            select(ModuleProgress).where(
                ModuleProgress.user_id == user_id, ModuleProgress.module_id == module_id
            )
        ).first()
        if row is None:
            row = ModuleProgress(user_id=user_id, module_id=module_id)
            self.db.add(row)

        if row.status != "completed":
            row.status = status
            row.progress = 100 if status == "completed" else progress
        self._commit("module progress")

        if status != "completed":
            return ActivityOutcome(item=row)

        # Only the request that flips completed_at from NULL earns XP.
        claimed = self.db.execute(
            update(ModuleProgress)
            .where(ModuleProgress.id == row.id, ModuleProgress.completed_at.is_(None))
            .values(completed_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        ).rowcount
        self._commit("module completion")
        self.db.refresh(row)
        if claimed != 1:
            logger.debug("Module already completed", user_id=str(user_id), module_id=module_id)
            return ActivityOutcome(item=row)

        try:
            return self._award(
                user_id, AchievementEvent("module_completed", module.xp_reward), row
            )
        except AcademyException:
            self._release_completion(row)
            raise

    def _release_completion(self, row: ModuleProgress) -> None:
        """Reopen the completion claim so a retried request can still earn the XP."""

        try:
            self.db.execute(
                update(ModuleProgress)
                .where(ModuleProgress.id == row.id)
                .values(completed_at=None)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                "Failed to reopen module completion", progress_id=row.id, error=str(exc)
            )
        self.db.expire(row, ["completed_at"])

    # ------------------------------------------------------------------
    # Quizzes
    # ------------------------------------------------------------------
    def list_quiz_attempts(self, user_id: uuid.UUID) -> List[QuizAttempt]:
        return list(
            self.db.scalars(
                select(QuizAttempt)
                .where(QuizAttempt.user_id == user_id)
                .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
            )
        )

    def submit_quiz_attempt(
        self, user_id: uuid.UUID, quiz_id: int, *, score: int, answers: list
    ) -> ActivityOutcome:
        """Store a scored attempt; the quiz XP is granted once per user.

        Later passing attempts earn nothing but may still unlock badges
        (e.g. a perfect score on a retake), so badges are re-evaluated.
        """

        quiz = self.db.get(Quiz, quiz_id)
        if quiz is None:
            raise NotFoundError(f"Quiz {quiz_id} not found")

        passed = score >= quiz.passing_score
        already_rewarded = (
            self.db.scalars(
                select(QuizAttempt.id).where(
                    QuizAttempt.user_id == user_id,
                    QuizAttempt.quiz_id == quiz_id,
                    QuizAttempt.xp_awarded.is_(True),
                )
            ).first()
            is not None
        )

        attempt = QuizAttempt(
            user_id=user_id, quiz_id=quiz_id, score=score, answers=answers, passed=passed
        )
        self.db.add(attempt)
        self._commit("quiz attempt")

        if passed and not already_rewarded:
            outcome = self._award(
                user_id, AchievementEvent("quiz_passed", quiz.xp_reward), attempt
            )
            attempt.xp_awarded = True
            self._commit("quiz reward")
            return outcome
        if passed:
            return ActivityOutcome(
                item=attempt, new_badges=self.gamification.evaluate_badges(user_id)
            )
        return ActivityOutcome(item=attempt)

    # ------------------------------------------------------------------
    # Simulations and daily challenges
    # ------------------------------------------------------------------
    def record_simulation_use(self, user_id: uuid.UUID, simulation_type: str) -> ActivityOutcome:
        usage = SimulationUsage(user_id=user_id, simulation_type=simulation_type)
        self.db.add(usage)
        self._commit("simulation usage")
        return self._award(
            user_id,
            AchievementEvent("simulation_used", settings.SIMULATION_XP_REWARD),
            usage,
        )

    def complete_daily_challenge(
        self, user_id: uuid.UUID, *, challenge_date: date | None = None
    ) -> ActivityOutcome:
        challenge_date = challenge_date or date.today()
        completion = DailyChallengeCompletion(user_id=user_id, challenge_date=challenge_date)
        self.db.add(completion)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateCompletionError(
                "Le défi du jour a déjà été relevé",
                {"challenge_date": challenge_date.isoformat()},
            ) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError("Failed to store daily challenge completion") from exc

        return self._award(
            user_id,
            AchievementEvent("daily_challenge", settings.DAILY_CHALLENGE_XP_REWARD),
            completion,
        )


__all__ = ["ActivityOutcome", "ActivityService"]
