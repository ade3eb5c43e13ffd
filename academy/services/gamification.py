"""Gamification engine: XP awards, levels and badge unlocks."""
from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, get_args

from loguru import logger
from sqlalchemy import and_, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)
from tenacity.wait import wait_base

from academy.config import settings
from academy.core.badge_criteria import (
    UserStats,
    criteria_progress,
    dump_criteria,
    is_satisfied,
    parse_criteria,
)
from academy.core.leveling import level_for, level_progress, level_title, xp_to_next_level
from academy.db.models.badge import Badge, UserBadge
from academy.db.models.progress import ModuleProgress, QuizAttempt
from academy.db.models.user import User
from academy.utils.cache import build_cache_key, cache_backend
from academy.utils.exceptions import (
    ConcurrencyConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

AchievementKind = Literal["module_completed", "quiz_passed", "simulation_used", "daily_challenge"]
ACHIEVEMENT_KINDS = frozenset(get_args(AchievementKind))

PERFECT_SCORE = 100


@dataclass(frozen=True, slots=True)
class AchievementEvent:
    """A discrete accomplishment worth ``magnitude`` XP."""

    kind: AchievementKind
    magnitude: int

    def __post_init__(self) -> None:
        if self.kind not in ACHIEVEMENT_KINDS:
            raise ValidationError(f"Unknown achievement kind: {self.kind}")
        if self.magnitude < 0:
            raise ValidationError("Achievement XP must be non-negative", {"magnitude": self.magnitude})


@dataclass(frozen=True, slots=True)
class BadgeAward:
    user_id: uuid.UUID
    badge_id: int
    badge_name: str
    earned_at: datetime


@dataclass(slots=True)
class ProgressRecord:
    """A user's XP and level as persisted after an award."""

    user_id: uuid.UUID
    xp: int
    level: int
    previous_level: int | None = None
    new_badges: List[BadgeAward] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.xp < 0:
            raise ValidationError("XP must be non-negative", {"xp": self.xp})
        if self.level != level_for(self.xp):
            raise ValidationError(
                "Level is inconsistent with XP", {"xp": self.xp, "level": self.level}
            )

    @property
    def leveled_up(self) -> bool:
        return self.previous_level is not None and self.level > self.previous_level


@dataclass(frozen=True, slots=True)
class UserSummary:
    completed_modules: int
    in_progress_modules: int
    passed_quizzes: int
    perfect_scores: int
    average_score: int
    total_badges: int
    xp: int
    level: int
    level_title: str
    level_progress: int
    xp_to_next_level: int


@dataclass(frozen=True, slots=True)
class BadgeProgress:
    """A catalog badge seen from one user's point of view."""

    badge: Badge
    current_progress: int
    target_progress: int
    earned_at: datetime | None

    @property
    def earned(self) -> bool:
        return self.earned_at is not None


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    rank: int
    user_id: uuid.UUID
    display_name: str
    xp: int
    level: int


@dataclass
class BadgeDefinition:
    """Template used to seed the badge catalog."""

    name: str
    description: str
    icon: str
    color: str
    criteria: Dict[str, Any]
    xp_reward: int = 25


def _log_conflict_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "XP award conflicted with a concurrent write, retrying",
        attempt=retry_state.attempt_number,
        error=str(exc),
    )


class GamificationService:
    """XP accrual, leveling and badge evaluation over an injected session."""

    def __init__(
        self,
        db: Session,
        *,
        max_attempts: int | None = None,
        retry_wait: wait_base | None = None,
    ) -> None:
        self.db = db
        self.max_attempts = max_attempts or settings.XP_AWARD_MAX_ATTEMPTS
        self.retry_wait = retry_wait or wait_random_exponential(multiplier=0.05, max=1.0)

    # ------------------------------------------------------------------
    # XP awards
    # ------------------------------------------------------------------
    def award_xp(self, user_id: uuid.UUID, amount: int) -> ProgressRecord:
        """Add ``amount`` XP to the user, recompute the level, then evaluate badges.

        The read-modify-write is guarded by ``users.xp_version``: a write that
        finds the version changed since the read is rolled back and the whole
        attempt is repeated, up to ``max_attempts`` times.
        """

        if amount < 0:
            raise ValidationError("XP amount must be non-negative", {"amount": amount})

        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type(ConcurrencyConflictError),
            before_sleep=_log_conflict_retry,
            reraise=True,
        )
        record = retrying(self._apply_award, user_id, amount)

        logger.info(
            "XP awarded",
            user_id=str(user_id),
            amount=amount,
            xp=record.xp,
            level=record.level,
            leveled_up=record.leveled_up,
        )
        cache_backend.invalidate("leaderboard")
        cache_backend.invalidate("user:profile", key=build_cache_key(user_id=str(user_id)))

        record.new_badges = self.evaluate_badges(user_id)
        return record

    def record_event(self, user_id: uuid.UUID, event: AchievementEvent) -> ProgressRecord:
        """Grant the XP attached to an achievement event."""

        logger.debug("Achievement event", user_id=str(user_id), kind=event.kind)
        return self.award_xp(user_id, event.magnitude)

    def _load_progress_row(self, user_id: uuid.UUID):
        return self.db.execute(
            select(User.xp, User.level, User.xp_version).where(User.id == user_id)
        ).one_or_none()

    def _apply_award(self, user_id: uuid.UUID, amount: int) -> ProgressRecord:
        try:
            row = self._load_progress_row(user_id)
            if row is None:
                self.db.rollback()
                raise NotFoundError(f"No progress record for user {user_id}")

            new_xp = row.xp + amount
            new_level = level_for(new_xp)
            result = self.db.execute(
                update(User)
                .where(and_(User.id == user_id, User.xp_version == row.xp_version))
                .values(xp=new_xp, level=new_level, xp_version=row.xp_version + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                self.db.rollback()
                raise ConcurrencyConflictError(
                    f"Concurrent XP update for user {user_id}",
                    {"user_id": str(user_id), "expected_version": row.xp_version},
                )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError(f"Failed to award XP to user {user_id}") from exc

        self._expire_cached_user(user_id)
        return ProgressRecord(
            user_id=user_id, xp=new_xp, level=new_level, previous_level=row.level
        )

    def _expire_cached_user(self, user_id: uuid.UUID) -> None:
        instance = self.db.identity_map.get(Session.identity_key(User, user_id))
        if instance is not None:
            self.db.expire(instance, ["xp", "level", "xp_version"])

    # ------------------------------------------------------------------
    # Badge evaluation
    # ------------------------------------------------------------------
    def evaluate_badges(self, user_id: uuid.UUID) -> List[BadgeAward]:
        """Award every not-yet-earned badge whose criteria the user now meets.

        Each badge is evaluated and inserted in isolation: a malformed
        criterion or a failed insert is logged and the next badge is still
        tried. Losing a duplicate-insert race counts as already awarded.
        """

        stats = self.get_user_stats(user_id)
        earned = select(UserBadge.badge_id).where(UserBadge.user_id == user_id)
        pending = self.db.scalars(select(Badge).where(Badge.id.not_in(earned))).all()

        awards: List[BadgeAward] = []
        for badge in pending:
            try:
                if not is_satisfied(parse_criteria(badge.criteria), stats):
                    continue
                award = self._insert_award(user_id, badge)
            except (ValidationError, SQLAlchemyError) as exc:
                logger.error(
                    "Badge evaluation failed",
                    user_id=str(user_id),
                    badge_id=badge.id,
                    error=str(exc),
                )
                continue
            if award is not None:
                awards.append(award)

        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError(f"Failed to store badge awards for user {user_id}") from exc

        if awards:
            logger.info(
                "Badges awarded",
                user_id=str(user_id),
                badges=[award.badge_name for award in awards],
            )
        return awards

    def _insert_award(self, user_id: uuid.UUID, badge: Badge) -> BadgeAward | None:
        earned_at = datetime.now(timezone.utc)
        try:
            with self.db.begin_nested():
                self.db.add(UserBadge(user_id=user_id, badge_id=badge.id, earned_at=earned_at))
        except IntegrityError:
            logger.debug("Badge already awarded", user_id=str(user_id), badge_id=badge.id)
            return None
        return BadgeAward(
            user_id=user_id, badge_id=badge.id, badge_name=badge.name, earned_at=earned_at
        )

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------
    def _count(self, stmt) -> int:
        return self.db.scalar(stmt) or 0

    def get_user_stats(self, user_id: uuid.UUID) -> UserStats:
        row = self._load_progress_row(user_id)
        if row is None:
            raise NotFoundError(f"No progress record for user {user_id}")

        completed_modules = self._count(
            select(func.count(ModuleProgress.id)).where(
                ModuleProgress.user_id == user_id, ModuleProgress.status == "completed"
            )
        )
        passed_quizzes = self._count(
            select(func.count(func.distinct(QuizAttempt.quiz_id))).where(
                QuizAttempt.user_id == user_id, QuizAttempt.passed.is_(True)
            )
        )
        perfect_scores = self._count(
            select(func.count(QuizAttempt.id)).where(
                QuizAttempt.user_id == user_id, QuizAttempt.score >= PERFECT_SCORE
            )
        )
        return UserStats(
            total_xp=row.xp,
            level=row.level,
            completed_modules=completed_modules,
            passed_quizzes=passed_quizzes,
            perfect_scores=perfect_scores,
        )

    def get_user_summary(self, user_id: uuid.UUID) -> UserSummary:
        """Aggregate module, quiz and badge activity for display."""

        stats = self.get_user_stats(user_id)
        in_progress = self._count(
            select(func.count(ModuleProgress.id)).where(
                ModuleProgress.user_id == user_id, ModuleProgress.status == "in_progress"
            )
        )
        mean_score = self.db.scalar(
            select(func.avg(QuizAttempt.score)).where(QuizAttempt.user_id == user_id)
        )
        total_badges = self._count(
            select(func.count(UserBadge.id)).where(UserBadge.user_id == user_id)
        )
        return UserSummary(
            completed_modules=stats.completed_modules,
            in_progress_modules=in_progress,
            passed_quizzes=stats.passed_quizzes,
            perfect_scores=stats.perfect_scores,
            average_score=math.floor(float(mean_score) + 0.5) if mean_score is not None else 0,
            total_badges=total_badges,
            xp=stats.total_xp,
            level=stats.level,
            level_title=level_title(stats.level),
            level_progress=level_progress(stats.total_xp),
            xp_to_next_level=xp_to_next_level(stats.total_xp),
        )

    def get_leaderboard(self, limit: int | None = None) -> List[LeaderboardEntry]:
        limit = limit or settings.LEADERBOARD_DEFAULT_LIMIT
        cache_key = build_cache_key(limit=limit)
        cached = cache_backend.get("leaderboard", cache_key)
        if cached is not None:
            return [
                LeaderboardEntry(
                    rank=item["rank"],
                    user_id=uuid.UUID(item["user_id"]),
                    display_name=item["display_name"],
                    xp=item["xp"],
                    level=item["level"],
                )
                for item in cached
            ]

        users = self.db.scalars(
            select(User)
            .where(User.is_active.is_(True))
            .order_by(User.xp.desc(), User.created_at.asc())
            .limit(limit)
        ).all()
        entries = [
            LeaderboardEntry(
                rank=index,
                user_id=user.id,
                display_name=user.display_name,
                xp=user.xp,
                level=user.level,
            )
            for index, user in enumerate(users, start=1)
        ]
        cache_backend.set(
            "leaderboard",
            cache_key,
            [
                {
                    "rank": entry.rank,
                    "user_id": str(entry.user_id),
                    "display_name": entry.display_name,
                    "xp": entry.xp,
                    "level": entry.level,
                }
                for entry in entries
            ],
            ttl_seconds=60,
        )
        return entries

    # ------------------------------------------------------------------
    # Badge catalog
    # ------------------------------------------------------------------
    def list_badges(self) -> List[Badge]:
        return list(self.db.scalars(select(Badge).order_by(Badge.id)))

    def get_user_badges(self, user_id: uuid.UUID) -> List[BadgeProgress]:
        """Return every catalog badge with the user's progress toward it."""

        stats = self.get_user_stats(user_id)
        earned_at = {
            badge_id: when
            for badge_id, when in self.db.execute(
                select(UserBadge.badge_id, UserBadge.earned_at).where(UserBadge.user_id == user_id)
            )
        }

        items: List[BadgeProgress] = []
        for badge in self.list_badges():
            try:
                current, target = criteria_progress(parse_criteria(badge.criteria), stats)
            except ValidationError:
                logger.warning("Skipping badge with invalid criteria", badge_id=badge.id)
                continue
            items.append(
                BadgeProgress(
                    badge=badge,
                    current_progress=min(current, target),
                    target_progress=target,
                    earned_at=earned_at.get(badge.id),
                )
            )
        return items

    def create_badge(self, definition: BadgeDefinition) -> Badge:
        criteria = parse_criteria(definition.criteria)
        badge = Badge(
            name=definition.name,
            description=definition.description,
            icon=definition.icon,
            color=definition.color,
            criteria=dump_criteria(criteria),
            xp_reward=definition.xp_reward,
        )
        self.db.add(badge)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValidationError(f"A badge named {definition.name!r} already exists") from exc
        self.db.refresh(badge)
        cache_backend.invalidate("badges")
        return badge

    def delete_badge(self, badge_id: int) -> None:
        """Delete a badge nobody has earned yet; awards are permanent."""

        badge = self.db.get(Badge, badge_id)
        if badge is None:
            raise NotFoundError(f"Badge {badge_id} not found")
        awarded = self._count(
            select(func.count(UserBadge.id)).where(UserBadge.badge_id == badge_id)
        )
        if awarded:
            raise ValidationError(
                "Badge has already been awarded and cannot be deleted",
                {"badge_id": badge_id, "awards": awarded},
            )
        self.db.delete(badge)
        self.db.commit()
        cache_backend.invalidate("badges")

    def seed_badges(self, definitions: List[BadgeDefinition]) -> None:
        """Insert or refresh catalog badges, matched by name."""

        for definition in definitions:
            criteria = dump_criteria(parse_criteria(definition.criteria))
            existing = self.db.scalars(select(Badge).where(Badge.name == definition.name)).first()
            if existing:
                existing.description = definition.description
                existing.icon = definition.icon
                existing.color = definition.color
                existing.criteria = criteria
                existing.xp_reward = definition.xp_reward
            else:
                self.db.add(
                    Badge(
                        name=definition.name,
                        description=definition.description,
                        icon=definition.icon,
                        color=definition.color,
                        criteria=criteria,
                        xp_reward=definition.xp_reward,
                    )
                )
        self.db.commit()
        cache_backend.invalidate("badges")


DEFAULT_BADGES: List[BadgeDefinition] = [
    BadgeDefinition(
        name="Premier Pas",
        description="Terminer votre premier module",
        icon="star",
        color="#fbbf24",
        criteria={"type": "modules_completed", "count": 1},
        xp_reward=25,
    ),
    BadgeDefinition(
        name="Maître des Modules",
        description="Terminer 5 modules",
        icon="trophy",
        color="#3b82f6",
        criteria={"type": "modules_completed", "count": 5},
        xp_reward=100,
    ),
    BadgeDefinition(
        name="Champion des Quiz",
        description="Réussir 10 quiz",
        icon="medal",
        color="#10b981",
        criteria={"type": "quizzes_passed", "count": 10},
        xp_reward=75,
    ),
    BadgeDefinition(
        name="Perfectionniste",
        description="Obtenir 100% à un quiz",
        icon="crown",
        color="#8b5cf6",
        criteria={"type": "perfect_score", "count": 1},
        xp_reward=50,
    ),
    BadgeDefinition(
        name="Montée en Niveau",
        description="Atteindre le niveau 5",
        icon="target",
        color="#f59e0b",
        criteria={"type": "level_reached", "level": 5},
        xp_reward=150,
    ),
    BadgeDefinition(
        name="Collecteur d'XP",
        description="Accumuler 1000 XP",
        icon="award",
        color="#ef4444",
        criteria={"type": "xp_accumulated", "amount": 1000},
        xp_reward=100,
    ),
]


__all__ = [
    "AchievementEvent",
    "BadgeAward",
    "BadgeDefinition",
    "BadgeProgress",
    "DEFAULT_BADGES",
    "GamificationService",
    "LeaderboardEntry",
    "ProgressRecord",
    "UserSummary",
]
