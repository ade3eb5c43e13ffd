"""Per-user activity records feeding the gamification engine."""
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from academy.db.base import Base


class ModuleProgress(Base):
    """Learner progress through a single module."""

    __tablename__ = "module_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "module_id", name="uq_module_progress_user_module"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    module_id = Column(
        Integer, ForeignKey("modules.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status = Column(String(20), nullable=False, default="not_started")  # not_started, in_progress, completed
    progress = Column(Integer, nullable=False, default=0)  # percentage 0-100
    completed_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class QuizAttempt(Base):
    """A scored quiz submission."""

    __tablename__ = "quiz_attempts"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    quiz_id = Column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    score = Column(Integer, nullable=False)
    answers = Column(JSON, nullable=False, default=list)
    passed = Column(Boolean, nullable=False)
    # Set once the quiz XP for this attempt has been granted.
    xp_awarded = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime(timezone=True), server_default=func.now())


class SimulationUsage(Base):
    """One use of a simulation widget (thumbnail_creator, post_scheduler, ...)."""

    __tablename__ = "simulation_usage"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    simulation_type = Column(String(100), nullable=False)
    used_at = Column(DateTime(timezone=True), server_default=func.now())


class DailyChallengeCompletion(Base):
    """Completion of the daily challenge; at most one per user per day."""

    __tablename__ = "daily_challenge_completions"
    __table_args__ = (
        UniqueConstraint("user_id", "challenge_date", name="uq_daily_challenge_user_date"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    challenge_date = Column(Date, nullable=False)
    completed_at = Column(DateTime(timezone=True), server_default=func.now())
