"""Badge catalog and award models."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from academy.db.base import Base


class Badge(Base):
    """Badge definition; ``criteria`` holds one tagged predicate as JSON."""

    __tablename__ = "badges"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text)
    icon = Column(String(50), nullable=False, default="award")
    color = Column(String(20), nullable=False, default="#3b82f6")
    criteria = Column(JSON, nullable=False)
    xp_reward = Column(Integer, nullable=False, default=25)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    awards = relationship("UserBadge", back_populates="badge")


class UserBadge(Base):
    """A badge earned by a user. Never updated or deleted once written."""

    __tablename__ = "user_badges"
    __table_args__ = (UniqueConstraint("user_id", "badge_id", name="uq_user_badges_user_badge"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    badge_id = Column(
        Integer, ForeignKey("badges.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    earned_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    badge = relationship("Badge", back_populates="awards")
