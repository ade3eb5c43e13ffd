"""Course catalog models: training modules and their quizzes."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from academy.db.base import Base


class Module(Base):
    """A unit of course content worth ``xp_reward`` XP once completed."""

    __tablename__ = "modules"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    content = Column(Text)
    video_url = Column(String(500))
    order = Column(Integer, nullable=False, default=0)
    xp_reward = Column(Integer, nullable=False, default=100)
    platform = Column(String(50))  # twitch, youtube, instagram, tiktok, twitter
    is_published = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    quizzes = relationship("Quiz", back_populates="module", cascade="all, delete-orphan")


class Quiz(Base):
    """Quiz attached to a module."""

    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True)
    module_id = Column(Integer, ForeignKey("modules.id", ondelete="CASCADE"), index=True)
    title = Column(String(255), nullable=False)
    questions = Column(JSON, nullable=False, default=list)
    xp_reward = Column(Integer, nullable=False, default=50)
    passing_score = Column(Integer, nullable=False, default=70)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    module = relationship("Module", back_populates="quizzes")
