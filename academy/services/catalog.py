"""Read and admin access to the module and quiz catalog."""
from __future__ import annotations

from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from academy.db.models.content import Module, Quiz
from academy.db.models.progress import ModuleProgress
from academy.db.models.user import User
from academy.schemas.activity import ModuleCreate, QuizCreate
from academy.utils.exceptions import NotFoundError


class CatalogService:
    """Module and quiz lookups used by the request layer."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_modules(self, *, published_only: bool = True) -> List[Module]:
        stmt = select(Module).order_by(Module.order, Module.id)
        if published_only:
            stmt = stmt.where(Module.is_published.is_(True))
        return list(self.db.scalars(stmt))

    def get_module(self, module_id: int) -> Module:
        module = self.db.get(Module, module_id)
        if module is None:
            raise NotFoundError(f"Module {module_id} not found")
        return module

    def list_quizzes(self, module_id: int) -> List[Quiz]:
        self.get_module(module_id)
        return list(self.db.scalars(select(Quiz).where(Quiz.module_id == module_id).order_by(Quiz.id)))

    def create_module(self, payload: ModuleCreate) -> Module:
        module = Module(**payload.model_dump())
        self.db.add(module)
        self.db.commit()
        self.db.refresh(module)
        return module

    def create_quiz(self, payload: QuizCreate) -> Quiz:
        self.get_module(payload.module_id)
        quiz = Quiz(**payload.model_dump())
        self.db.add(quiz)
        self.db.commit()
        self.db.refresh(quiz)
        return quiz

    def platform_stats(self) -> dict[str, int]:
        """Totals shown on the admin dashboard."""

        average_progress = self.db.scalar(select(func.avg(ModuleProgress.progress)))
        return {
            "total_students": self.db.scalar(
                select(func.count(User.id)).where(User.role == "student")
            )
            or 0,
            "total_modules": self.db.scalar(select(func.count(Module.id))) or 0,
            "total_quizzes": self.db.scalar(select(func.count(Quiz.id))) or 0,
            "average_progress": round(float(average_progress)) if average_progress is not None else 0,
        }
