"""Course catalog endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.api import deps
from academy.db.models.user import User
from academy.schemas import ModuleRead, QuizRead
from academy.services.catalog import CatalogService
from academy.utils.exceptions import NotFoundError, handle_not_found

router = APIRouter(prefix="/modules", tags=["modules"])


@router.get("", response_model=list[ModuleRead])
def list_modules(
    db: Session = Depends(deps.get_db),
    _: User = Depends(deps.get_current_user),
) -> list[ModuleRead]:
    """Return published modules in course order."""

    return CatalogService(db).list_modules()


@router.get("/{module_id}", response_model=ModuleRead)
def read_module(
    module_id: int,
    db: Session = Depends(deps.get_db),
    _: User = Depends(deps.get_current_user),
) -> ModuleRead:
    try:
        return CatalogService(db).get_module(module_id)
    except NotFoundError as exc:
        raise handle_not_found(exc) from exc


@router.get("/{module_id}/quizzes", response_model=list[QuizRead])
def list_module_quizzes(
    module_id: int,
    db: Session = Depends(deps.get_db),
    _: User = Depends(deps.get_current_user),
) -> list[QuizRead]:
    try:
        return CatalogService(db).list_quizzes(module_id)
    except NotFoundError as exc:
        raise handle_not_found(exc) from exc
