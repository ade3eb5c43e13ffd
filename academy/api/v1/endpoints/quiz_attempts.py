"""Quiz attempt endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.api import deps
from academy.api.v1.endpoints.award_utils import award_fields
from academy.db.models.user import User
from academy.schemas import QuizAttemptCreate, QuizAttemptRead, QuizAttemptResponse
from academy.services.activity import ActivityService
from academy.utils.exceptions import AcademyException, to_http_exception

router = APIRouter(prefix="/quiz-attempts", tags=["quizzes"])


@router.post("", response_model=QuizAttemptResponse, status_code=status.HTTP_201_CREATED)
def submit_quiz_attempt(
    payload: QuizAttemptCreate,
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    service: ActivityService = Depends(deps.get_activity_service),
) -> QuizAttemptResponse:
    """Store a scored attempt. The first passing attempt on a quiz earns its XP."""

    try:
        outcome = service.submit_quiz_attempt(
            current_user.id, payload.quiz_id, score=payload.score, answers=payload.answers
        )
    except AcademyException as exc:
        raise to_http_exception(exc) from exc

    return QuizAttemptResponse(
        attempt=QuizAttemptRead.model_validate(outcome.item),
        **award_fields(db, current_user.id, outcome),
    )


@router.get("", response_model=list[QuizAttemptRead])
def list_quiz_attempts(
    current_user: User = Depends(deps.get_current_user),
    service: ActivityService = Depends(deps.get_activity_service),
) -> list[QuizAttemptRead]:
    return service.list_quiz_attempts(current_user.id)
