"""Business simulation usage endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from academy.api import deps
from academy.api.v1.endpoints.award_utils import award_fields
from academy.db.models.user import User
from academy.schemas import SimulationUsageRead, SimulationUseResponse
from academy.services.activity import ActivityService
from academy.utils.exceptions import AcademyException, to_http_exception

router = APIRouter(prefix="/simulations", tags=["simulations"])


@router.post(
    "/{simulation_type}/use",
    response_model=SimulationUseResponse,
    status_code=status.HTTP_201_CREATED,
)
def use_simulation(
    simulation_type: str = Path(min_length=1, max_length=100),
    db: Session = Depends(deps.get_db),
    current_user: User = Depends(deps.get_current_user),
    service: ActivityService = Depends(deps.get_activity_service),
) -> SimulationUseResponse:
    try:
        outcome = service.record_simulation_use(current_user.id, simulation_type)
    except AcademyException as exc:
        raise to_http_exception(exc) from exc

    return SimulationUseResponse(
        usage=SimulationUsageRead.model_validate(outcome.item),
        **award_fields(db, current_user.id, outcome),
    )
