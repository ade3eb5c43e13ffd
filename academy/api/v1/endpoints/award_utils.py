"""Helpers shared by endpoints that grant XP."""
from __future__ import annotations

import uuid
from typing import Any, Dict

from sqlalchemy.orm import Session

from academy.schemas import BadgeAwardRead, ProgressRecordRead
from academy.services.activity import ActivityOutcome
from academy.services.notifications import NotificationService


def award_fields(db: Session, user_id: uuid.UUID, outcome: ActivityOutcome) -> Dict[str, Any]:
    """Notify the learner about the outcome and return the award part of the response."""

    NotificationService(db).notify_award(user_id, outcome.award, outcome.new_badges)
    return {
        "award": ProgressRecordRead.from_record(outcome.award) if outcome.award else None,
        "new_badges": [BadgeAwardRead.model_validate(award) for award in outcome.new_badges],
    }
