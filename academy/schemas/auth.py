"""Login response and JWT claim models."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class Token(BaseModel):
    """Bearer pair issued at login.

    ``role`` lets the client pick the student or admin dashboard without a
    second round trip; ``expires_in`` is the access token lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int
    role: Literal["student", "admin"]


class TokenPayload(BaseModel):
    sub: uuid.UUID
    exp: datetime
    type: Literal["access", "refresh"]
