"""Chat turns and the identity data supplied before screening."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from career_coach.models.common import CamelModel


class Message(CamelModel):
    role: Literal["user", "model"]
    text: str
    timestamp: datetime = Field(default_factory=datetime.now)


class PersonalData(CamelModel):
    """Ground truth typed by the user; never produced by the model."""

    full_name: str
    email: str
    phone: str
    address: str
    linkedin: str | None = None
    github: str | None = None
    portfolio: str | None = None
