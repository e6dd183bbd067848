"""
Person API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic.networks import validate_email

from core.ids import MAX_ID


class PersonRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    picture: str | None = Field(default="", max_length=2048)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        """
        Validate the address format but keep it exactly as sent.
        """
        _, normalized = validate_email(value)
        # Rejects the "Name <addr>" form, which validate_email also accepts.
        if normalized.lower() != value.lower():
            raise ValueError("value is not a valid email address")
        return value


class AssignToTeamRequest(BaseModel):
    person_id: int = Field(..., ge=1, le=MAX_ID)
    team_id: int = Field(..., ge=1, le=MAX_ID)
