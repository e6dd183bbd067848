"""
Team API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TeamRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    logo: str | None = Field(default="", max_length=2048)
