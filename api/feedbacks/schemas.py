"""
Feedback API schemas (request models).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from core.ids import MAX_ID

TargetType = Literal["person", "team"]


class FeedbackRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=10_000)
    target_type: TargetType
    target_id: int = Field(..., ge=1, le=MAX_ID)
