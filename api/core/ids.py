"""
Row id bounds. Ids are BIGINT columns, so anything past int64 is bad input.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Path

MAX_ID = 2**63 - 1
MIN_ID = -(2**63)

# Path segment id. Out-of-range values fail validation like non-numeric ones.
PathId = Annotated[int, Path(ge=MIN_ID, le=MAX_ID)]


def in_id_range(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID
