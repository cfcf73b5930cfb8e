"""Pydantic models for map surveys and API requests."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Puzzle inputs run to ~15k characters
MAX_DIRECTIONS_LENGTH = 100_000


class SurveySummary(BaseModel):
    survey_id: str
    max_doors: int
    far_rooms: int
    rooms: int
    doors: int
    width: int
    height: int
    created_at: str


# ---------------------------------------------------------------------------
# API request models
# ---------------------------------------------------------------------------


class DirectionsRequest(BaseModel):
    directions: str = Field(max_length=MAX_DIRECTIONS_LENGTH)
