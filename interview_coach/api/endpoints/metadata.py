"""
Metadata API endpoints

Provides reference data for:
- Session phases and the actions each accepts
- Score bands
- The feedback report schema
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from interview_coach.core.state_transitions import ACTION_PHASES
from interview_coach.models.interview import SessionPhase
from interview_coach.models.report import FEEDBACK_RESPONSE_SCHEMA, ScoreBand

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class PhaseInfo(BaseModel):
    """Information about a session phase."""
    id: str
    actions: list[str]


class ScoreBandInfo(BaseModel):
    """Information about a score band."""
    id: str
    min_score: int
    color: str


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/phases")
async def get_phases() -> list[PhaseInfo]:
    """Get all session phases with the actions valid in each."""
    return [
        PhaseInfo(
            id=phase.value,
            actions=[action for action, phases in ACTION_PHASES.items() if phase in phases],
        )
        for phase in SessionPhase
    ]


@router.get("/score-bands")
async def get_score_bands() -> list[ScoreBandInfo]:
    """Get score bands used to color report scores."""
    return [
        ScoreBandInfo(id=band.value, min_score=band.min_score, color=band.display_color)
        for band in ScoreBand
    ]


@router.get("/feedback-schema")
async def get_feedback_schema() -> dict[str, Any]:
    """Get the JSON schema the feedback report follows."""
    return FEEDBACK_RESPONSE_SCHEMA
