"""
Speech API endpoints

Speech recognition runs in the browser; the server only scores pace
and maps recognition errors to user messages.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from interview_coach.core.speech import PaceFeedback, SpeechErrorKind, evaluate_pace

router = APIRouter()


class PaceRequest(BaseModel):
    """Running transcript of the current recording."""
    transcript: str
    elapsed_seconds: float = Field(..., ge=0)


class SpeechErrorRequest(BaseModel):
    """Raw error code reported by the browser recognizer."""
    error: str


class SpeechErrorResponse(BaseModel):
    kind: SpeechErrorKind
    message: str


@router.post("/pace", response_model=PaceFeedback)
async def speaking_pace(request: PaceRequest) -> PaceFeedback:
    """Words-per-minute feedback for the recording in progress."""
    return evaluate_pace(request.transcript, request.elapsed_seconds)


@router.post("/error", response_model=SpeechErrorResponse)
async def speech_error(request: SpeechErrorRequest) -> SpeechErrorResponse:
    """Translate a recognition error code into a user message."""
    kind = SpeechErrorKind.parse(request.error)
    return SpeechErrorResponse(kind=kind, message=kind.user_message)
