"""
Session API endpoints

Handles the practice session lifecycle:
- Creating sessions
- Starting interviews (resume upload + job description)
- Submitting answers
- Ending interviews and fetching the feedback report
- Starting a new round

AI, validation and resume errors are reported in the session's
``error`` field. Actions rejected by the state machine return 409.
"""

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from interview_coach.api.dependencies import get_session_manager, get_session_or_404
from interview_coach.core.session_controller import SessionController
from interview_coach.errors import StateTransitionError
from interview_coach.models.interview import InterviewMessage, SessionPhase
from interview_coach.models.report import FeedbackReport, ScoreBand

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class SessionView(BaseModel):
    """Everything the UI needs to render the current phase."""
    session_id: str
    phase: SessionPhase
    transcript: list[InterviewMessage]
    feedback_report: FeedbackReport | None = None
    is_loading: bool
    error: str | None = None
    job_description: str
    resume_loaded: bool


class SubmitAnswerRequest(BaseModel):
    """Request model for submitting an answer."""
    text: str


class ReportResponse(BaseModel):
    """Feedback report with display bands."""
    session_id: str
    report: FeedbackReport
    score_bands: dict[str, ScoreBand]


def _view(session: SessionController) -> SessionView:
    context = session.context
    return SessionView(
        session_id=session.session_id,
        phase=context.phase,
        transcript=list(context.transcript),
        feedback_report=context.feedback_report,
        is_loading=context.is_loading,
        error=context.error,
        job_description=context.job_description,
        resume_loaded=bool(context.resume_text),
    )


def _conflict(error: StateTransitionError) -> HTTPException:
    return HTTPException(status_code=409, detail=str(error))


# ============================================================================
# REST ENDPOINTS
# ============================================================================

@router.post("", response_model=SessionView, status_code=201)
async def create_session() -> SessionView:
    """Create a new practice session in the setup phase."""
    session = get_session_manager().create_session()
    return _view(session)


@router.get("/{session_id}", response_model=SessionView)
async def get_session(session_id: str) -> SessionView:
    """Get the current state of a session."""
    return _view(get_session_or_404(session_id))


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str) -> None:
    """Drop a session."""
    if not get_session_manager().delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/{session_id}/start", response_model=SessionView)
async def start_interview(
    session_id: str,
    job_description: str = Form(""),
    resume: UploadFile | None = File(None),
) -> SessionView:
    """
    Start the interview.

    Extracts the resume text and asks for the first question.
    """
    session = get_session_or_404(session_id)

    # Read one byte past the limit so oversized uploads are rejected without
    # buffering the whole file
    max_bytes = session.resume_parser.max_bytes
    data = await resume.read(max_bytes + 1) if resume else None

    try:
        await session.start_interview_from_upload(
            job_description=job_description,
            filename=resume.filename if resume else None,
            content_type=resume.content_type if resume else None,
            data=data,
        )
    except StateTransitionError as e:
        raise _conflict(e)

    return _view(session)


@router.post("/{session_id}/respond", response_model=SessionView)
async def submit_answer(session_id: str, request: SubmitAnswerRequest) -> SessionView:
    """Submit an answer and receive the next question."""
    session = get_session_or_404(session_id)

    try:
        await session.submit_answer(request.text)
    except StateTransitionError as e:
        raise _conflict(e)

    return _view(session)


@router.post("/{session_id}/end", response_model=SessionView)
async def end_interview(session_id: str) -> SessionView:
    """End the interview and generate the feedback report."""
    session = get_session_or_404(session_id)

    try:
        await session.end_interview()
    except StateTransitionError as e:
        raise _conflict(e)

    return _view(session)


@router.post("/{session_id}/new", response_model=SessionView)
async def start_new(session_id: str) -> SessionView:
    """Start a new practice round, keeping the job description."""
    session = get_session_or_404(session_id)

    try:
        session.start_new()
    except StateTransitionError as e:
        raise _conflict(e)

    return _view(session)


@router.get("/{session_id}/report", response_model=ReportResponse)
async def get_report(session_id: str) -> ReportResponse:
    """Get the feedback report of a finished interview."""
    session = get_session_or_404(session_id)
    report = session.context.feedback_report

    if report is None:
        raise HTTPException(
            status_code=409,
            detail=f"No feedback report yet. Current phase: {session.context.phase.value}"
        )

    return ReportResponse(
        session_id=session_id,
        report=report,
        score_bands=report.score_bands(),
    )
