"""
State transitions for interview sessions.

Pure functions ``(context, ...) -> new context``. They never touch the
network; the session controller issues the AI call between a ``begin_*``
transition and the matching ``complete_*`` / ``fail_*`` transition.

    SETUP --start--> INTERVIEW --end--> LOADING --report--> FEEDBACK
                     ^   |  (answer)       |
                     +---+                 +--failure--> INTERVIEW
    any phase --start_new--> SETUP
"""

from interview_coach.errors import SessionBusyError, StateTransitionError
from interview_coach.models.interview import (
    InterviewMessage,
    SessionContext,
    SessionPhase,
    Speaker,
)
from interview_coach.models.report import FeedbackReport

# Phases in which each user action is accepted
ACTION_PHASES: dict[str, list[SessionPhase]] = {
    "start_interview": [SessionPhase.SETUP],
    "submit_answer": [SessionPhase.INTERVIEW],
    "end_interview": [SessionPhase.INTERVIEW],
    "start_new": list(SessionPhase),
}


def initial_context(job_description: str = "") -> SessionContext:
    """Context for a fresh session."""
    return SessionContext(job_description=job_description)


def ensure_action_allowed(context: SessionContext, action: str) -> None:
    """
    Guard a user action.

    Raises:
        SessionBusyError: A request is already in flight
        StateTransitionError: Action not valid in the current phase
    """
    if context.is_loading:
        raise SessionBusyError(
            f"Cannot {action} while a request is in progress",
            user_message="Please wait for the current request to finish.",
        )

    valid_phases = ACTION_PHASES[action]
    if context.phase not in valid_phases:
        raise StateTransitionError(
            f"Cannot {action} in phase {context.phase.value}. "
            f"Valid phases: {[p.value for p in valid_phases]}"
        )


def with_error(context: SessionContext, message: str) -> SessionContext:
    """Record a user-facing error without changing phase."""
    return context.model_copy(update={"error": message})


# =============================================================================
# START INTERVIEW
# =============================================================================

def begin_start(context: SessionContext, resume: str, job_description: str) -> SessionContext:
    """Store inputs, clear the previous round and mark the request in flight."""
    return context.model_copy(update={
        "resume_text": resume,
        "job_description": job_description,
        "transcript": (),
        "feedback_report": None,
        "is_loading": True,
        "error": None,
    })


def complete_start(context: SessionContext, first_question: str) -> SessionContext:
    """First question arrived: open the interview."""
    return context.model_copy(update={
        "transcript": (InterviewMessage(speaker=Speaker.AI, text=first_question),),
        "phase": SessionPhase.INTERVIEW,
        "is_loading": False,
    })


def fail_start(context: SessionContext, message: str) -> SessionContext:
    """First question failed: stay in setup."""
    return context.model_copy(update={
        "phase": SessionPhase.SETUP,
        "is_loading": False,
        "error": message,
    })


def begin_extraction(context: SessionContext) -> SessionContext:
    """Hold the session busy while the resume is being read."""
    return context.model_copy(update={
        "is_loading": True,
        "error": None,
    })


def fail_extraction(context: SessionContext, message: str) -> SessionContext:
    """Resume could not be read: stay in setup, nothing else changes."""
    return context.model_copy(update={
        "is_loading": False,
        "error": message,
    })


# =============================================================================
# SUBMIT ANSWER
# =============================================================================

def begin_answer(context: SessionContext, response_text: str) -> SessionContext:
    """Append the user's answer immediately and mark the request in flight."""
    return context.model_copy(update={
        "transcript": context.transcript + (InterviewMessage(speaker=Speaker.USER, text=response_text),),
        "is_loading": True,
        "error": None,
    })


def complete_answer(context: SessionContext, next_question: str) -> SessionContext:
    """Next question arrived: append it."""
    return context.model_copy(update={
        "transcript": context.transcript + (InterviewMessage(speaker=Speaker.AI, text=next_question),),
        "is_loading": False,
    })


def fail_answer(context: SessionContext, message: str) -> SessionContext:
    """Next question failed: keep the user's answer, add no AI message."""
    return context.model_copy(update={
        "is_loading": False,
        "error": message,
    })


# =============================================================================
# END INTERVIEW
# =============================================================================

def begin_end(context: SessionContext) -> SessionContext:
    """Move to LOADING while the report is generated."""
    return context.model_copy(update={
        "phase": SessionPhase.LOADING,
        "is_loading": True,
        "error": None,
    })


def complete_end(context: SessionContext, report: FeedbackReport) -> SessionContext:
    """Report arrived: show it."""
    return context.model_copy(update={
        "feedback_report": report,
        "phase": SessionPhase.FEEDBACK,
        "is_loading": False,
    })


def fail_end(context: SessionContext, message: str) -> SessionContext:
    """Report failed: back to the interview, transcript untouched."""
    return context.model_copy(update={
        "phase": SessionPhase.INTERVIEW,
        "is_loading": False,
        "error": message,
    })


# =============================================================================
# START NEW
# =============================================================================

def start_new(context: SessionContext) -> SessionContext:
    """Back to setup. The job description is kept for the next round."""
    return initial_context(job_description=context.job_description)
