"""
Interview session and transcript models for Interview Coach
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from interview_coach.models.report import FeedbackReport


class Speaker(str, Enum):
    """Who said a transcript line."""

    AI = "ai"
    USER = "user"


class SessionPhase(str, Enum):
    """Session state machine phases. Each phase drives one UI view."""

    SETUP = "setup"  # Collecting resume + job description
    INTERVIEW = "interview"  # Question/answer turns
    LOADING = "loading"  # Generating the feedback report
    FEEDBACK = "feedback"  # Report ready


class InterviewMessage(BaseModel):
    """A single transcript line. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    speaker: Speaker
    text: str


class SessionContext(BaseModel):
    """
    Complete state of one practice session.

    Transitions never mutate a context in place; they return an updated
    copy (see core.state_transitions).
    """

    model_config = ConfigDict(frozen=True)

    phase: SessionPhase = SessionPhase.SETUP
    resume_text: str = ""
    job_description: str = ""
    transcript: tuple[InterviewMessage, ...] = Field(default_factory=tuple)
    feedback_report: FeedbackReport | None = None
    is_loading: bool = False
    error: str | None = None

    @property
    def last_message(self) -> InterviewMessage | None:
        """Most recent transcript line, if any."""
        return self.transcript[-1] if self.transcript else None

    @property
    def turn_count(self) -> int:
        """Number of answers the user has given so far."""
        return sum(1 for message in self.transcript if message.speaker == Speaker.USER)
