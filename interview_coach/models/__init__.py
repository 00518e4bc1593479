"""
Data models and schemas for Interview Coach

Contains Pydantic models for:
- Interview sessions and transcripts
- Feedback reports
"""

from interview_coach.models.interview import (
    InterviewMessage,
    SessionContext,
    SessionPhase,
    Speaker,
)
from interview_coach.models.report import (
    FEEDBACK_RESPONSE_SCHEMA,
    FeedbackReport,
    FeedbackSection,
    OverallScore,
    ScoreBand,
)

__all__ = [
    # Interview
    "InterviewMessage",
    "SessionContext",
    "SessionPhase",
    "Speaker",
    # Report
    "FEEDBACK_RESPONSE_SCHEMA",
    "FeedbackReport",
    "FeedbackSection",
    "OverallScore",
    "ScoreBand",
]
