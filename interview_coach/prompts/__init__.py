"""
AI prompt templates for Interview Coach

Contains structured prompts for:
- First question generation
- Follow-up question generation
- Feedback report generation
"""

from interview_coach.prompts.interviewer import InterviewerPrompts
from interview_coach.prompts.report import ReportPrompts
from interview_coach.prompts.transcript import format_transcript

__all__ = [
    "InterviewerPrompts",
    "ReportPrompts",
    "format_transcript",
]
