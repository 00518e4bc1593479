"""
Core business logic modules for Interview Coach

Contains:
- Session Controller: State machine for one practice session
- Session Manager: In-memory session registry
- Gemini Client: AI question and feedback generation
- Resume Parser: PDF text extraction
- Speech: Speech capture model and pace feedback
"""

from interview_coach.core.ai_client import GeminiClient
from interview_coach.core.resume_parser import ResumeParser
from interview_coach.core.session_controller import SessionController
from interview_coach.core.session_manager import SessionManager
from interview_coach.core.speech import SpeechCapture, evaluate_pace

__all__ = [
    "GeminiClient",
    "ResumeParser",
    "SessionController",
    "SessionManager",
    "SpeechCapture",
    "evaluate_pace",
]
