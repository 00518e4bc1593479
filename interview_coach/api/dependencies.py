"""
API Dependencies

Provides dependency injection for API endpoints.
Manages the singleton session manager.
"""

from fastapi import HTTPException

from interview_coach.config.settings import get_settings
from interview_coach.core.ai_client import GeminiClient
from interview_coach.core.resume_parser import ResumeParser
from interview_coach.core.session_controller import SessionController
from interview_coach.core.session_manager import SessionManager


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_session_manager: SessionManager | None = None


def get_session_manager() -> SessionManager:
    """
    Get the session manager singleton.

    Lazily initializes the AI client and resume parser.
    """
    global _session_manager

    if _session_manager is None:
        settings = get_settings()
        _session_manager = SessionManager(
            ai_client=GeminiClient(settings),
            resume_parser=ResumeParser(max_bytes=settings.max_resume_bytes),
            idle_timeout_seconds=settings.session_idle_timeout_seconds,
        )

    return _session_manager


def get_session_or_404(session_id: str) -> SessionController:
    """Look up a session, raising 404 if it does not exist."""
    session = get_session_manager().get_session(session_id)

    if not session:
        raise HTTPException(status_code=404, detail="Session not found")

    return session


async def cleanup():
    """Cleanup resources on shutdown."""
    global _session_manager

    if _session_manager:
        await _session_manager.close()

    _session_manager = None
