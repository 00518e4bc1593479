"""
Session Manager - in-memory registry of practice sessions.

Each browser tab gets its own session and controller. Sessions live in
process memory only and are lost on restart. Sessions idle for longer
than the configured timeout are dropped on the next registry access.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from interview_coach.core.resume_parser import ResumeParser
from interview_coach.core.session_controller import SessionController

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates, looks up, expires and drops session controllers."""

    def __init__(
        self,
        ai_client: Any,
        resume_parser: ResumeParser | None = None,
        idle_timeout_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            ai_client: Shared AI client (GeminiClient)
            resume_parser: Shared resume parser
            idle_timeout_seconds: Drop sessions not accessed for this long
            clock: Monotonic time source
        """
        self.ai_client = ai_client
        self.resume_parser = resume_parser or ResumeParser()
        self.idle_timeout_seconds = idle_timeout_seconds
        self._clock = clock
        self._sessions: dict[str, SessionController] = {}
        self._last_access: dict[str, float] = {}

    def create_session(self) -> SessionController:
        """Create a new session in SETUP."""
        self.purge_expired()

        controller = SessionController(
            ai_client=self.ai_client,
            resume_parser=self.resume_parser,
        )
        self._sessions[controller.session_id] = controller
        self._last_access[controller.session_id] = self._clock()
        logger.info(f"Created session: {controller.session_id}")
        return controller

    def get_session(self, session_id: str) -> SessionController | None:
        """Get a session by ID and mark it as active."""
        self.purge_expired()

        session = self._sessions.get(session_id)
        if session:
            self._last_access[session_id] = self._clock()
        return session

    def delete_session(self, session_id: str) -> bool:
        """Drop a session. Returns False if it did not exist."""
        removed = self._sessions.pop(session_id, None)
        self._last_access.pop(session_id, None)
        if removed:
            logger.info(f"Deleted session: {session_id}")
        return removed is not None

    def purge_expired(self) -> int:
        """
        Drop idle sessions.

        A session with a request in flight is never dropped.

        Returns:
            Number of sessions removed
        """
        cutoff = self._clock() - self.idle_timeout_seconds
        expired = [
            session_id
            for session_id, last_access in self._last_access.items()
            if last_access < cutoff and not self._sessions[session_id].context.is_loading
        ]
        for session_id in expired:
            del self._sessions[session_id]
            del self._last_access[session_id]

        if expired:
            logger.info(f"Expired {len(expired)} idle session(s)")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

    async def close(self):
        """Drop all sessions and release the AI client."""
        self._sessions.clear()
        self._last_access.clear()
        if self.ai_client and hasattr(self.ai_client, "close"):
            await self.ai_client.close()
