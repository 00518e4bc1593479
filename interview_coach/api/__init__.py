"""
API layer for Interview Coach

Contains FastAPI routers for:
- Session lifecycle (start, respond, end, start new)
- Feedback report retrieval
- Speaking pace feedback
- Reference metadata
"""

from interview_coach.api.router import api_router

__all__ = ["api_router"]
