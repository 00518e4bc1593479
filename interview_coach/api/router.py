"""
Main API router for Interview Coach

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from interview_coach.api.endpoints import sessions, speech, metadata

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    sessions.router,
    prefix="/sessions",
    tags=["Sessions"]
)

api_router.include_router(
    speech.router,
    prefix="/speech",
    tags=["Speech"]
)

api_router.include_router(
    metadata.router,
    prefix="/metadata",
    tags=["Metadata"]
)
