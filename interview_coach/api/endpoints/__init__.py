"""
API endpoint modules for Interview Coach
"""

from interview_coach.api.endpoints import sessions, speech, metadata

__all__ = ["sessions", "speech", "metadata"]
