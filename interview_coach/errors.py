"""
Error taxonomy for Interview Coach.

The four session errors (validation, resume extraction, AI request,
AI response format) are caught by the session controller and shown to
the user as a single message. Guard errors are raised to the caller.
"""


class CoachError(Exception):
    """Base class for all Interview Coach errors."""

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(message)
        self.user_message = user_message or message


class InputValidationError(CoachError):
    """Setup or answer input is missing or malformed."""


class ResumeExtractionError(CoachError):
    """The uploaded resume PDF could not be read."""


class AIRequestError(CoachError):
    """The AI service call failed (network, HTTP status, timeout)."""


class AIResponseFormatError(CoachError):
    """The AI service returned a payload that does not match the contract."""


class StateTransitionError(CoachError):
    """Raised when an action is not valid in the current session phase."""


class SessionBusyError(StateTransitionError):
    """Raised when an action arrives while a request is already in flight."""
