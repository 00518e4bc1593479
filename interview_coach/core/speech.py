"""
Speech input support for Interview Coach

Speech recognition itself runs in the browser and is optional. This
module models the capture session behind a narrow interface and computes
speaking-pace feedback from the running transcript.
"""

import logging
import time
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Pace thresholds (words per minute)
SLOW_WPM = 110
FAST_WPM = 160

# Minimum sample before pace is reported
MIN_PACE_SECONDS = 2.0
MIN_PACE_WORDS = 5


class SpeechErrorKind(str, Enum):
    """Speech recognition error categories reported by the browser."""

    NOT_ALLOWED = "not-allowed"
    SERVICE_NOT_ALLOWED = "service-not-allowed"
    NO_SPEECH = "no-speech"
    NETWORK = "network"
    ABORTED = "aborted"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "SpeechErrorKind":
        """Map a raw browser error code, unknown codes become OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER

    @property
    def user_message(self) -> str:
        """Message shown next to the record button."""
        if self in (SpeechErrorKind.NOT_ALLOWED, SpeechErrorKind.SERVICE_NOT_ALLOWED):
            return "Microphone access denied."
        return "Speech recognition error."


class PaceFeedback(BaseModel):
    """Speaking pace over the current recording."""

    words: int
    elapsed_seconds: float
    wpm: int | None = None
    label: str | None = None
    message: str = ""

    @property
    def is_reported(self) -> bool:
        return self.wpm is not None


def count_words(text: str) -> int:
    return len(text.split())


def evaluate_pace(transcript: str, elapsed_seconds: float) -> PaceFeedback:
    """
    Compute speaking pace.

    Nothing is reported until more than MIN_PACE_SECONDS have passed and
    more than MIN_PACE_WORDS words were spoken.
    """
    words = count_words(transcript)
    feedback = PaceFeedback(words=words, elapsed_seconds=elapsed_seconds)

    if elapsed_seconds <= MIN_PACE_SECONDS or words <= MIN_PACE_WORDS:
        return feedback

    wpm = round(words / elapsed_seconds * 60)
    if wpm < SLOW_WPM:
        label = "A bit slow"
    elif wpm > FAST_WPM:
        label = "A bit fast"
    else:
        label = "Good pace"

    return feedback.model_copy(update={
        "wpm": wpm,
        "label": label,
        "message": f"Pace: {wpm} WPM ({label})",
    })


class SpeechCapture:
    """
    One restartable speech capture.

    Final results are committed; the latest interim result is shown after
    them until it is finalized or replaced. Only ``text`` at submit time
    matters to the interview.

    No route holds a capture: recognition runs in the browser, and this
    class is the reference model the browser client follows for its
    recognition session. The server side of speech is ``evaluate_pace``
    and ``SpeechErrorKind``, both served by ``api/endpoints/speech.py``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._committed: list[str] = []
        self._interim = ""
        self._started_at: float | None = None
        self.is_recording = False
        self.last_error: SpeechErrorKind | None = None

    def start(self) -> None:
        """Begin a new capture. Restarting discards the previous text."""
        self._committed = []
        self._interim = ""
        self._started_at = self._clock()
        self.is_recording = True
        self.last_error = None

    def stop(self) -> None:
        """Stop capturing. Pending interim text is kept as committed."""
        if self._interim:
            self._committed.append(self._interim)
            self._interim = ""
        self.is_recording = False
        self._started_at = None

    def on_interim_text(self, text: str) -> None:
        if self.is_recording:
            self._interim = text

    def on_final(self, text: str) -> None:
        if self.is_recording:
            self._committed.append(text)
            self._interim = ""

    def on_error(self, kind: SpeechErrorKind | str) -> str:
        """Record a recognition error, stop capturing and return its message."""
        if not isinstance(kind, SpeechErrorKind):
            kind = SpeechErrorKind.parse(kind)
        logger.warning(f"Speech recognition error: {kind.value}")
        self.last_error = kind
        self.is_recording = False
        self._started_at = None
        return kind.user_message

    @property
    def committed_text(self) -> str:
        return "".join(self._committed)

    @property
    def text(self) -> str:
        return self.committed_text + self._interim

    def pace(self) -> PaceFeedback:
        """Pace of the capture in progress."""
        elapsed = 0.0 if self._started_at is None else self._clock() - self._started_at
        return evaluate_pace(self.text, elapsed)
