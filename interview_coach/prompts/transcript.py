"""
Transcript serialization shared by all prompt templates.
"""

from collections.abc import Iterable

from interview_coach.models.interview import InterviewMessage


def format_transcript(transcript: Iterable[InterviewMessage]) -> str:
    """
    Render a transcript as prompt text.

    One ``SPEAKER: text`` block per message, in chronological order,
    separated by a blank line. An empty transcript renders as "".
    """
    return "\n\n".join(
        f"{message.speaker.value.upper()}: {message.text}"
        for message in transcript
    )
