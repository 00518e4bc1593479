"""
Feedback report models for Interview Coach

Defines the structure of the end-of-interview report and the JSON
schema the AI service is asked to fill in.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class ScoreBand(str, Enum):
    """Display band for a 0-100 score."""

    STRONG = "strong"  # 85-100
    FAIR = "fair"  # 60-84
    WEAK = "weak"  # 0-59

    @classmethod
    def for_score(cls, score: float) -> "ScoreBand":
        """Map a score to its band."""
        for band in (cls.STRONG, cls.FAIR):
            if score >= band.min_score:
                return band
        return cls.WEAK

    @property
    def min_score(self) -> int:
        """Lowest score in the band."""
        thresholds = {
            "strong": 85,
            "fair": 60,
            "weak": 0,
        }
        return thresholds[self.value]

    @property
    def display_color(self) -> str:
        """Color hint for the UI."""
        colors = {
            "strong": "green",
            "fair": "yellow",
            "weak": "red",
        }
        return colors[self.value]


def _require_number(value: Any) -> Any:
    """Reject anything but a JSON number (no bools, no numeric strings)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"score must be a number, got {type(value).__name__}")
    return value


# 0-100 score as returned by the AI service
Score = Annotated[float, BeforeValidator(_require_number), Field(ge=0, le=100)]


class OverallScore(BaseModel):
    """Headline score and summary."""

    model_config = ConfigDict(frozen=True)

    score: Score
    summary: str


class FeedbackSection(BaseModel):
    """One scored section of the report."""

    model_config = ConfigDict(frozen=True)

    score: Score
    analysis: str
    suggestions: str


class FeedbackReport(BaseModel):
    """Complete feedback report. Field names follow the AI JSON contract."""

    model_config = ConfigDict(frozen=True)

    overallScore: OverallScore
    answerQuality: FeedbackSection
    communicationSkills: FeedbackSection
    contentAndStrategy: FeedbackSection

    def score_bands(self) -> dict[str, ScoreBand]:
        """Band for every scored section, keyed by section name."""
        return {
            "overallScore": ScoreBand.for_score(self.overallScore.score),
            "answerQuality": ScoreBand.for_score(self.answerQuality.score),
            "communicationSkills": ScoreBand.for_score(self.communicationSkills.score),
            "contentAndStrategy": ScoreBand.for_score(self.contentAndStrategy.score),
        }


def _section_schema(score_description: str, analysis: str, suggestions: str) -> dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": {
            "score": {"type": "NUMBER", "description": score_description},
            "analysis": {"type": "STRING", "description": analysis},
            "suggestions": {"type": "STRING", "description": suggestions},
        },
        "required": ["score", "analysis", "suggestions"],
    }


# Response schema sent with the feedback request (Gemini OpenAPI subset)
FEEDBACK_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "overallScore": {
            "type": "OBJECT",
            "properties": {
                "score": {"type": "NUMBER", "description": "A score from 0-100."},
                "summary": {"type": "STRING", "description": "A brief summary of the performance."},
            },
            "required": ["score", "summary"],
        },
        "answerQuality": _section_schema(
            "A score from 0-100 for answer quality.",
            "Detailed analysis on relevance, use of examples, technical accuracy.",
            "Actionable advice for improving answer quality.",
        ),
        "communicationSkills": _section_schema(
            "A score from 0-100 for communication skills.",
            "Analysis of clarity, articulation, and response structure.",
            "Tips for better communication.",
        ),
        "contentAndStrategy": _section_schema(
            "A score from 0-100 for content and strategy.",
            "Analysis of alignment with job description and resume, and STAR method usage.",
            "Suggest specific skills or projects to highlight and provide a better answer example.",
        ),
    },
    "required": ["overallScore", "answerQuality", "communicationSkills", "contentAndStrategy"],
}
