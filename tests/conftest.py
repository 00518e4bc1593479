"""
Shared fixtures for Interview Coach tests.
"""

import pytest

from interview_coach.config.settings import Settings
from interview_coach.core.resume_parser import ResumeParser
from interview_coach.core.session_controller import SessionController
from interview_coach.errors import AIRequestError
from interview_coach.models.report import FeedbackReport

REPORT_PAYLOAD = {
    "overallScore": {"score": 78, "summary": "Solid answers with room to grow."},
    "answerQuality": {
        "score": 80,
        "analysis": "Relevant examples from the outage story.",
        "suggestions": "Quantify the impact of your fixes.",
    },
    "communicationSkills": {
        "score": 72,
        "analysis": "Clear but sometimes rambling.",
        "suggestions": "Lead with the conclusion.",
    },
    "contentAndStrategy": {
        "score": 88,
        "analysis": "Good alignment with the SRE role.",
        "suggestions": "Mention on-call process improvements.",
    },
}


class FakeAIClient:
    """
    Stand-in for GeminiClient.

    Each ``*_results`` list is consumed in order; an Exception instance in
    the list is raised instead of returned.
    """

    def __init__(self, first=None, next_questions=None, feedback=None):
        self.first_results = list(first or ["Tell me about yourself."])
        self.next_results = list(next_questions or [])
        self.feedback_results = list(feedback or [])
        self.prompts: list[tuple[str, str]] = []
        self.schemas: list[dict] = []
        self.closed = False

    def _pop(self, results):
        if not results:
            raise AIRequestError("No fake response queued")
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def request_first_question(self, prompt: str) -> str:
        self.prompts.append(("first", prompt))
        return self._pop(self.first_results)

    async def request_next_question(self, prompt: str) -> str:
        self.prompts.append(("next", prompt))
        return self._pop(self.next_results)

    async def request_feedback(self, prompt: str, schema: dict) -> FeedbackReport:
        self.prompts.append(("feedback", prompt))
        self.schemas.append(schema)
        return self._pop(self.feedback_results)

    async def close(self):
        self.closed = True


class StubResumeParser(ResumeParser):
    """Treats uploaded bytes as UTF-8 text instead of parsing a PDF."""

    def extract_text(self, data: bytes) -> str:
        return data.decode("utf-8")


@pytest.fixture
def report() -> FeedbackReport:
    return FeedbackReport.model_validate(REPORT_PAYLOAD)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        gemini_api_key="test-key",
        gemini_base_url="https://gemini.test/v1beta",
        gemini_model="gemini-2.5-pro",
    )


@pytest.fixture
def ai_client() -> FakeAIClient:
    return FakeAIClient()


@pytest.fixture
def controller(ai_client) -> SessionController:
    return SessionController(ai_client=ai_client, resume_parser=StubResumeParser())
