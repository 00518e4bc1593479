"""
AI Client for Interview Coach

Wraps the three calls the interview needs:
- First question
- Next (follow-up) question
- Structured feedback report

Uses the Gemini generateContent REST endpoint. Calls are single-shot:
no retries, no caching. Every call costs one request of API quota.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from interview_coach.config.settings import Settings, get_settings
from interview_coach.errors import AIRequestError, AIResponseFormatError
from interview_coach.models.report import FeedbackReport

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Thin facade over the Gemini API.

    Text responses are trimmed. The feedback response is treated as
    untrusted text: it is parsed and validated before it is returned.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Application settings (defaults to cached settings)
            transport: Optional httpx transport, used to fake the API in tests
        """
        self.settings = settings or get_settings()
        self.model = self.settings.gemini_model

        # HTTP client for API calls
        self.client = httpx.AsyncClient(
            base_url=self.settings.gemini_base_url.rstrip("/"),
            headers={
                "x-goog-api-key": self.settings.gemini_api_key,
                "Content-Type": "application/json",
            },
            timeout=self.settings.request_timeout_seconds,
            transport=transport,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    # =========================================================================
    # CORE AI OPERATIONS
    # =========================================================================

    def _extract_content(self, result: dict) -> str:
        """Extract text content from a generateContent response."""
        candidates = result.get("candidates") or []
        if not candidates:
            feedback = result.get("promptFeedback", {})
            raise AIRequestError(f"Gemini returned no candidates: {feedback}")

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        text_parts = []
        for part in parts:
            if isinstance(part, dict) and "text" in part:
                text_parts.append(part["text"])

        text = "".join(text_parts).strip()
        if not text:
            finish_reason = candidate.get("finishReason", "UNKNOWN")
            logger.error(f"Gemini returned an empty candidate (finishReason={finish_reason})")
            raise AIRequestError(f"Gemini returned no text (finishReason={finish_reason})")
        return text

    async def _generate(
        self,
        prompt: str,
        generation_config: dict[str, Any] | None = None,
        call_name: str = "generate",
    ) -> str:
        """
        Call Gemini with a single-turn prompt.

        Args:
            prompt: The prompt to send
            generation_config: Extra generationConfig fields
            call_name: Label used in logs

        Returns:
            Trimmed response text

        Raises:
            AIRequestError: On missing API key, HTTP or network failure
        """
        if not self.settings.gemini_api_key:
            raise AIRequestError("GEMINI_API_KEY is not configured")

        config: dict[str, Any] = {"temperature": self.settings.gemini_temperature}
        if generation_config:
            config.update(generation_config)

        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "generationConfig": config,
        }

        logger.debug(f"{call_name}: sending prompt of {len(prompt)} chars to {self.model}")

        try:
            response = await self.client.post(
                f"/models/{self.model}:generateContent",
                json=payload,
            )
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Gemini API error during {call_name}: {e}")
            raise AIRequestError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Gemini returned a non-JSON envelope during {call_name}: {e}")
            raise AIRequestError("Gemini returned an unreadable response") from e

        return self._extract_content(result)

    # =========================================================================
    # INTERVIEW QUESTIONS
    # =========================================================================

    async def request_first_question(self, prompt: str) -> str:
        """Ask Gemini for the opening interview question."""
        return await self._generate(prompt, call_name="first_question")

    async def request_next_question(self, prompt: str) -> str:
        """Ask Gemini for the next follow-up question."""
        return await self._generate(prompt, call_name="next_question")

    # =========================================================================
    # FEEDBACK REPORT
    # =========================================================================

    async def request_feedback(self, prompt: str, schema: dict[str, Any]) -> FeedbackReport:
        """
        Ask Gemini for the structured feedback report.

        Args:
            prompt: Rendered feedback prompt
            schema: Response schema constraining the output shape

        Returns:
            Validated FeedbackReport

        Raises:
            AIRequestError: On network/service failure
            AIResponseFormatError: If the payload is not a valid report
        """
        response = await self._generate(
            prompt,
            generation_config={
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
            call_name="feedback_report",
        )
        return self._parse_feedback_response(response)

    def _parse_feedback_response(self, response: str) -> FeedbackReport:
        """Parse and validate the feedback JSON."""
        try:
            data = json.loads(response)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse feedback JSON: {e}")
            logger.debug(f"Received text: {response[:500]}")
            raise AIResponseFormatError(f"Feedback is not valid JSON: {e}") from e

        try:
            return FeedbackReport.model_validate(data)
        except ValidationError as e:
            logger.error(f"Feedback JSON does not match the report contract: {e}")
            raise AIResponseFormatError(f"Feedback does not match the report contract: {e}") from e
