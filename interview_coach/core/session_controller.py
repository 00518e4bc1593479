"""
Session Controller - state machine driving one practice session.

Owns the SessionContext, guards user actions, builds prompts, issues
the AI calls and applies the resulting transitions. AI, validation and
extraction failures never escape: they become the session's single
error message. Guard violations are raised to the caller.
"""

import asyncio
import logging
from typing import Any
from uuid import uuid4

from interview_coach.core import state_transitions as transitions
from interview_coach.core.resume_parser import ResumeParser
from interview_coach.errors import (
    AIResponseFormatError,
    CoachError,
    InputValidationError,
)
from interview_coach.models.interview import SessionContext
from interview_coach.models.report import FEEDBACK_RESPONSE_SCHEMA
from interview_coach.prompts.interviewer import InterviewerPrompts
from interview_coach.prompts.report import ReportPrompts

logger = logging.getLogger(__name__)

# User-facing messages
MISSING_INPUT_MESSAGE = "Please upload a resume and provide the job description."
EMPTY_ANSWER_MESSAGE = "Please enter an answer before submitting."
START_FAILED_MESSAGE = "Failed to start the interview. Please check your API key and try again."
NEXT_QUESTION_FAILED_MESSAGE = "Failed to get the next question. Please try again."
FEEDBACK_FAILED_MESSAGE = "Failed to generate feedback report. Please try starting a new interview."
FEEDBACK_FORMAT_MESSAGE = "The AI returned an invalid feedback format. Please try again."


class SessionController:
    """
    Runs the interview state machine for a single session.

    States:
        SETUP → INTERVIEW (⟲ per answer) → LOADING → FEEDBACK
        LOADING → INTERVIEW on report failure, any → SETUP on start_new

    At most one AI request is in flight: every action is rejected while
    ``context.is_loading`` is set. The flag is set before the first await,
    so interleaved requests on the event loop cannot both pass the guard.
    """

    def __init__(
        self,
        ai_client: Any,  # GeminiClient
        resume_parser: ResumeParser | None = None,
        session_id: str | None = None,
    ):
        """
        Initialize the controller.

        Args:
            ai_client: Object with request_first_question, request_next_question
                and request_feedback coroutines
            resume_parser: PDF ingestion (defaults to a 5 MiB limit)
            session_id: Session identifier (generated if omitted)
        """
        self.session_id = session_id or str(uuid4())
        self.ai_client = ai_client
        self.resume_parser = resume_parser or ResumeParser()
        self.interviewer_prompts = InterviewerPrompts()
        self.report_prompts = ReportPrompts()
        self.context: SessionContext = transitions.initial_context()

    # =========================================================================
    # START INTERVIEW
    # =========================================================================

    async def start_interview(self, resume: str, job_description: str) -> SessionContext:
        """
        Validate inputs and ask for the first question.

        On success the transcript holds exactly the first question and the
        phase is INTERVIEW. On failure the phase stays SETUP with an error.
        """
        transitions.ensure_action_allowed(self.context, "start_interview")

        if not job_description.strip():
            return self._report_error(
                InputValidationError("Job description is empty", user_message=MISSING_INPUT_MESSAGE)
            )

        return await self._request_first_question(resume, job_description)

    async def start_interview_from_upload(
        self,
        job_description: str,
        filename: str | None = None,
        content_type: str | None = None,
        data: bytes | None = None,
    ) -> SessionContext:
        """
        Validate a resume upload, extract its text, then start the interview.

        Missing file, wrong type or unreadable PDF set the session error
        without changing phase and without calling the AI. The PDF is parsed
        in a worker thread; the session stays busy for the whole action.
        """
        transitions.ensure_action_allowed(self.context, "start_interview")

        if not data or not job_description.strip():
            return self._report_error(
                InputValidationError("Resume or job description missing", user_message=MISSING_INPUT_MESSAGE)
            )

        try:
            self.resume_parser.validate(filename, content_type, len(data))
        except CoachError as e:
            return self._report_error(e)

        self.context = transitions.begin_extraction(self.context)

        try:
            # pypdf is CPU-bound, keep it off the event loop
            loop = asyncio.get_running_loop()
            resume = await loop.run_in_executor(None, self.resume_parser.extract_text, data)
        except CoachError as e:
            logger.warning(f"Session {self.session_id}: {e}")
            self.context = transitions.fail_extraction(self.context, e.user_message)
            return self.context

        return await self._request_first_question(resume, job_description)

    async def _request_first_question(self, resume: str, job_description: str) -> SessionContext:
        """Issue the first-question call. Callers have already run the guard."""
        self.context = transitions.begin_start(self.context, resume, job_description)
        logger.info(f"Session {self.session_id}: starting interview")

        try:
            prompt = self.interviewer_prompts.first_question_prompt(resume, job_description)
            first_question = await self.ai_client.request_first_question(prompt)
        except Exception as e:
            logger.error(f"Session {self.session_id}: failed to start interview: {e}")
            self.context = transitions.fail_start(self.context, START_FAILED_MESSAGE)
            return self.context

        self.context = transitions.complete_start(self.context, first_question)
        logger.info(f"Session {self.session_id}: interview started")
        return self.context

    # =========================================================================
    # SUBMIT ANSWER
    # =========================================================================

    async def submit_answer(self, response_text: str) -> SessionContext:
        """
        Record the user's answer and ask for the next question.

        The answer is appended before the AI call and stays in the
        transcript even if the call fails.
        """
        transitions.ensure_action_allowed(self.context, "submit_answer")

        if not response_text.strip():
            return self._report_error(
                InputValidationError("Answer is empty", user_message=EMPTY_ANSWER_MESSAGE)
            )

        self.context = transitions.begin_answer(self.context, response_text)

        try:
            prompt = self.interviewer_prompts.next_question_prompt(
                self.context.resume_text,
                self.context.job_description,
                self.context.transcript,
            )
            next_question = await self.ai_client.request_next_question(prompt)
        except Exception as e:
            logger.error(f"Session {self.session_id}: failed to get next question: {e}")
            self.context = transitions.fail_answer(self.context, NEXT_QUESTION_FAILED_MESSAGE)
            return self.context

        self.context = transitions.complete_answer(self.context, next_question)
        logger.info(f"Session {self.session_id}: turn {self.context.turn_count} answered")
        return self.context

    # =========================================================================
    # END INTERVIEW
    # =========================================================================

    async def end_interview(self) -> SessionContext:
        """
        Generate the feedback report over the full transcript.

        On failure the phase reverts to INTERVIEW with the transcript
        unchanged, so the user can keep answering or try again.
        """
        transitions.ensure_action_allowed(self.context, "end_interview")

        self.context = transitions.begin_end(self.context)
        logger.info(f"Session {self.session_id}: generating feedback report")

        try:
            prompt = self.report_prompts.feedback_prompt(
                self.context.resume_text,
                self.context.job_description,
                self.context.transcript,
            )
            report = await self.ai_client.request_feedback(prompt, FEEDBACK_RESPONSE_SCHEMA)
        except AIResponseFormatError as e:
            logger.error(f"Session {self.session_id}: invalid feedback format: {e}")
            self.context = transitions.fail_end(self.context, FEEDBACK_FORMAT_MESSAGE)
            return self.context
        except Exception as e:
            logger.error(f"Session {self.session_id}: failed to generate feedback: {e}")
            self.context = transitions.fail_end(self.context, FEEDBACK_FAILED_MESSAGE)
            return self.context

        self.context = transitions.complete_end(self.context, report)
        logger.info(
            f"Session {self.session_id}: feedback ready "
            f"(overall {report.overallScore.score:g}/100)"
        )
        return self.context

    # =========================================================================
    # START NEW
    # =========================================================================

    def start_new(self) -> SessionContext:
        """Reset to SETUP, keeping only the job description."""
        transitions.ensure_action_allowed(self.context, "start_new")
        self.context = transitions.start_new(self.context)
        logger.info(f"Session {self.session_id}: reset for a new round")
        return self.context

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _report_error(self, error: CoachError) -> SessionContext:
        """Show an error without changing phase."""
        logger.warning(f"Session {self.session_id}: {error}")
        self.context = transitions.with_error(self.context, error.user_message)
        return self.context
