"""
Tests for the session controller state machine.
"""

import asyncio
import threading

import httpx
import pytest

from interview_coach.core import session_controller as sc
from interview_coach.core.ai_client import GeminiClient
from interview_coach.core.session_controller import SessionController
from interview_coach.errors import AIRequestError, AIResponseFormatError, SessionBusyError, StateTransitionError
from interview_coach.models.interview import InterviewMessage, SessionPhase, Speaker
from tests.conftest import FakeAIClient, StubResumeParser

RESUME = "Senior Backend Engineer, 5 yrs Go..."
JOB = "Staff SRE role..."
FIRST_QUESTION = "Tell me about a time you debugged a production outage."


async def _interviewing(ai_client: FakeAIClient) -> SessionController:
    controller = SessionController(ai_client=ai_client, resume_parser=StubResumeParser())
    await controller.start_interview(RESUME, JOB)
    assert controller.context.phase == SessionPhase.INTERVIEW
    return controller


class TestStartInterview:
    async def test_first_question_opens_interview(self):
        ai_client = FakeAIClient(first=[FIRST_QUESTION])
        controller = SessionController(ai_client=ai_client)

        context = await controller.start_interview(RESUME, JOB)

        assert context.phase == SessionPhase.INTERVIEW
        assert context.transcript == (InterviewMessage(speaker=Speaker.AI, text=FIRST_QUESTION),)
        assert context.is_loading is False
        assert context.error is None
        assert ai_client.prompts[0][0] == "first"
        assert RESUME in ai_client.prompts[0][1]

    async def test_network_error_stays_in_setup(self):
        ai_client = FakeAIClient(first=[httpx.ConnectError("connection refused")])
        controller = SessionController(ai_client=ai_client)

        context = await controller.start_interview(RESUME, JOB)

        assert context.phase == SessionPhase.SETUP
        assert context.error == "Failed to start the interview. Please check your API key and try again."
        assert context.transcript == ()
        assert context.is_loading is False

    async def test_ai_request_error_stays_in_setup(self):
        controller = SessionController(ai_client=FakeAIClient(first=[AIRequestError("timeout")]))

        context = await controller.start_interview(RESUME, JOB)

        assert context.phase == SessionPhase.SETUP
        assert context.error == sc.START_FAILED_MESSAGE

    async def test_empty_job_description_is_validation_error(self):
        ai_client = FakeAIClient()
        controller = SessionController(ai_client=ai_client)

        context = await controller.start_interview(RESUME, "   ")

        assert context.phase == SessionPhase.SETUP
        assert context.error == sc.MISSING_INPUT_MESSAGE
        assert ai_client.prompts == []

    async def test_can_retry_after_failure(self):
        ai_client = FakeAIClient(first=[AIRequestError("down"), FIRST_QUESTION])
        controller = SessionController(ai_client=ai_client)

        await controller.start_interview(RESUME, JOB)
        context = await controller.start_interview(RESUME, JOB)

        assert context.phase == SessionPhase.INTERVIEW
        assert context.error is None

    async def test_rejected_outside_setup(self):
        controller = await _interviewing(FakeAIClient())

        with pytest.raises(StateTransitionError):
            await controller.start_interview(RESUME, JOB)


class TestStartFromUpload:
    async def test_upload_is_extracted_and_used(self, controller, ai_client):
        context = await controller.start_interview_from_upload(
            job_description=JOB,
            filename="resume.pdf",
            content_type="application/pdf",
            data=RESUME.encode(),
        )

        assert context.phase == SessionPhase.INTERVIEW
        assert context.resume_text == RESUME

    async def test_missing_file(self, controller, ai_client):
        context = await controller.start_interview_from_upload(job_description=JOB, data=None)

        assert context.phase == SessionPhase.SETUP
        assert context.error == "Please upload a resume and provide the job description."
        assert ai_client.prompts == []

    async def test_non_pdf_rejected(self, controller, ai_client):
        context = await controller.start_interview_from_upload(
            job_description=JOB,
            filename="resume.docx",
            content_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            data=b"binary",
        )

        assert context.phase == SessionPhase.SETUP
        assert context.error == "Please upload a valid PDF file."
        assert ai_client.prompts == []

    async def test_unreadable_pdf_reported(self, ai_client):
        controller = SessionController(ai_client=ai_client)

        context = await controller.start_interview_from_upload(
            job_description=JOB,
            filename="resume.pdf",
            content_type="application/pdf",
            data=b"definitely not a pdf",
        )

        assert context.phase == SessionPhase.SETUP
        assert context.error == "Could not read the provided PDF file. Please try another file."
        assert context.resume_text == ""
        assert ai_client.prompts == []


class TestSubmitAnswer:
    async def test_appends_answer_then_question(self):
        ai_client = FakeAIClient(next_questions=["Q2"])
        controller = await _interviewing(ai_client)

        context = await controller.submit_answer("A1")

        assert [(m.speaker, m.text) for m in context.transcript] == [
            (Speaker.AI, "Tell me about yourself."),
            (Speaker.USER, "A1"),
            (Speaker.AI, "Q2"),
        ]
        assert "USER: A1" in ai_client.prompts[-1][1]

    async def test_failure_keeps_user_message(self):
        controller = await _interviewing(FakeAIClient(next_questions=[AIRequestError("503")]))
        before = controller.context.transcript

        context = await controller.submit_answer("A1")

        assert context.transcript == before + (InterviewMessage(speaker=Speaker.USER, text="A1"),)
        assert context.phase == SessionPhase.INTERVIEW
        assert context.error == "Failed to get the next question. Please try again."
        assert context.is_loading is False

    async def test_error_cleared_by_next_action(self):
        controller = await _interviewing(FakeAIClient(next_questions=[AIRequestError("503"), "Q3"]))

        await controller.submit_answer("A1")
        context = await controller.submit_answer("A2")

        assert context.error is None
        assert context.last_message.text == "Q3"

    async def test_blank_answer_not_appended(self):
        controller = await _interviewing(FakeAIClient())
        before = controller.context.transcript

        context = await controller.submit_answer("  ")

        assert context.transcript == before
        assert context.error == sc.EMPTY_ANSWER_MESSAGE

    async def test_rejected_in_setup(self, controller):
        with pytest.raises(StateTransitionError):
            await controller.submit_answer("A1")

    async def test_concurrent_submit_is_rejected(self):
        release = asyncio.Event()

        class SlowClient(FakeAIClient):
            async def request_next_question(self, prompt):
                await release.wait()
                return "Q2"

        controller = await _interviewing(SlowClient())
        pending = asyncio.create_task(controller.submit_answer("A1"))
        await asyncio.sleep(0)

        assert controller.context.is_loading is True
        with pytest.raises(SessionBusyError):
            await controller.submit_answer("A2")
        with pytest.raises(SessionBusyError):
            await controller.end_interview()
        with pytest.raises(SessionBusyError):
            controller.start_new()

        release.set()
        context = await pending

        assert [m.text for m in context.transcript] == ["Tell me about yourself.", "A1", "Q2"]
        assert context.is_loading is False


class TestEndInterview:
    async def test_report_stored(self, report):
        ai_client = FakeAIClient(feedback=[report])
        controller = await _interviewing(ai_client)

        context = await controller.end_interview()

        assert context.phase == SessionPhase.FEEDBACK
        assert context.feedback_report == report
        assert context.is_loading is False
        assert ai_client.schemas[0]["required"] == [
            "overallScore", "answerQuality", "communicationSkills", "contentAndStrategy"
        ]

    async def test_failure_reverts_and_keeps_transcript(self):
        controller = await _interviewing(FakeAIClient(feedback=[AIRequestError("timeout")]))
        before = controller.context.transcript

        context = await controller.end_interview()

        assert context.phase == SessionPhase.INTERVIEW
        assert context.transcript == before
        assert context.error == "Failed to generate feedback report. Please try starting a new interview."

    async def test_format_error_message(self):
        controller = await _interviewing(FakeAIClient(feedback=[AIResponseFormatError("bad json")]))

        context = await controller.end_interview()

        assert context.phase == SessionPhase.INTERVIEW
        assert context.error == "The AI returned an invalid feedback format. Please try again."

    async def test_retry_after_failure(self, report):
        controller = await _interviewing(FakeAIClient(feedback=[AIRequestError("timeout"), report]))

        await controller.end_interview()
        context = await controller.end_interview()

        assert context.phase == SessionPhase.FEEDBACK

    async def test_loading_phase_while_generating(self, report):
        release = asyncio.Event()

        class SlowClient(FakeAIClient):
            async def request_feedback(self, prompt, schema):
                await release.wait()
                return report

        controller = await _interviewing(SlowClient())
        pending = asyncio.create_task(controller.end_interview())
        await asyncio.sleep(0)

        assert controller.context.phase == SessionPhase.LOADING
        release.set()
        assert (await pending).phase == SessionPhase.FEEDBACK


class TestStartNew:
    async def test_clears_round_but_keeps_job_description(self, report):
        controller = await _interviewing(FakeAIClient(feedback=[report]))
        await controller.end_interview()

        context = controller.start_new()

        assert context.phase == SessionPhase.SETUP
        assert context.job_description == JOB
        assert context.resume_text == ""
        assert context.transcript == ()
        assert context.feedback_report is None
        assert context.error is None

    async def test_allowed_mid_interview(self):
        controller = await _interviewing(FakeAIClient())

        assert controller.start_new().phase == SessionPhase.SETUP


class TestBlankModelReplies:
    async def test_blank_next_question_keeps_answer_and_reports_error(self, settings):
        replies = [
            {"candidates": [{"finishReason": "STOP", "content": {"parts": [{"text": "Q1"}]}}]},
            {"candidates": [{"finishReason": "MAX_TOKENS", "content": {"parts": []}}]},
        ]
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=replies.pop(0)))
        controller = SessionController(ai_client=GeminiClient(settings, transport=transport))
        await controller.start_interview(RESUME, JOB)

        context = await controller.submit_answer("A1")

        assert [(m.speaker, m.text) for m in context.transcript] == [
            (Speaker.AI, "Q1"),
            (Speaker.USER, "A1"),
        ]
        assert context.error == sc.NEXT_QUESTION_FAILED_MESSAGE
        assert context.is_loading is False


class TestResumeExtraction:
    async def test_session_busy_while_resume_is_parsed(self):
        parsing = threading.Event()
        release = threading.Event()

        class SlowParser(StubResumeParser):
            def extract_text(self, data):
                parsing.set()
                release.wait(timeout=5)
                return super().extract_text(data)

        ai_client = FakeAIClient(first=[FIRST_QUESTION])
        controller = SessionController(ai_client=ai_client, resume_parser=SlowParser())
        pending = asyncio.create_task(controller.start_interview_from_upload(
            job_description=JOB,
            filename="resume.pdf",
            content_type="application/pdf",
            data=RESUME.encode(),
        ))
        await asyncio.to_thread(parsing.wait, 5)

        assert controller.context.is_loading is True
        with pytest.raises(SessionBusyError):
            await controller.start_interview(RESUME, JOB)
        with pytest.raises(SessionBusyError):
            controller.start_new()

        release.set()
        context = await pending

        assert context.phase == SessionPhase.INTERVIEW
        assert context.resume_text == RESUME
        assert len(ai_client.prompts) == 1

    async def test_extraction_failure_clears_busy_flag(self, ai_client):
        controller = SessionController(ai_client=ai_client)

        context = await controller.start_interview_from_upload(
            job_description=JOB,
            filename="resume.pdf",
            content_type="application/pdf",
            data=b"definitely not a pdf",
        )

        assert context.is_loading is False
        assert context.phase == SessionPhase.SETUP
        assert ai_client.prompts == []
