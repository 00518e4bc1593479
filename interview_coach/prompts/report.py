"""
AI Feedback Report Prompts

Contains the prompt that turns a finished interview transcript into
the structured feedback report.
"""

from collections.abc import Sequence

from interview_coach.models.interview import InterviewMessage
from interview_coach.prompts.transcript import format_transcript


class ReportPrompts:
    """Prompt templates for the end-of-interview feedback report."""

    SYSTEM_CONTEXT = """You are an expert career coach and interview analyst providing feedback on a job interview.

Your role:
- Provide a comprehensive, constructive and detailed critique
- Be critical but encouraging
- Support every point with specific examples quoted from the transcript
"""

    def feedback_prompt(
        self,
        resume: str,
        job_description: str,
        transcript: Sequence[InterviewMessage],
    ) -> str:
        """Generate prompt for the structured feedback report."""

        prompt = f"""{self.SYSTEM_CONTEXT}

=== CANDIDATE RESUME ===
{resume}

=== JOB DESCRIPTION ===
{job_description}

=== FULL INTERVIEW TRANSCRIPT ===
{format_transcript(transcript)}

=== YOUR TASK ===
Analyze the transcript and provide feedback in the specified JSON format.

Output JSON format (every field is required):
{{
    "overallScore": {{"score": 0-100, "summary": "Brief summary of the performance"}},
    "answerQuality": {{"score": 0-100, "analysis": "Relevance, use of examples, technical accuracy", "suggestions": "Actionable advice"}},
    "communicationSkills": {{"score": 0-100, "analysis": "Clarity, articulation, response structure", "suggestions": "Tips for better communication"}},
    "contentAndStrategy": {{"score": 0-100, "analysis": "Alignment with the job description and resume, STAR method usage", "suggestions": "Skills or projects to highlight and a better answer example"}}
}}

Every score must be a number between 0 and 100 inclusive."""

        return prompt
