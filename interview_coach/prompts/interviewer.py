"""
AI Interviewer Prompt Templates

Contains prompts for:
- The opening interview question
- Adaptive follow-up questions

Resume and job description text are embedded verbatim. No validation
happens here; empty inputs render as empty sections.
"""

from collections.abc import Sequence

from interview_coach.models.interview import InterviewMessage
from interview_coach.prompts.transcript import format_transcript


class InterviewerPrompts:
    """
    Prompt templates for the AI interviewer.

    Key principles:
    - One question per turn
    - Grounded in the candidate's resume and the target job
    - Never repeats a question already asked
    """

    SYSTEM_CONTEXT = """You are an expert interview coach. Your goal is to conduct a realistic and challenging job interview.

Guidelines:
- Ask one question at a time
- Ground questions in the candidate's resume and the target job description
- Keep questions focused and clear
- Never answer your own question or coach the candidate mid-interview
"""

    FOLLOWUP_CONTEXT = """You are an expert interview coach continuing an interview.

Guidelines:
- Be adaptive: build on what the candidate has already said
- Ask relevant follow-up questions based on the conversation history
- Do not repeat questions that were already asked
- Keep the interview flowing naturally
"""

    def first_question_prompt(self, resume: str, job_description: str) -> str:
        """Generate prompt for the opening interview question."""

        prompt = f"""{self.SYSTEM_CONTEXT}

=== CANDIDATE RESUME ===
{resume}

=== JOB DESCRIPTION ===
{job_description}

=== YOUR TASK ===
Based on the candidate's resume and the target job description, generate the first interview question.
The question should be relevant and insightful. It can be behavioral, technical, or situational - your choice.
Ask exactly one question to start.

Respond with the question text only."""

        return prompt

    def next_question_prompt(
        self,
        resume: str,
        job_description: str,
        transcript: Sequence[InterviewMessage],
    ) -> str:
        """Generate prompt for the next adaptive question."""

        prompt = f"""{self.FOLLOWUP_CONTEXT}

=== CANDIDATE RESUME ===
{resume}

=== JOB DESCRIPTION ===
{job_description}

=== INTERVIEW TRANSCRIPT (SO FAR) ===
{format_transcript(transcript)}

=== YOUR TASK ===
Generate the next single interview question.
- Ask exactly one question
- It must not repeat or rephrase any question in the transcript above

Respond with the question text only."""

        return prompt
