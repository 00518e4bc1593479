"""
Resume ingestion for Interview Coach

Turns an uploaded PDF into plain text with pypdf. Page text is joined
with newlines, page order preserved.
"""

import io
import logging

from pypdf import PdfReader

from interview_coach.errors import InputValidationError, ResumeExtractionError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPES = {"application/pdf", "application/x-pdf"}

INVALID_FILE_MESSAGE = "Please upload a valid PDF file."
FILE_TOO_LARGE_MESSAGE = "The resume file is too large. Please upload a smaller PDF."
UNREADABLE_FILE_MESSAGE = "Could not read the provided PDF file. Please try another file."


class ResumeParser:
    """Validates resume uploads and extracts their text."""

    def __init__(self, max_bytes: int = 5 * 1024 * 1024):
        self.max_bytes = max_bytes

    def validate(self, filename: str | None, content_type: str | None, size: int) -> None:
        """
        Check that an upload looks like a PDF of acceptable size.

        Raises:
            InputValidationError: Not a PDF, or too large
        """
        is_pdf_type = (content_type or "").split(";")[0].strip().lower() in PDF_CONTENT_TYPES
        is_pdf_name = (filename or "").lower().endswith(".pdf")
        if not (is_pdf_type or is_pdf_name):
            raise InputValidationError(
                f"Rejected resume upload {filename!r} ({content_type})",
                user_message=INVALID_FILE_MESSAGE,
            )

        if size > self.max_bytes:
            raise InputValidationError(
                f"Resume upload is {size} bytes, limit is {self.max_bytes}",
                user_message=FILE_TOO_LARGE_MESSAGE,
            )

    def extract_text(self, data: bytes) -> str:
        """
        Extract plain text from PDF bytes.

        Raises:
            ResumeExtractionError: If the PDF is corrupt or unreadable
        """
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
            if not pages:
                raise ValueError("PDF has no pages")
        except Exception as e:
            logger.error(f"Failed to parse PDF: {e}")
            raise ResumeExtractionError(
                f"PDF extraction failed: {e}",
                user_message=UNREADABLE_FILE_MESSAGE,
            ) from e

        text = "\n".join(pages)
        if not text.strip():
            logger.warning(f"Resume PDF with {len(pages)} page(s) contained no extractable text")
        return text
