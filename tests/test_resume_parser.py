"""
Tests for resume upload validation and PDF text extraction.
"""

import io

import pytest
from pypdf import PdfWriter

from interview_coach.core import resume_parser
from interview_coach.core.resume_parser import ResumeParser
from interview_coach.errors import InputValidationError, ResumeExtractionError


class _FakePage:
    def __init__(self, text):
        self._text = text

    def extract_text(self):
        return self._text


class _FakeReader:
    def __init__(self, stream):
        self.pages = [_FakePage("Jane Doe"), _FakePage(None), _FakePage("Go, Kubernetes")]


def _blank_pdf(pages: int) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestValidate:
    @pytest.mark.parametrize(
        "filename, content_type",
        [
            ("resume.pdf", "application/pdf"),
            ("resume.PDF", None),
            ("upload", "application/pdf"),
            ("upload", "application/pdf; charset=binary"),
        ],
    )
    def test_accepts_pdf(self, filename, content_type):
        ResumeParser().validate(filename, content_type, 1024)

    def test_rejects_other_types(self):
        with pytest.raises(InputValidationError) as exc_info:
            ResumeParser().validate("resume.txt", "text/plain", 10)
        assert exc_info.value.user_message == "Please upload a valid PDF file."

    def test_rejects_oversized(self):
        with pytest.raises(InputValidationError) as exc_info:
            ResumeParser(max_bytes=100).validate("resume.pdf", "application/pdf", 101)
        assert "too large" in exc_info.value.user_message


class TestExtractText:
    def test_pages_joined_with_newlines_in_order(self, monkeypatch):
        monkeypatch.setattr(resume_parser, "PdfReader", _FakeReader)

        assert ResumeParser().extract_text(b"%PDF") == "Jane Doe\n\nGo, Kubernetes"

    def test_blank_pages_give_empty_text(self):
        assert ResumeParser().extract_text(_blank_pdf(2)).strip() == ""

    def test_empty_bytes_raise(self):
        with pytest.raises(ResumeExtractionError) as exc_info:
            ResumeParser().extract_text(b"")
        assert exc_info.value.user_message == (
            "Could not read the provided PDF file. Please try another file."
        )

    def test_reader_failure_is_wrapped(self, monkeypatch):
        def broken_reader(stream):
            raise OSError("corrupt xref table")

        monkeypatch.setattr(resume_parser, "PdfReader", broken_reader)

        with pytest.raises(ResumeExtractionError) as exc_info:
            ResumeParser().extract_text(b"%PDF-1.7 garbage")
        assert isinstance(exc_info.value.__cause__, OSError)
