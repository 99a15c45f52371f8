"""
Text extraction task.

Turns raw PDF or DOCX bytes into page-scoped text segments. Always
returns at least one segment: unreadable pages become per-page
placeholders and an unreadable file becomes a single placeholder
marked as degraded.

Dependencies: pypdf, docx2txt
System role: First stage of document ingestion pipeline
"""

import logging
from io import BytesIO
from pathlib import PurePath

import docx2txt
from pypdf import PdfReader

from agentdoc.core.exceptions import ExtractionDegradedError, UnsupportedFormatError

from ..models import ExtractionResult, TextSegment

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SUPPORTED_TYPES: dict[str, tuple[str, str]] = {
    "pdf": (PDF_MIME, ".pdf"),
    "docx": (DOCX_MIME, ".docx"),
}

DEGRADED_SECTION = "Document [extraction failed]"


def resolve_file_type(file_name: str, mime_type: str | None = None) -> str:
    """
    Map a declared MIME type or file extension to 'pdf' or 'docx'.

    Raises:
        UnsupportedFormatError: Neither MIME type nor extension is supported
    """
    extension = PurePath(file_name).suffix.lower()
    for file_type, (mime, ext) in SUPPORTED_TYPES.items():
        if mime_type == mime or extension == ext:
            return file_type
    raise UnsupportedFormatError(file_name, mime_type)


def strip_extension(file_name: str) -> str:
    """Display title for a file: its name without a .pdf/.docx suffix."""
    path = PurePath(file_name)
    if path.suffix.lower() in {ext for _, ext in SUPPORTED_TYPES.values()}:
        return path.stem
    return path.name


class ExtractionTask:
    """Extract page-scoped text from PDF and DOCX files."""

    def extract(self, data: bytes, file_name: str, file_type: str) -> ExtractionResult:
        """
        Extract segments from a document.

        Args:
            data: Raw file bytes
            file_name: Original file name (used in placeholder text)
            file_type: 'pdf' or 'docx'

        Returns:
            ExtractionResult: One segment per page for PDF, one for DOCX

        Raises:
            UnsupportedFormatError: file_type is not supported
        """
        if file_type not in SUPPORTED_TYPES:
            raise UnsupportedFormatError(file_name, file_type)

        try:
            if file_type == "pdf":
                return self._extract_pdf(data, file_name)
            return self._extract_docx(data, file_name)
        except ExtractionDegradedError as e:
            logger.warning(
                f"{__name__}:extract - Extraction degraded, using placeholder",
                extra={"file_name": file_name, "file_type": file_type, "error_msg": str(e)},
            )
            return self._fallback(file_name)

    def _extract_pdf(self, data: bytes, file_name: str) -> ExtractionResult:
        try:
            reader = PdfReader(BytesIO(data))
            if reader.is_encrypted:
                reader.decrypt("")
            page_count = len(reader.pages)
        except Exception as e:
            raise ExtractionDegradedError(f"Could not open PDF: {e}") from e

        if page_count == 0:
            raise ExtractionDegradedError("PDF has no pages")

        segments = [self._extract_page(reader, number, file_name) for number in range(1, page_count + 1)]
        logger.info(
            f"{__name__}:_extract_pdf - Extracted pages",
            extra={
                "file_name": file_name,
                "pages": page_count,
                "failed_pages": sum(1 for s in segments if s.degraded),
            },
        )
        return ExtractionResult(segments=segments, page_count=page_count)

    def _extract_page(self, reader: PdfReader, number: int, file_name: str) -> TextSegment:
        """Extract one page; a failure only replaces this page."""
        try:
            text = (reader.pages[number - 1].extract_text() or "").strip()
        except Exception as e:
            logger.warning(
                f"{__name__}:_extract_page - Page failed",
                extra={"file_name": file_name, "page": number, "error_msg": str(e)},
            )
            return TextSegment(
                text=f"Page {number} from {file_name}. This page could not be fully processed.",
                page=number,
                section=f"Page {number} [unprocessed]",
                degraded=True,
            )

        if not text:
            text = f"Page {number} of {file_name} contains no extractable text."
        return TextSegment(text=text, page=number, section=f"Page {number}")

    def _extract_docx(self, data: bytes, file_name: str) -> ExtractionResult:
        try:
            text = (docx2txt.process(BytesIO(data)) or "").strip()
        except Exception as e:
            raise ExtractionDegradedError(f"Could not read DOCX: {e}") from e

        if not text:
            text = f"Document {file_name} contains no extractable text."
        return ExtractionResult(
            segments=[TextSegment(text=text, page=1, section="Document")],
            page_count=1,
        )

    @staticmethod
    def _fallback(file_name: str) -> ExtractionResult:
        return ExtractionResult(
            segments=[
                TextSegment(
                    text=f"Document: {file_name}. This document could not be processed.",
                    page=1,
                    section=DEGRADED_SECTION,
                    degraded=True,
                )
            ],
            page_count=1,
        )
