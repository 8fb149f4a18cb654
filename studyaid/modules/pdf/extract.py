"""Plain-text extraction from uploaded PDF bytes (pypdf)."""

from __future__ import annotations

import io

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from studyaid.core.logging import get_logger

logger = get_logger(__name__)


class ExtractionFailed(Exception):
    pass


class NoTextFound(Exception):
    pass


def extract_text(data: bytes) -> str:
    """Concatenate the text of every page, separated by spaces."""
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            reader.decrypt("")
        parts = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, ValueError, KeyError, TypeError, OSError) as e:
        logger.warning("PDF parsing error: %s", e)
        raise ExtractionFailed(
            "Failed to parse PDF. Please ensure it's a valid text-based PDF."
        ) from e
    return " ".join(p.strip() for p in parts if p.strip())


def require_text(data: bytes) -> str:
    text = extract_text(data)
    if not text.strip():
        raise NoTextFound("No text found in PDF. Please upload a text-based PDF.")
    return text
