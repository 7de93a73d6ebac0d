"""Script intake: typed text or an uploaded document."""
from __future__ import annotations

import io
import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from .errors import InvalidScriptError

log = logging.getLogger(__name__)

TEXT_SUFFIXES = (".txt", ".md")


def extract_script_text(filename: str, data: bytes) -> str:
    """Parse text out of an uploaded ``.pdf``, ``.txt`` or ``.md`` file."""
    ext = Path(filename or "").suffix.lower()

    if not data:
        raise InvalidScriptError("Failed to extract text from file.", details="Empty file uploaded.")

    if ext in TEXT_SUFFIXES:
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise InvalidScriptError("Failed to extract text from file.", details=str(e)) from e

    if ext == ".pdf":
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PyPdfError, ValueError, KeyError, OSError) as e:
            log.warning("Could not parse PDF %s: %s", filename, e)
            raise InvalidScriptError("Failed to extract text from PDF.", details=str(e)) from e
        log.info("Extracted %d page(s) from %s", len(pages), filename)
        return "\n".join(pages)

    raise InvalidScriptError(f"Unsupported file type: {ext or filename!r}")


def resolve_script(description: str, filename: str | None = None, data: bytes | None = None) -> str:
    """Pick the script text: typed description first, upload as a fallback."""
    text = (description or "").strip()
    if not text and filename and data is not None:
        text = extract_script_text(filename, data).strip()
    if not text:
        raise InvalidScriptError("Description or valid PDF is required.")
    return text
