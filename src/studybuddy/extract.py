"""Turn uploaded bytes into plain text."""
from __future__ import annotations

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from studybuddy.errors import ExtractionFailedError, UnsupportedMediaTypeError

log = logging.getLogger(__name__)

PDF = "application/pdf"
PLAIN_TEXT = "text/plain"


def _base_media_type(media_type: str | None) -> str:
    # "text/plain; charset=utf-8" -> "text/plain"
    return (media_type or "").split(";", 1)[0].strip().lower()


def extract_text(data: bytes, media_type: str | None) -> str:
    """Return the text content of an uploaded file.

    Raises:
        UnsupportedMediaTypeError: If the media type is neither PDF nor plain text.
        ExtractionFailedError: If the bytes cannot be decoded or parsed.
    """
    kind = _base_media_type(media_type)
    if kind == PLAIN_TEXT:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExtractionFailedError(f"File is not valid UTF-8 text: {e}") from e
    if kind == PDF:
        return extract_pdf_text(data)
    raise UnsupportedMediaTypeError(media_type)


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Extract the text of every page, in page order, from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        if reader.is_encrypted:
            # Only documents without a user password can be opened this way
            try:
                decrypted = reader.decrypt("")
            except PyPdfError as e:
                log.warning("Could not remove PDF security: %s", e)
            else:
                if not decrypted:
                    log.warning("Could not remove PDF security: a user password is required")
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        # pypdf raises a wide range of errors on damaged files
        log.error("Failed to extract PDF content: %s", e)
        raise ExtractionFailedError(f"Could not read PDF: {e}") from e
    return "\n".join(pages).strip()
