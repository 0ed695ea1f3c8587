"""Errors raised by the document workflow and its collaborators."""
from __future__ import annotations


class StudyBuddyError(Exception):
    """Base class for every error the API layer knows how to report."""


class UnsupportedMediaTypeError(StudyBuddyError):
    """Raised when an upload declares a media type we cannot extract."""

    def __init__(self, media_type: str | None):
        self.media_type = media_type
        super().__init__(f"Unsupported file type: {media_type}")


class ExtractionFailedError(StudyBuddyError):
    """Raised when the uploaded bytes yield no usable text."""


class DocumentNotFoundError(StudyBuddyError):
    """Raised when a document id is unknown to the store."""

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document not found with ID: {document_id}")


class GenerationFailedError(StudyBuddyError):
    """Raised when the generation endpoint call or its response is unusable."""
