"""Document ingestion and lazily generated, cached study artifacts."""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from studybuddy.errors import DocumentNotFoundError, ExtractionFailedError
from studybuddy.extract import extract_text
from studybuddy.models import Document
from studybuddy.prompts import (
    answer_prompt,
    flashcards_prompt,
    strip_code_fences,
    summary_prompt,
)
from studybuddy.store import ArtifactField, DocumentStore

log = logging.getLogger(__name__)


class Completer(Protocol):
    def complete(self, prompt: str) -> str: ...


class DocumentService:
    """Uploads documents and produces summaries, flashcards and answers for them.

    Summaries and flashcards are generated at most once per document: the
    first successful result is stored on the record and returned from then on.
    Answers are generated fresh for every question.
    """

    def __init__(self, store: DocumentStore, client: Completer):
        self.store = store
        self.client = client
        self._locks: dict[tuple[str, str], threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def ingest(self, data: bytes, filename: str, media_type: str | None) -> Document:
        """Extract the text of an upload and store it as a new document.

        Raises:
            UnsupportedMediaTypeError: If the file is neither PDF nor plain text.
            ExtractionFailedError: If no text could be extracted.
        """
        log.info("Uploading document: %s", filename)
        content = extract_text(data, media_type)
        if not content.strip():
            raise ExtractionFailedError(f"No content extracted from file: {filename}")
        log.info("Extracted content length: %d characters", len(content))

        doc = self.store.add(
            Document(filename=filename, media_type=media_type, content=content)
        )
        log.info("Document saved with ID: %s", doc.id)
        return doc

    def get(self, document_id: str) -> Document:
        doc = self.store.get(document_id)
        if doc is None:
            raise DocumentNotFoundError(document_id)
        return doc

    def list_documents(self) -> list[Document]:
        """All documents, most recently uploaded first."""
        return sorted(self.store.list_all(), key=lambda d: d.uploaded_at, reverse=True)

    def delete(self, document_id: str) -> None:
        if not self.store.delete(document_id):
            raise DocumentNotFoundError(document_id)
        with self._locks_guard:
            for key in [k for k in self._locks if k[0] == document_id]:
                del self._locks[key]
        log.info("Deleted document %s", document_id)

    def get_summary(self, document_id: str) -> str:
        return self._cached_artifact(document_id, "summary", summary_prompt)

    def get_flashcards(self, document_id: str) -> str:
        return self._cached_artifact(
            document_id, "flashcards", flashcards_prompt, strip_code_fences
        )

    def answer(self, document_id: str, question: str) -> str:
        """Answer a question about a document. Never cached."""
        log.info("Chat question for document %s: %s", document_id, question)
        doc = self.get(document_id)
        answer = self.client.complete(answer_prompt(doc.content, question))
        log.info("Answer generated for document %s", document_id)
        return answer

    def _lock_for(self, document_id: str, field: ArtifactField) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault((document_id, field), threading.Lock())

    def _cached_artifact(
        self,
        document_id: str,
        field: ArtifactField,
        build_prompt: Callable[[str], str],
        clean: Callable[[str], str] | None = None,
    ) -> str:
        cached = getattr(self.get(document_id), field)
        if cached:
            log.info("Returning cached %s for document %s", field, document_id)
            return cached

        with self._lock_for(document_id, field):
            # Another request may have generated it while we waited
            doc = self.get(document_id)
            cached = getattr(doc, field)
            if cached:
                log.info("Returning cached %s for document %s", field, document_id)
                return cached

            log.info("Generating %s for document %s", field, document_id)
            generated = self.client.complete(build_prompt(doc.content))
            if clean is not None:
                generated = clean(generated)
            log.info("Generated %s, length: %d", field, len(generated))

            stored = self.store.set_artifact_if_unset(document_id, field, generated)
            if stored is None:
                raise DocumentNotFoundError(document_id)
            return getattr(stored, field) or generated
