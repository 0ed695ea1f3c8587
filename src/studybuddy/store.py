from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Literal

from studybuddy.config import DATA_DIR
from studybuddy.models import Document

DEFAULT_DB_PATH = DATA_DIR / "documents.json"

ArtifactField = Literal["summary", "flashcards"]


class DocumentStore:
    """Documents persisted as a JSON list on disk.

    Every read-modify-write happens under one lock, so concurrent requests
    served from the threadpool never interleave their writes.
    """

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path
        self._lock = threading.RLock()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        if not self.db_path.exists():
            self.db_path.write_text("[]")

    def _load(self) -> list[Document]:
        raw = json.loads(self.db_path.read_text())
        return [Document.model_validate(doc) for doc in raw]

    def _save(self, docs: list[Document]) -> None:
        self.db_path.write_text(
            json.dumps([doc.model_dump(mode="json") for doc in docs], indent=2)
        )

    def add(self, doc: Document) -> Document:
        with self._lock:
            docs = self._load()
            docs.append(doc)
            self._save(docs)
        return doc

    def list_all(self) -> list[Document]:
        with self._lock:
            return self._load()

    def get(self, document_id: str) -> Document | None:
        for doc in self.list_all():
            if doc.id == document_id:
                return doc
        return None

    def delete(self, document_id: str) -> bool:
        """Remove a document. Returns False if no document had that id."""
        with self._lock:
            docs = self._load()
            kept = [doc for doc in docs if doc.id != document_id]
            if len(kept) == len(docs):
                return False
            self._save(kept)
            return True

    def set_artifact_if_unset(
        self, document_id: str, field: ArtifactField, value: str
    ) -> Document | None:
        """Store a generated artifact unless one is already stored.

        Returns the document as persisted (which may hold an earlier value),
        or None if the document no longer exists.
        """
        with self._lock:
            docs = self._load()
            for doc in docs:
                if doc.id != document_id:
                    continue
                if not getattr(doc, field):
                    setattr(doc, field, value)
                    self._save(docs)
                return doc
        return None
