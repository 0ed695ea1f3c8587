"""Shared fixtures: in-memory PDFs, a temporary store and a stub generation client."""
from __future__ import annotations

import io

import pytest
from fastapi.testclient import TestClient

from studybuddy.documents import DocumentService
from studybuddy.store import DocumentStore


def build_pdf(*pages: str) -> bytes:
    """Build a minimal PDF with one line of Helvetica text per page."""
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        (
            "<< /Type /Pages /Kids [%s] /Count %d >>"
            % (" ".join(f"{4 + 2 * i} 0 R" for i in range(len(pages))), len(pages))
        ).encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for i, text in enumerate(pages):
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> /Contents %d 0 R >>" % (5 + 2 * i)
            ).encode()
        )
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n" % number + body + b"\nendobj\n")
    xref_at = out.tell()
    out.write(b"xref\n0 %d\n" % (len(objects) + 1))
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(b"%010d 00000 n \n" % offset)
    out.write(
        b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n"
        % (len(objects) + 1, xref_at)
    )
    return out.getvalue()


class StubClient:
    """Generation client double that records every prompt it receives."""

    def __init__(self, response: str = "Summary text"):
        self.response = response
        self.error: Exception | None = None
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def store(tmp_path):
    return DocumentStore(tmp_path / "documents.json")


@pytest.fixture
def stub():
    return StubClient()


@pytest.fixture
def service(store, stub):
    return DocumentService(store, stub)


@pytest.fixture
def api(service):
    from studybuddy.server import app, get_service

    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
