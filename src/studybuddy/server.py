from __future__ import annotations

import logging

from studybuddy import config

import logfire
logfire.configure(
    service_name="studybuddy-server",
    environment=config.ENVIRONMENT,
    send_to_logfire="if-token-present",
)
logfire.instrument_httpx()
logging.basicConfig(level=logging.INFO, handlers=[logfire.LogfireLoggingHandler()])

from fastapi import Depends, FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studybuddy.documents import DocumentService
from studybuddy.errors import (
    DocumentNotFoundError,
    ExtractionFailedError,
    GenerationFailedError,
    StudyBuddyError,
    UnsupportedMediaTypeError,
)
from studybuddy.gemini import GenerationClient
from studybuddy.models import (
    ChatRequest,
    ChatResponse,
    Document,
    FlashcardsResponse,
    MessageResponse,
    SummaryResponse,
    UploadResponse,
)
from studybuddy.store import DocumentStore

log = logging.getLogger(__name__)

app = FastAPI(title="StudyBuddy", description="Summaries, flashcards and Q&A for your documents")
logfire.instrument_fastapi(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service: DocumentService | None = None


def get_service() -> DocumentService:
    global _service
    if _service is None:
        _service = DocumentService(
            DocumentStore(), GenerationClient(config.GeminiConfig.from_env())
        )
    return _service


_ERROR_STATUS: dict[type[StudyBuddyError], int] = {
    UnsupportedMediaTypeError: 415,
    ExtractionFailedError: 400,
    DocumentNotFoundError: 404,
    GenerationFailedError: 502,
}


def _error_response(operation: str, error: StudyBuddyError) -> JSONResponse:
    status_code = _ERROR_STATUS.get(type(error), 500)
    log.warning("%s failed (%d): %s", operation, status_code, error)
    return JSONResponse(
        status_code=status_code,
        content={"error": f"{operation} failed: {error}"},
    )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------
@app.post("/api/documents/upload", response_model=UploadResponse)
def upload_document(
    file: UploadFile = File(...),
    service: DocumentService = Depends(get_service),
):
    """Upload a PDF or plain-text file and store its extracted text."""
    try:
        doc = service.ingest(
            file.file.read(), file.filename or "untitled", file.content_type
        )
    except StudyBuddyError as e:
        return _error_response("Upload", e)
    return UploadResponse(id=doc.id, filename=doc.filename, uploaded_at=doc.uploaded_at)


@app.post("/api/documents/{document_id}/summary", response_model=SummaryResponse)
def generate_summary(document_id: str, service: DocumentService = Depends(get_service)):
    """Summarize a document. Generated on first request, cached afterwards."""
    try:
        return SummaryResponse(summary=service.get_summary(document_id))
    except StudyBuddyError as e:
        return _error_response("Summary generation", e)


@app.post("/api/documents/{document_id}/flashcards", response_model=FlashcardsResponse)
def generate_flashcards(document_id: str, service: DocumentService = Depends(get_service)):
    """Flashcards for a document, as a JSON array encoded in a string."""
    try:
        return FlashcardsResponse(flashcards=service.get_flashcards(document_id))
    except StudyBuddyError as e:
        return _error_response("Flashcard generation", e)


@app.post("/api/documents/{document_id}/chat", response_model=ChatResponse)
def chat_with_document(
    document_id: str,
    request: ChatRequest,
    service: DocumentService = Depends(get_service),
):
    """Answer a question using only the document's content."""
    try:
        return ChatResponse(answer=service.answer(document_id, request.question))
    except StudyBuddyError as e:
        return _error_response("Question answering", e)


@app.get("/api/documents", response_model=list[Document])
def list_documents(service: DocumentService = Depends(get_service)):
    """List all documents, newest first."""
    return service.list_documents()


@app.get("/api/documents/{document_id}", response_model=Document)
def get_document(document_id: str, service: DocumentService = Depends(get_service)):
    try:
        return service.get(document_id)
    except StudyBuddyError as e:
        return _error_response("Document lookup", e)


@app.delete("/api/documents/{document_id}", response_model=MessageResponse)
def delete_document(document_id: str, service: DocumentService = Depends(get_service)):
    try:
        service.delete(document_id)
    except StudyBuddyError as e:
        return _error_response("Delete", e)
    return MessageResponse(message="Document deleted successfully")


def main():
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
