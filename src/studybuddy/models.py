from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Accepts snake_case or camelCase input; API responses use camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Document(_CamelModel):
    """Full document record stored in the JSON database."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    filename: str
    media_type: str
    content: str
    summary: str | None = None
    flashcards: str | None = None  # JSON array of {question, answer}, as text
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UploadResponse(_CamelModel):
    """Response from the upload endpoint."""

    id: str
    filename: str
    uploaded_at: datetime


class SummaryResponse(BaseModel):
    summary: str


class FlashcardsResponse(BaseModel):
    flashcards: str


class ChatRequest(BaseModel):
    """Request body for POST /api/documents/{id}/chat."""

    question: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    answer: str


class MessageResponse(BaseModel):
    message: str
