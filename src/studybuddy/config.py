"""Runtime configuration read from the environment (and a local .env file)."""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DATA_DIR = Path(
    os.environ.get("STUDYBUDDY_DATA_DIR", Path(__file__).parent.parent.parent / "data")
)
ENVIRONMENT = os.environ.get("STUDYBUDDY_ENVIRONMENT", "development")
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.0-flash"


class GeminiConfig(BaseModel):
    """Credentials and endpoint settings for the generateContent API."""

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> GeminiConfig:
        return cls(
            api_key=os.environ.get("GEMINI_API_KEY") or None,
            base_url=os.environ.get("GEMINI_BASE_URL", DEFAULT_BASE_URL),
            model=os.environ.get("GEMINI_MODEL", DEFAULT_MODEL),
            timeout=float(os.environ.get("GEMINI_TIMEOUT", "60")),
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/v1beta/models/{self.model}:generateContent"
