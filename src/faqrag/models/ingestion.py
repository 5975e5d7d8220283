"""Ingestion request, summary and log models."""

from datetime import datetime, timezone
from urllib.parse import urlparse
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

DEFAULT_CHUNK_SIZE = 320
DEFAULT_CHUNK_OVERLAP = 60


def _check_http_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Not an http(s) URL: {value!r}")
    return value


class IngestRequest(BaseModel):
    """What to ingest and how to segment it.

    At least one of ``base_url`` or ``pdf_urls`` must be given; that check
    lives in the ingestor so it can raise the domain InputError.
    """

    base_url: str | None = None
    pdf_urls: list[str] = Field(default_factory=list)
    crawl_depth: int = Field(default=2, ge=0, le=3)
    max_pages: int = Field(default=10, ge=1, le=25)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=100, le=2000)
    chunk_overlap: int = Field(default=DEFAULT_CHUNK_OVERLAP, ge=0, le=500)

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        return _check_http_url(value)

    @field_validator("pdf_urls")
    @classmethod
    def _validate_pdf_urls(cls, value: list[str]) -> list[str]:
        return [_check_http_url(url) for url in value]


class IngestSummary(BaseModel):
    documents: int
    chunks: int


class IngestionLogEntry(BaseModel):
    """One line of the admin-visible ingestion history."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    summary: str
    base_url: str | None = None
    pdf_urls: list[str] = Field(default_factory=list)
    chunk_count: int = 0
