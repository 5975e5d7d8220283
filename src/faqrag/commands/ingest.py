# src/faqrag/commands/ingest.py
"""Ingest command - crawl a site and fetch PDFs into the knowledge base.

This module provides the core ingest logic that the CLI uses.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from faqrag.commands.base import (
    CommandStage,
    IngestResult,
    ProgressCallback,
    ProgressUpdate,
)
from faqrag.config import (
    ConfigError,
    create_service,
    get_faqrag_config,
)
from faqrag.exceptions import FaqragError
from faqrag.models import IngestRequest

if TYPE_CHECKING:
    from faqrag.service import RagService


# Map internal stage names to CommandStage
STAGE_MAP = {
    "crawling": CommandStage.CRAWLING,
    "fetching": CommandStage.FETCHING,
    "chunking": CommandStage.CHUNKING,
    "embedding": CommandStage.EMBEDDING,
    "storing": CommandStage.STORING,
}


def build_request(
    base_url: str | None = None,
    pdf_urls: list[str] | None = None,
    crawl_depth: int | None = None,
    max_pages: int | None = None,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
) -> IngestRequest:
    """Build an IngestRequest, leaving unset fields at their defaults.

    Raises:
        ValidationError: If a field is out of range or a URL is not http(s)
    """
    fields: dict[str, object] = {"base_url": base_url, "pdf_urls": pdf_urls or []}
    for name, value in (
        ("crawl_depth", crawl_depth),
        ("max_pages", max_pages),
        ("chunk_size", chunk_size),
        ("chunk_overlap", chunk_overlap),
    ):
        if value is not None:
            fields[name] = value
    return IngestRequest.model_validate(fields)


def ingest(
    base_url: str | None = None,
    pdf_urls: list[str] | None = None,
    crawl_depth: int | None = None,
    max_pages: int | None = None,
    chunk_size: int | None = None,
    chunk_overlap: int | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_progress: ProgressCallback | None = None,
) -> IngestResult:
    """Ingest a site and/or PDFs into the knowledge base.

    Chunks of every origin that is ingested replace that origin's previous
    chunks. Unset segmentation parameters fall back to the configured
    Settings, then to the request defaults.

    Args:
        base_url: Site to crawl
        pdf_urls: PDF documents to fetch
        crawl_depth: Link depth from base_url (0..3)
        max_pages: Maximum pages to crawl (1..25)
        chunk_size: Words per chunk (100..2000)
        chunk_overlap: Words shared by consecutive chunks (0..500)
        data_dir: Override data directory (uses config if not provided)
        config_path: Override config file path
        on_progress: Callback for progress updates during ingestion

    Returns:
        IngestResult with document and chunk counts
    """
    config = get_faqrag_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return IngestResult(success=False, error=config.message)

    try:
        request = build_request(
            base_url=base_url,
            pdf_urls=pdf_urls,
            crawl_depth=crawl_depth,
            max_pages=max_pages,
            chunk_size=chunk_size if chunk_size is not None else config.settings.chunk_size,
            chunk_overlap=(
                chunk_overlap if chunk_overlap is not None else config.settings.chunk_overlap
            ),
        )
    except ValidationError as e:
        return IngestResult(success=False, error=f"Invalid ingest request: {e}")

    try:
        service = create_service(config)
    except Exception as e:
        return IngestResult(success=False, error=f"Failed to create service: {e}")

    with service:
        return ingest_with_service(service, request, on_progress=on_progress)


def ingest_with_service(
    service: RagService,
    request: IngestRequest,
    on_progress: ProgressCallback | None = None,
) -> IngestResult:
    """Ingest using an existing RagService instance.

    Args:
        service: Existing RagService instance
        request: Validated ingest request
        on_progress: Callback for progress updates

    Returns:
        IngestResult with document and chunk counts
    """

    def progress_adapter(event: str, current: int, total: int, message: str) -> None:
        """Adapt the ingestor's progress callback to our ProgressUpdate format."""
        if on_progress:
            on_progress(
                ProgressUpdate(
                    stage=STAGE_MAP.get(event, CommandStage.PROCESSING),
                    current=current,
                    total=total,
                    message=message,
                )
            )

    try:
        summary = service.ingest(request, on_progress=progress_adapter if on_progress else None)
    except FaqragError as e:
        return IngestResult(success=False, error=str(e))
    except (OSError, ValueError, RuntimeError) as e:
        return IngestResult(success=False, error=f"Ingestion failed: {type(e).__name__}: {e}")

    if on_progress:
        on_progress(ProgressUpdate(stage=CommandStage.COMPLETE, current=1, total=1))

    return IngestResult(
        success=True,
        documents=summary.documents,
        chunks=summary.chunks,
        summary=f"Ingested {summary.documents} documents and {summary.chunks} chunks",
    )
