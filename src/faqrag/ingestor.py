"""Ingestion pipeline for faqrag."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from faqrag.exceptions import IngestionError, InputError
from faqrag.models import Chunk, Document, IngestionLogEntry, IngestRequest, IngestSummary
from faqrag.text import chunk_text, estimate_tokens
from faqrag.urls import origin_of

if TYPE_CHECKING:
    from faqrag.embedder import Embedder
    from faqrag.loaders import PDFFetcher, SiteCrawler
    from faqrag.stores import ChunkStore, IngestionLog

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int, str], None]
"""Callback for ingestion progress updates.

Args:
    event: Event type, one of "crawling", "fetching", "chunking", "embedding" or "storing"
    current: Current progress count (0 to total)
    total: Total items to process
    message: Human-readable status message

Example:
    def on_progress(event: str, current: int, total: int, message: str) -> None:
        print(f"[{event}] {current}/{total}: {message}")
"""

DEFAULT_EMBEDDING_BATCH_SIZE = 16


class Ingestor:
    """Orchestrates the ingestion pipeline.

    Pipeline:
    1. Validate the request (at least one source)
    2. Crawl the base URL and fetch each PDF
    3. Chunk every document
    4. Embed chunks in fixed-size batches, one batch at a time
    5. Replace the stored chunks of each origin
    6. Append an ingestion log entry
    """

    def __init__(
        self,
        chunk_store: ChunkStore,
        ingestion_log: IngestionLog,
        embedder: Embedder,
        crawler: SiteCrawler,
        pdf_fetcher: PDFFetcher,
        embedding_batch_size: int = DEFAULT_EMBEDDING_BATCH_SIZE,
    ) -> None:
        """Initialize the ingestor with all required components.

        Args:
            chunk_store: Store receiving the new chunks
            ingestion_log: History the run is recorded in
            embedder: Component to embed chunk text
            crawler: Loader for the site behind base_url
            pdf_fetcher: Loader for PDF URLs
            embedding_batch_size: Texts per embedding request
        """
        if embedding_batch_size < 1:
            raise ValueError("embedding_batch_size must be at least 1")
        self.chunk_store = chunk_store
        self.ingestion_log = ingestion_log
        self.embedder = embedder
        self.crawler = crawler
        self.pdf_fetcher = pdf_fetcher
        self.embedding_batch_size = embedding_batch_size

    def ingest(
        self,
        request: IngestRequest,
        on_progress: ProgressCallback | None = None,
    ) -> IngestSummary:
        """Ingest the sources named in the request.

        Args:
            request: Sources and segmentation parameters
            on_progress: Optional callback(event, current, total, message)

        Returns:
            IngestSummary with document and chunk counts

        Raises:
            InputError: If the request names no source
            IngestionError: If no document was retrieved or no chunk produced
        """

        def progress(event: str, current: int, total: int, message: str = "") -> None:
            if on_progress:
                on_progress(event, current, total, message)

        if not request.base_url and not request.pdf_urls:
            raise InputError("At least one of base_url or pdf_urls is required")

        documents = self._load_documents(request, progress)
        if not documents:
            raise IngestionError("No documents were ingested")

        chunks = self._build_chunks(documents, request, progress)
        if not chunks:
            raise IngestionError("Processed documents did not produce any chunks")

        by_origin: dict[str, list[Chunk]] = {}
        for chunk in chunks:
            by_origin.setdefault(origin_of(chunk.source_url), []).append(chunk)

        progress("storing", 0, len(by_origin), f"Storing {len(chunks)} chunks...")
        for i, (origin, origin_chunks) in enumerate(by_origin.items(), 1):
            self.chunk_store.replace_chunks_for_origin(origin, origin_chunks)
            progress("storing", i, len(by_origin), f"Replaced chunks for {origin}")

        summary = f"Ingested {len(documents)} documents and {len(chunks)} chunks"
        self.ingestion_log.append(
            IngestionLogEntry(
                summary=summary,
                base_url=request.base_url,
                pdf_urls=list(request.pdf_urls),
                chunk_count=len(chunks),
            )
        )
        logger.info(summary)

        return IngestSummary(documents=len(documents), chunks=len(chunks))

    def _load_documents(
        self,
        request: IngestRequest,
        progress: Callable[[str, int, int, str], None],
    ) -> list[Document]:
        documents: list[Document] = []

        if request.base_url:
            progress("crawling", 0, request.max_pages, f"Crawling {request.base_url}...")
            crawled = self.crawler.crawl(
                request.base_url,
                max_pages=request.max_pages,
                max_depth=request.crawl_depth,
            )
            documents.extend(crawled)
            progress("crawling", len(crawled), request.max_pages, f"Crawled {len(crawled)} pages")

        for i, pdf_url in enumerate(request.pdf_urls, 1):
            document = self.pdf_fetcher.fetch(pdf_url)
            if document is not None:
                documents.append(document)
            progress("fetching", i, len(request.pdf_urls), f"Fetched {pdf_url}")

        return documents

    def _build_chunks(
        self,
        documents: list[Document],
        request: IngestRequest,
        progress: Callable[[str, int, int, str], None],
    ) -> list[Chunk]:
        chunks: list[Chunk] = []
        for i, document in enumerate(documents, 1):
            pieces = chunk_text(document.text, request.chunk_size, request.chunk_overlap)
            progress("chunking", i, len(documents), f"{document.url}: {len(pieces)} chunks")
            if not pieces:
                continue

            vectors = self.embed_in_batches(pieces, progress)
            if len(vectors) != len(pieces):
                raise RuntimeError(
                    f"Embedding count mismatch: {len(pieces)} chunks, {len(vectors)} embeddings"
                )
            chunks.extend(
                Chunk(
                    source_url=document.url,
                    title=document.title,
                    content=content,
                    embedding=vector,
                    tokens=estimate_tokens(content),
                )
                for content, vector in zip(pieces, vectors, strict=True)
            )
        return chunks

    def embed_in_batches(
        self,
        texts: list[str],
        progress: Callable[[str, int, int, str], None] | None = None,
    ) -> list[list[float]]:
        """Embed texts in sequential batches of embedding_batch_size."""
        embeddings: list[list[float]] = []
        for start in range(0, len(texts), self.embedding_batch_size):
            batch = texts[start : start + self.embedding_batch_size]
            embeddings.extend(self.embedder.embed_texts(batch))
            if progress:
                progress("embedding", len(embeddings), len(texts), "Embedding chunks...")
        return embeddings
