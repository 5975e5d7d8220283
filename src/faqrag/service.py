# src/faqrag/service.py
"""Central service context for faqrag."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

import httpx

from faqrag.settings import Settings

if TYPE_CHECKING:
    from faqrag.configuration import ProviderConfig, StorageConfig
    from faqrag.ingestor import Ingestor, ProgressCallback
    from faqrag.models import (
        AppSettings,
        IngestionLogEntry,
        IngestRequest,
        IngestSummary,
        KnowledgeBaseStats,
        QueryResult,
    )
    from faqrag.providers import LLMClient
    from faqrag.retriever import Retriever
    from faqrag.stores import ChunkStore, IngestionLog, SettingsStore

logger = logging.getLogger(__name__)


class RagService:
    """Long-lived service context for faqrag.

    RagService bundles the stores, the embedder, the LLM client and the HTTP
    client together so you can configure once and answer questions or ingest
    sources from it. Nothing is held in module-level state.

    There are two ways to create a RagService:

    1. With a storage bundle:

        from faqrag import LiteLLMProvider, LocalStorage, RagService

        service = RagService(
            provider=LiteLLMProvider(
                llm="openai/gpt-4o-mini",
                embedding="openai/text-embedding-3-small",
            ),
            storage=LocalStorage("./faqrag_data"),
        )
        result = service.run_query("How do I reset my password?")

    2. With explicit stores:

        from faqrag.stores import SQLiteChunkStore, SQLiteIngestionLog, SQLiteSettingsStore

        service = RagService.from_stores(
            provider=LiteLLMProvider(llm=None, embedding=None),
            chunk_store=SQLiteChunkStore("./data/chunks.db"),
            ingestion_log=SQLiteIngestionLog("./data/ingestions.db"),
            settings_store=SQLiteSettingsStore("./data/settings.db"),
        )
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        chunk_store: ChunkStore | None = None,
        ingestion_log: IngestionLog | None = None,
        settings_store: SettingsStore | None = None,
        # Common
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Create a RagService.

        Args:
            provider: Provider configuration (builds embedder and LLM client).
            storage: Storage bundle. Mutually exclusive with explicit stores.
            chunk_store: Explicit chunk store.
            ingestion_log: Explicit ingestion log.
            settings_store: Explicit settings store.
            settings: Behavioral settings (thresholds, weights, batch sizes).
            http_client: Client the loaders fetch with. Created (and owned) if None.

        Raises:
            ValueError: If neither storage bundle nor all explicit stores are provided,
                       or if both are provided.
        """
        self._settings = settings if settings is not None else Settings()

        if storage is not None:
            if any([chunk_store, ingestion_log, settings_store]):
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            self.chunk_store, self.ingestion_log, self.settings_store = storage.build_stores()

        elif all([chunk_store, ingestion_log, settings_store]):
            self.chunk_store = cast("ChunkStore", chunk_store)
            self.ingestion_log = cast("IngestionLog", ingestion_log)
            self.settings_store = cast("SettingsStore", settings_store)

        else:
            raise ValueError(
                "Must provide either 'storage' bundle or all explicit stores "
                "(chunk_store, ingestion_log, settings_store)"
            )

        self.embedder = provider.build_embedder(self._settings)
        self.llm_client: LLMClient | None = provider.build_llm_client(self._settings)

        self._owns_http_client = http_client is None
        self._http_client = http_client if http_client is not None else httpx.Client()

    @classmethod
    def from_stores(
        cls,
        *,
        provider: ProviderConfig,
        chunk_store: ChunkStore,
        ingestion_log: IngestionLog,
        settings_store: SettingsStore,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
    ) -> RagService:
        """Create a RagService with explicit stores."""
        return cls(
            provider=provider,
            chunk_store=chunk_store,
            ingestion_log=ingestion_log,
            settings_store=settings_store,
            settings=settings,
            http_client=http_client,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    def retriever(self) -> Retriever:
        """Create a Retriever using this service's stores and clients."""
        from faqrag.composer import AnswerComposer
        from faqrag.ranker import Ranker
        from faqrag.retriever import Retriever

        return Retriever(
            chunk_store=self.chunk_store,
            settings_store=self.settings_store,
            embedder=self.embedder,
            ranker=Ranker.from_settings(self._settings),
            composer=AnswerComposer.from_settings(self._settings, self.llm_client),
        )

    def ingestor(self) -> Ingestor:
        """Create an Ingestor using this service's stores and HTTP client."""
        from faqrag.ingestor import Ingestor
        from faqrag.loaders import PDFFetcher, SiteCrawler

        return Ingestor(
            chunk_store=self.chunk_store,
            ingestion_log=self.ingestion_log,
            embedder=self.embedder,
            crawler=SiteCrawler(self._http_client),
            pdf_fetcher=PDFFetcher(self._http_client),
            embedding_batch_size=self._settings.embedding_batch_size,
        )

    def run_query(self, question: str) -> QueryResult:
        """Answer a question from the knowledge base.

        Never raises for model or embedding failures.

        Raises:
            InputError: If the question is blank
        """
        return self.retriever().get_answer(question)

    def ingest(
        self,
        request: IngestRequest,
        on_progress: ProgressCallback | None = None,
    ) -> IngestSummary:
        """Ingest the sources named in the request.

        Raises:
            InputError: If the request names no source
            IngestionError: If nothing could be ingested
        """
        return self.ingestor().ingest(request, on_progress=on_progress)

    def stats(self) -> KnowledgeBaseStats:
        return self.chunk_store.stats()

    def ingestion_history(self) -> list[IngestionLogEntry]:
        return self.ingestion_log.entries()

    def get_app_settings(self) -> AppSettings:
        return self.settings_store.get_settings()

    def update_app_settings(self, **changes: Any) -> AppSettings:
        return self.settings_store.update_settings(**changes)

    def clear(self) -> None:
        """Delete every chunk and the ingestion history."""
        self.chunk_store.clear()
        self.ingestion_log.clear()
        logger.info("Knowledge base cleared")

    def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> RagService:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
