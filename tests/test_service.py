# tests/test_service.py
"""Tests for the RagService class."""

import os

import httpx
import pytest

from faqrag.configuration import LocalStorage
from faqrag.exceptions import InputError
from faqrag.ingestor import Ingestor
from faqrag.models import AppSettings, IngestRequest
from faqrag.retriever import EMPTY_STORE_ANSWER, GREETING_ANSWER, Retriever
from faqrag.service import RagService
from faqrag.settings import Settings
from faqrag.stores import SQLiteChunkStore, SQLiteIngestionLog, SQLiteSettingsStore

SITE = {
    "/": (
        "<html><head><title>Help Center</title></head><body><main>"
        "<p>You can reset your password from the account settings page at any time.</p>"
        '<a href="/billing">Billing</a>'
        "</main></body></html>"
    ),
    "/billing": (
        "<html><head><title>Billing</title></head><body><main>"
        "<p>Invoices are emailed to the billing contact on the first day of every month.</p>"
        "</main></body></html>"
    ),
}


def site_handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "help.test" and request.url.path in SITE:
        return httpx.Response(
            200, headers={"content-type": "text/html"}, text=SITE[request.url.path]
        )
    return httpx.Response(404)


@pytest.fixture
def http_client():
    client = httpx.Client(transport=httpx.MockTransport(site_handler))
    yield client
    client.close()


@pytest.fixture
def service(temp_dir, mock_provider, http_client):
    return RagService(
        provider=mock_provider,
        storage=LocalStorage(temp_dir),
        settings=Settings(min_score=0.05),
        http_client=http_client,
    )


class TestRagServiceInit:
    def test_init_with_storage_bundle(self, temp_dir, mock_provider):
        with RagService(provider=mock_provider, storage=LocalStorage(temp_dir)) as service:
            assert isinstance(service.chunk_store, SQLiteChunkStore)
            assert isinstance(service.ingestion_log, SQLiteIngestionLog)
            assert isinstance(service.settings_store, SQLiteSettingsStore)

    def test_init_with_explicit_stores(self, stores, mock_provider):
        service = RagService.from_stores(provider=mock_provider, **stores)

        assert service.chunk_store is stores["chunk_store"]
        assert service.ingestion_log is stores["ingestion_log"]
        assert service.settings_store is stores["settings_store"]
        service.close()

    def test_init_rejects_mixed_storage(self, temp_dir, stores, mock_provider):
        with pytest.raises(ValueError, match="Cannot mix"):
            RagService(
                provider=mock_provider,
                storage=LocalStorage(temp_dir),
                chunk_store=stores["chunk_store"],
            )

    def test_init_requires_storage_or_explicit_stores(self, stores, mock_provider):
        with pytest.raises(ValueError, match="Must provide either"):
            RagService(provider=mock_provider, chunk_store=stores["chunk_store"])

    def test_default_settings(self, stores, mock_provider):
        service = RagService.from_stores(provider=mock_provider, **stores)
        assert service.settings == Settings()
        service.close()

    def test_builds_components_from_provider(self, stores, mock_provider):
        service = RagService.from_stores(provider=mock_provider, **stores)
        assert service.embedder is mock_provider._embedder
        assert service.llm_client is None
        service.close()


class TestHttpClientOwnership:
    def test_owned_client_closed(self, stores, mock_provider):
        service = RagService.from_stores(provider=mock_provider, **stores)
        service.close()
        assert service._http_client.is_closed

    def test_shared_client_left_open(self, stores, mock_provider, http_client):
        with RagService.from_stores(provider=mock_provider, http_client=http_client, **stores):
            pass
        assert not http_client.is_closed


class TestFactories:
    def test_retriever(self, service):
        retriever = service.retriever()
        assert isinstance(retriever, Retriever)
        assert retriever.ranker.min_score == 0.05
        assert not retriever.composer.uses_model

    def test_ingestor_uses_batch_size(self, stores, mock_provider):
        service = RagService.from_stores(
            provider=mock_provider, settings=Settings(embedding_batch_size=4), **stores
        )
        ingestor = service.ingestor()
        assert isinstance(ingestor, Ingestor)
        assert ingestor.embedding_batch_size == 4
        service.close()


class TestIngestAndQuery:
    def test_empty_knowledge_base(self, service):
        assert service.run_query("How do I reset my password?").answer == EMPTY_STORE_ANSWER

    def test_blank_question(self, service):
        with pytest.raises(InputError):
            service.run_query("")

    def test_end_to_end(self, service):
        summary = service.ingest(IngestRequest(base_url="https://help.test/", crawl_depth=1))

        assert summary.documents == 2
        assert summary.chunks == 2

        result = service.run_query("How do I reset my password?")
        assert result.sources
        assert result.sources[0].url == "https://help.test/"
        assert result.sources[0].title == "Help Center"
        assert "[S1]" in result.answer

    def test_greeting(self, service):
        service.ingest(IngestRequest(base_url="https://help.test/"))
        assert service.run_query("Hello!").answer == GREETING_ANSWER

    def test_stats_and_history(self, service):
        service.ingest(IngestRequest(base_url="https://help.test/"))

        stats = service.stats()
        assert stats.total_chunks == 2
        assert stats.total_sources == 2

        [entry] = service.ingestion_history()
        assert entry.base_url == "https://help.test/"
        assert entry.chunk_count == 2

    def test_clear(self, service):
        service.ingest(IngestRequest(base_url="https://help.test/"))
        service.clear()
        assert service.stats().total_chunks == 0
        assert service.ingestion_history() == []


class TestAppSettings:
    def test_defaults(self, service):
        assert service.get_app_settings() == AppSettings()

    def test_update(self, service):
        updated = service.update_app_settings(max_tokens=128)
        assert updated.max_tokens == 128
        assert service.get_app_settings().max_tokens == 128

    def test_update_unknown_key(self, service):
        with pytest.raises(ValueError):
            service.update_app_settings(theme="dark")


def test_local_storage_files(temp_dir, mock_provider):
    data_dir = os.path.join(temp_dir, "kb")
    RagService(provider=mock_provider, storage=LocalStorage(data_dir)).close()
    assert os.path.exists(os.path.join(data_dir, "chunks.db"))
