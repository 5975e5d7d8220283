# tests/commands/test_ingest_command.py
"""Tests for the ingest command."""

from unittest.mock import patch

import httpx
import pytest

from faqrag.commands import ingest
from faqrag.commands.base import CommandStage
from faqrag.config import get_stores
from faqrag.configuration import LocalStorage
from faqrag.service import RagService

PAGE = (
    "<html><head><title>Help</title></head><body><main>"
    "<p>Reset your password from the account page.</p>"
    "</main></body></html>"
)


@pytest.fixture
def service(data_dir, mock_provider):
    def handler(request):
        if request.url.path == "/":
            return httpx.Response(200, headers={"content-type": "text/html"}, text=PAGE)
        return httpx.Response(404)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with RagService(
        provider=mock_provider, storage=LocalStorage(data_dir), http_client=client
    ) as service:
        yield service
    client.close()


class TestBuildRequest:
    def test_unset_fields_use_defaults(self) -> None:
        request = ingest.build_request(base_url="https://help.test/")
        assert request.crawl_depth == 2
        assert request.max_pages == 10

    def test_fields_passed_through(self) -> None:
        request = ingest.build_request(
            pdf_urls=["https://help.test/a.pdf"], crawl_depth=0, max_pages=3, chunk_size=200
        )
        assert request.pdf_urls == ["https://help.test/a.pdf"]
        assert request.crawl_depth == 0
        assert request.max_pages == 3
        assert request.chunk_size == 200


class TestIngestCommand:
    """Tests for ingest.ingest()."""

    def test_requires_a_source(self, data_dir) -> None:
        result = ingest.ingest(data_dir=data_dir)

        assert result.success is False
        assert "At least one of base_url or pdf_urls" in result.error

    def test_invalid_request(self, data_dir) -> None:
        result = ingest.ingest(base_url="https://help.test/", crawl_depth=9, data_dir=data_dir)

        assert result.success is False
        assert result.error.startswith("Invalid ingest request")

    def test_invalid_url(self, data_dir) -> None:
        result = ingest.ingest(base_url="help.test", data_dir=data_dir)
        assert result.success is False

    def test_config_error(self) -> None:
        with open("faqrag.yaml", "w", encoding="utf-8") as f:
            f.write("provider: unknown\n")

        result = ingest.ingest(base_url="https://help.test/")

        assert result.success is False
        assert "Unknown provider" in result.error


class TestIngestWithService:
    def test_success(self, service, data_dir) -> None:
        request = ingest.build_request(base_url="https://help.test/")

        result = ingest.ingest_with_service(service, request)

        assert result.success is True
        assert result.documents == 1
        assert result.chunks == 1
        assert result.summary == "Ingested 1 documents and 1 chunks"
        assert get_stores(data_dir)["chunk_store"].count_chunks() == 1

    def test_progress_updates(self, service) -> None:
        updates = []
        request = ingest.build_request(base_url="https://help.test/")

        ingest.ingest_with_service(service, request, on_progress=updates.append)

        stages = [u.stage for u in updates]
        assert stages[0] == CommandStage.CRAWLING
        assert CommandStage.EMBEDDING in stages
        assert stages[-1] == CommandStage.COMPLETE

    def test_nothing_ingested(self, service) -> None:
        request = ingest.build_request(base_url="https://help.test/missing")

        result = ingest.ingest_with_service(service, request)

        assert result.success is False
        assert result.error == "No documents were ingested"

    def test_settings_supply_segmentation_defaults(self, data_dir, monkeypatch) -> None:
        monkeypatch.setenv("FAQRAG_CHUNK_SIZE", "150")
        monkeypatch.setenv("FAQRAG_CHUNK_OVERLAP", "10")

        with patch("faqrag.commands.ingest.ingest_with_service") as run:
            ingest.ingest(base_url="https://help.test/", data_dir=data_dir)

        request = run.call_args.args[1]
        assert request.chunk_size == 150
        assert request.chunk_overlap == 10

    def test_explicit_segmentation_wins(self, data_dir, monkeypatch) -> None:
        monkeypatch.setenv("FAQRAG_CHUNK_SIZE", "150")

        with patch("faqrag.commands.ingest.ingest_with_service") as run:
            ingest.ingest(base_url="https://help.test/", chunk_size=400, data_dir=data_dir)

        assert run.call_args.args[1].chunk_size == 400
