"""Shared pytest fixtures."""

import os
import tempfile
from dataclasses import dataclass
from typing import Any

import pytest

from faqrag.embedder import ClientEmbedder, HashEmbedder
from faqrag.models import Chunk


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def stores(temp_dir):
    """Create SQLite store instances for testing."""
    from faqrag.stores import SQLiteChunkStore, SQLiteIngestionLog, SQLiteSettingsStore

    return {
        "chunk_store": SQLiteChunkStore(os.path.join(temp_dir, "chunks.db")),
        "ingestion_log": SQLiteIngestionLog(os.path.join(temp_dir, "ingestions.db")),
        "settings_store": SQLiteSettingsStore(os.path.join(temp_dir, "settings.db")),
    }


@pytest.fixture
def hash_embedder():
    """Deterministic embedder with a small dimension."""
    return HashEmbedder(dimension=64)


@pytest.fixture
def make_chunk(hash_embedder):
    """Build a chunk embedded with the test hash embedder."""

    def _make(content: str, source_url: str = "https://docs.example.com/page", title: str = "Page"):
        return Chunk(
            source_url=source_url,
            title=title,
            content=content,
            embedding=hash_embedder.embed_text(content),
        )

    return _make


@pytest.fixture
def mock_provider(hash_embedder):
    """Create a provider with hash embeddings and an optional LLM client.

    This provider satisfies the ProviderConfig protocol.
    """

    @dataclass(frozen=True)
    class MockProvider:
        """Mock provider that wraps fixed components."""

        _embedder: Any
        _llm_client: Any = None

        def build_embedder(self, settings: Any) -> Any:
            return self._embedder

        def build_llm_client(self, settings: Any) -> Any:
            return self._llm_client

    return MockProvider(_embedder=ClientEmbedder(embedding_client=None, fallback=hash_embedder))
