# tests/test_configuration.py
"""Tests for the configuration module."""

import os
from dataclasses import FrozenInstanceError

import pytest

from faqrag.configuration import LiteLLMProvider, LocalStorage, ProviderConfig, StorageConfig
from faqrag.embedder import ClientEmbedder, HashEmbedder
from faqrag.providers import LiteLLMClient, LiteLLMEmbeddingClient
from faqrag.settings import Settings
from faqrag.stores import SQLiteChunkStore, SQLiteIngestionLog, SQLiteSettingsStore


class TestLocalStorage:
    def test_build_stores_creates_all_three(self, temp_dir):
        chunk_store, ingestion_log, settings_store = LocalStorage(temp_dir).build_stores()

        assert isinstance(chunk_store, SQLiteChunkStore)
        assert isinstance(ingestion_log, SQLiteIngestionLog)
        assert isinstance(settings_store, SQLiteSettingsStore)
        assert sorted(os.listdir(temp_dir)) == ["chunks.db", "ingestions.db", "settings.db"]

    def test_build_stores_creates_directory(self, temp_dir):
        new_dir = os.path.join(temp_dir, "new_storage")
        LocalStorage(new_dir).build_stores()
        assert os.path.isdir(new_dir)

    def test_is_frozen_dataclass(self, temp_dir):
        storage = LocalStorage(temp_dir)
        with pytest.raises(FrozenInstanceError):
            storage.data_dir = "/other/path"  # type: ignore[misc]

    def test_satisfies_protocol(self, temp_dir):
        assert isinstance(LocalStorage(temp_dir), StorageConfig)


class TestLiteLLMProvider:
    def test_satisfies_protocol(self):
        assert isinstance(LiteLLMProvider(llm=None, embedding=None), ProviderConfig)

    def test_build_embedder_with_model(self):
        provider = LiteLLMProvider(
            llm=None, embedding="openai/text-embedding-3-small", embedding_api_key="sk-e"
        )
        embedder = provider.build_embedder(Settings(fallback_dimension=32))

        assert isinstance(embedder, ClientEmbedder)
        assert embedder.has_client
        client = embedder._client
        assert isinstance(client, LiteLLMEmbeddingClient)
        assert client.model == "openai/text-embedding-3-small"
        assert client.api_key == "sk-e"
        assert isinstance(embedder.fallback, HashEmbedder)
        assert embedder.fallback.dimension == 32

    def test_build_embedder_without_model_hashes(self):
        embedder = LiteLLMProvider(llm=None, embedding=None).build_embedder(Settings())
        assert isinstance(embedder, ClientEmbedder)
        assert not embedder.has_client
        assert len(embedder.embed_text("offline")) == 768

    def test_build_llm_client(self):
        provider = LiteLLMProvider(llm="openai/gpt-4o-mini", embedding=None, llm_api_key="sk-l")
        client = provider.build_llm_client(Settings())

        assert isinstance(client, LiteLLMClient)
        assert client.model == "openai/gpt-4o-mini"
        assert client.api_key == "sk-l"

    def test_build_llm_client_without_model(self):
        assert LiteLLMProvider(llm=None, embedding=None).build_llm_client(Settings()) is None

    def test_is_frozen_dataclass(self):
        provider = LiteLLMProvider(llm="openai/gpt-4o-mini", embedding=None)
        with pytest.raises(FrozenInstanceError):
            provider.llm = "other"  # type: ignore[misc]
