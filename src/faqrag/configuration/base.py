"""Protocol definitions for configuration objects.

These protocols define the interfaces for provider and storage configurations.
Implementations can use @dataclass(frozen=True) for immutability.

Protocols here, ABCs in stores/base.py: any frozen dataclass with the right
methods satisfies a configuration protocol, while store implementations
inherit from their ABC.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from faqrag.embedder import Embedder
    from faqrag.providers import LLMClient
    from faqrag.settings import Settings
    from faqrag.stores import ChunkStore, IngestionLog, SettingsStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the model-backed components:
    - Embedder: vectors for chunks and questions, degrading to hashing
    - LLMClient: answer generation, or None for extractive answers only

    Example implementation:
        @dataclass(frozen=True)
        class LiteLLMProvider:
            llm: str | None
            embedding: str | None

            def build_embedder(self, settings: Settings) -> Embedder: ...
            def build_llm_client(self, settings: Settings) -> LLMClient | None: ...
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder for chunks and questions.

        Args:
            settings: Settings containing fallback_dimension.
        """
        ...

    def build_llm_client(self, settings: Settings) -> LLMClient | None:
        """Build an LLM client for answer generation, or None if unavailable."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Storage configurations build the data stores:
    - ChunkStore: embedded chunks
    - IngestionLog: history of ingestion runs
    - SettingsStore: admin-editable application settings

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_stores(self) -> tuple[ChunkStore, IngestionLog, SettingsStore]: ...
    """

    def build_stores(self) -> tuple[ChunkStore, IngestionLog, SettingsStore]:
        """Build all three storage components.

        Returns:
            Tuple of (chunk_store, ingestion_log, settings_store)
        """
        ...
