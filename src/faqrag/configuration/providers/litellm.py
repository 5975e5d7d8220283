"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from faqrag.embedder import Embedder
    from faqrag.providers import LLMClient
    from faqrag.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for LLM and embedding calls.

    Either model may be None. Without an embedding model every vector comes
    from the hash embedder; without an LLM model answers are extractive.

    Args:
        llm: LiteLLM model identifier for answer generation, or None.
             Examples: "openai/gpt-4o-mini", "anthropic/claude-haiku-4-5-20251001"
        embedding: LiteLLM model identifier for embeddings, or None.
                   Examples: "openai/text-embedding-3-small"
        llm_api_key: API key passed to every completion call.
        embedding_api_key: API key passed to every embedding call.

    Example:
        provider = LiteLLMProvider(
            llm="openai/gpt-4o-mini",
            embedding="openai/text-embedding-3-small",
            llm_api_key="sk-...",
            embedding_api_key="sk-...",
        )

        # Fully offline: hash embeddings and extractive answers
        provider = LiteLLMProvider(llm=None, embedding=None)
    """

    llm: str | None
    embedding: str | None
    llm_api_key: str | None = None
    embedding_api_key: str | None = None

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder with a hash fallback.

        Args:
            settings: Settings containing fallback_dimension.
        """
        from faqrag.embedder import ClientEmbedder, HashEmbedder
        from faqrag.providers.litellm import LiteLLMEmbeddingClient

        fallback = HashEmbedder(dimension=settings.fallback_dimension)
        if not self.embedding:
            return ClientEmbedder(embedding_client=None, fallback=fallback)

        embedding_client = LiteLLMEmbeddingClient(
            model=self.embedding,
            api_key=self.embedding_api_key,
        )
        return ClientEmbedder(embedding_client=embedding_client, fallback=fallback)

    def build_llm_client(self, settings: Settings) -> LLMClient | None:
        """Build a LiteLLMClient for answer generation, or None without a model."""
        from faqrag.providers.litellm import LiteLLMClient

        if not self.llm:
            return None
        return LiteLLMClient(
            model=self.llm,
            api_key=self.llm_api_key,
        )
