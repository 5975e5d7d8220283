"""Client-based embedder with hash fallback."""

import logging
from numbers import Real

from faqrag.embedder.base import Embedder
from faqrag.embedder.hashing import HashEmbedder
from faqrag.providers.base import EmbeddingClient

logger = logging.getLogger(__name__)


class ClientEmbedder(Embedder):
    """Embedder that uses an EmbeddingClient, degrading to a fallback embedder.

    When no client is configured every call goes straight to the fallback.
    When the client raises, or returns something that is not one non-empty
    numeric vector per input, the whole batch is re-embedded with the
    fallback. Callers never see an upstream failure.

    Example:
        from faqrag.providers.litellm import LiteLLMEmbeddingClient
        from faqrag.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(model="openai/text-embedding-3-small")
        embedder = ClientEmbedder(embedding_client=client)
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient | None = None,
        fallback: Embedder | None = None,
    ) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation, or None to
                always use the fallback.
            fallback: Embedder used when the client is absent or fails.
                Defaults to a HashEmbedder.
        """
        self._client = embedding_client
        self.fallback = fallback or HashEmbedder()

    @property
    def has_client(self) -> bool:
        return self._client is not None

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        if not texts:
            return []
        if self._client is None:
            return self.fallback.embed_texts(texts)

        try:
            vectors = self._client.embed(texts)
        except Exception as e:
            logger.warning("Embedding request failed, using fallback: %s", e)
            return self.fallback.embed_texts(texts)

        if not _is_well_formed(vectors, len(texts)):
            logger.warning(
                "Embedding response malformed (%d texts), using fallback", len(texts)
            )
            return self.fallback.embed_texts(texts)

        return [[float(value) for value in vector] for vector in vectors]


def _is_well_formed(vectors: object, expected: int) -> bool:
    if not isinstance(vectors, list) or len(vectors) != expected:
        return False
    for vector in vectors:
        if not isinstance(vector, (list, tuple)) or not vector:
            return False
        if not all(isinstance(value, Real) for value in vector):
            return False
    return True
