"""Abstract base classes for LLM and embedding providers."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Abstract base class for LLM completion providers.

    The interface is intentionally minimal so any chat-style API can back it.

    Example:
        class MyLLMClient(LLMClient):
            def complete(self, messages, temperature=None, max_tokens=None, model=None):
                return my_api.chat(messages, temp=temperature, model=model or "default")
    """

    model: str

    @abstractmethod
    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
        model: str | None = None,
    ) -> str:
        """Generate a completion for the given messages.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
                      Example: [{"role": "user", "content": "Hello"}]
            temperature: Optional temperature for generation (0.0-1.0).
                         If None, use provider default.
            max_tokens: Optional cap on generated tokens.
            model: Optional model identifier overriding the client default
                   for this call only.

        Returns:
            The generated text response.
        """
        ...


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def embed(self, texts):
                return my_api.embed_batch(texts)
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
        """
        ...
