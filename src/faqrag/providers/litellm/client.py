"""LiteLLM client implementations for LLM and embedding APIs."""

from typing import Any

import litellm

from faqrag.providers.base import EmbeddingClient, LLMClient
from faqrag.providers.litellm.models import ChatModels, EmbeddingModels


class LiteLLMClient(LLMClient):
    """LiteLLM-based LLM client for answer generation.

    Each call is attempted once, with LiteLLM retries turned off.

    Supports any model available through LiteLLM (OpenAI, Anthropic, Gemini,
    Bedrock, local Ollama, etc.).

    Example:
        from faqrag.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GPT_4O_MINI)
        response = client.complete([{"role": "user", "content": "Hello"}])
    """

    def __init__(
        self,
        model: str = ChatModels.GPT_4O_MINI,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: Default LiteLLM model identifier, used when a call does not
                   name one. Examples: "openai/gpt-4o-mini", "ollama/llama3.2"
            api_key: Optional API key passed through to LiteLLM. If None,
                     LiteLLM reads the provider's usual environment variable.
        """
        self.model = model
        self.api_key = api_key

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
        model: str | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        model_name = model or self.model
        completion_kwargs: dict[str, Any] = {
            "model": model_name,
            "messages": messages,
            "drop_params": True,
            "num_retries": 0,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if max_tokens is not None:
            completion_kwargs["max_tokens"] = max_tokens
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key

        response = litellm.completion(**completion_kwargs)

        if not response.choices:
            raise ValueError(f"LLM returned no choices for model {model_name}")
        content = response.choices[0].message.content
        if content is None:
            raise ValueError(f"LLM returned None content for model {model_name}")
        return str(content)


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Each batch is requested once, with LiteLLM retries turned off.

    Example:
        from faqrag.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL)
        embeddings = client.embed(["Hello world", "How are you?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.TEXT_3_SMALL,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "openai/text-embedding-3-small", "gemini/gemini-embedding-001"
            api_key: Optional API key passed through to LiteLLM.
        """
        self.model = model
        self.api_key = api_key

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        embedding_kwargs: dict[str, Any] = {
            "model": self.model,
            "input": texts,
            "num_retries": 0,
        }
        if self.api_key:
            embedding_kwargs["api_key"] = self.api_key

        response = litellm.embedding(**embedding_kwargs)
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]
