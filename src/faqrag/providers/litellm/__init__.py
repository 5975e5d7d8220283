"""LiteLLM provider clients for faqrag.

- LiteLLMClient: chat completion using LiteLLM
- LiteLLMEmbeddingClient: embeddings using LiteLLM
- ChatModels / EmbeddingModels: curated model constants

Usage:
    from faqrag.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.GPT_4O_MINI)
"""

from faqrag.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from faqrag.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
