"""Provider implementations for faqrag.

This module contains LLM and embedding provider abstractions:
- LLMClient: Abstract base class for LLM completion providers
- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementations

Usage:
    from faqrag.providers import LLMClient, EmbeddingClient
    from faqrag.providers.litellm import LiteLLMClient, ChatModels
"""

from faqrag.providers.base import EmbeddingClient, LLMClient
from faqrag.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
