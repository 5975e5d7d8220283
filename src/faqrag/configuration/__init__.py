"""Configuration objects for faqrag.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build model-backed components):
- LiteLLMProvider: Uses LiteLLM for LLM and embedding calls

Storage configurations (build data stores):
- LocalStorage: SQLite files in one directory

Example:
    from faqrag import LiteLLMProvider, LocalStorage, RagService

    service = RagService(
        provider=LiteLLMProvider(llm="openai/gpt-4o-mini", embedding="openai/text-embedding-3-small"),
        storage=LocalStorage("./faqrag_data"),
    )
"""

from faqrag.configuration.base import ProviderConfig, StorageConfig
from faqrag.configuration.providers import LiteLLMProvider
from faqrag.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
