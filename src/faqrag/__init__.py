"""faqrag - answer FAQ questions from your documentation.

Crawl a site and fetch PDFs into a chunk store, then answer questions from
the most relevant chunks: with a generative model when one is configured,
extractively otherwise.

Quick Start (LiteLLM + Local Storage):
    from faqrag import IngestRequest, LiteLLMProvider, LocalStorage, RagService

    with RagService(
        provider=LiteLLMProvider(
            llm="openai/gpt-4o-mini",
            embedding="openai/text-embedding-3-small",
        ),
        storage=LocalStorage("./faqrag_data"),
    ) as service:
        service.ingest(IngestRequest(base_url="https://docs.example.com"))
        result = service.run_query("How do I reset my password?")

Offline (hash embeddings, extractive answers):
    service = RagService(
        provider=LiteLLMProvider(llm=None, embedding=None),
        storage=LocalStorage("./faqrag_data"),
    )
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("faqrag")
except PackageNotFoundError:
    # Running from a source tree without an installed distribution
    __version__ = "unknown"

from faqrag.composer import AnswerComposer

# Configuration objects
from faqrag.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)
from faqrag.embedder import ClientEmbedder, Embedder, HashEmbedder, cosine_similarity
from faqrag.exceptions import FaqragError, IngestionError, InputError

# Pipelines
from faqrag.ingestor import Ingestor
from faqrag.models import (
    AppSettings,
    Chunk,
    Document,
    IngestionLogEntry,
    IngestRequest,
    IngestSummary,
    KnowledgeBaseStats,
    QueryResult,
    RankedChunk,
    SourceCitation,
)

# Provider ABCs
from faqrag.providers import EmbeddingClient, LLMClient
from faqrag.ranker import Ranker
from faqrag.retriever import Retriever

# Service context
from faqrag.service import RagService
from faqrag.settings import Settings

# Storage ABCs
from faqrag.stores import (
    ChunkStore,
    IngestionLog,
    SettingsStore,
    SQLiteChunkStore,
    SQLiteIngestionLog,
    SQLiteSettingsStore,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "AppSettings",
    "Chunk",
    "Document",
    "IngestionLogEntry",
    "IngestRequest",
    "IngestSummary",
    "KnowledgeBaseStats",
    "QueryResult",
    "RankedChunk",
    "SourceCitation",
    # Errors
    "FaqragError",
    "IngestionError",
    "InputError",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Storage
    "ChunkStore",
    "IngestionLog",
    "SettingsStore",
    "SQLiteChunkStore",
    "SQLiteIngestionLog",
    "SQLiteSettingsStore",
    # Embedding
    "Embedder",
    "ClientEmbedder",
    "HashEmbedder",
    "cosine_similarity",
    # Provider ABCs
    "LLMClient",
    "EmbeddingClient",
    # Pipelines
    "AnswerComposer",
    "Ingestor",
    "Ranker",
    "Retriever",
    # Service context
    "RagService",
]
