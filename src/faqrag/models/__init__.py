"""Data models for faqrag."""

from faqrag.models.chunk import Chunk
from faqrag.models.document import Document
from faqrag.models.ingestion import IngestionLogEntry, IngestRequest, IngestSummary
from faqrag.models.results import QueryResult, RankedChunk, SourceCitation
from faqrag.models.settings import AppSettings
from faqrag.models.stats import KnowledgeBaseStats, SourceStats

__all__ = [
    "AppSettings",
    "Chunk",
    "Document",
    "IngestRequest",
    "IngestSummary",
    "IngestionLogEntry",
    "KnowledgeBaseStats",
    "QueryResult",
    "RankedChunk",
    "SourceCitation",
    "SourceStats",
]
