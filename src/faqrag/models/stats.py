"""Knowledge base statistics."""

from datetime import datetime

from pydantic import BaseModel


class SourceStats(BaseModel):
    url: str
    title: str
    chunks: int


class KnowledgeBaseStats(BaseModel):
    """Aggregate view of the chunk store."""

    total_chunks: int = 0
    total_sources: int = 0
    total_tokens: int = 0
    last_ingested_at: datetime | None = None
    sources: list[SourceStats] = []
