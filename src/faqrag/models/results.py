"""Result data models for faqrag queries."""

from pydantic import BaseModel

from faqrag.models.chunk import Chunk


class RankedChunk(BaseModel):
    """A chunk paired with its relevance score for one query."""

    chunk: Chunk
    score: float


class SourceCitation(BaseModel):
    """A cited source, numbered [S1], [S2]... in list order."""

    id: str
    title: str
    url: str
    snippet: str
    score: float


class QueryResult(BaseModel):
    """Full response to a user question."""

    answer: str
    sources: list[SourceCitation] = []
