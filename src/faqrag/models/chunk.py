"""Chunk data model."""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Chunk(BaseModel):
    """A bounded span of source text with its embedding."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    source_url: str
    title: str
    content: str
    embedding: list[float] = Field(default_factory=list)
    tokens: int = 1
    created_at: datetime = Field(default_factory=_utcnow)
