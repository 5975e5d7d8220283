# src/faqrag/commands/base.py
"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Progress callbacks for long-running operations
- Confirm callbacks for destructive commands (like clear)
- Result types for each command
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class CommandStage(Enum):
    """Stages of command execution for progress reporting."""

    # Ingest stages
    CRAWLING = "Crawling"
    FETCHING = "Fetching"
    CHUNKING = "Chunking"
    EMBEDDING = "Embedding"
    STORING = "Storing"

    # General stages
    PROCESSING = "Processing"
    COMPLETE = "Complete"


@dataclass
class ProgressUpdate:
    """Progress update for long-running operations.

    Attributes:
        stage: Current stage of the operation
        current: Current item number (1-indexed)
        total: Total number of items (0 when unknown)
        message: Optional status message
    """

    stage: CommandStage
    current: int
    total: int
    message: str | None = None

    @property
    def percentage(self) -> int:
        """Progress as percentage (0-100). Returns 0 when total is unknown."""
        if self.total == 0:
            return 0
        return min(100, int(100 * self.current / self.total))


# Callback type for progress updates
ProgressCallback = Callable[[ProgressUpdate], None]


@dataclass
class ConfirmRequest:
    """Request for a yes/no confirmation before a destructive action."""

    message: str
    details: str | None = None


# Callback type for confirmations - returns True to proceed
ConfirmCallback = Callable[[ConfirmRequest], bool]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class IngestResult(CommandResult):
    """Result of the ingest command.

    Attributes:
        documents: Number of documents retrieved
        chunks: Number of chunks stored
        summary: The ingestion log line
    """

    documents: int = 0
    chunks: int = 0
    summary: str = ""


@dataclass
class Citation:
    """A single cited source of an answer."""

    title: str
    url: str
    snippet: str
    score: float
    chunk_id: str | None = None


@dataclass
class QueryResult(CommandResult):
    """Result of the query command.

    Attributes:
        query: The original question
        answer: Answer prose (model or extractive)
        sources: Cited sources, numbered [S1], [S2]... in list order
    """

    query: str = ""
    answer: str | None = None
    sources: list[Citation] = field(default_factory=list)


@dataclass
class SourceInfo:
    """Information about an indexed source URL."""

    url: str
    title: str
    chunk_count: int


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        total_sources: Number of indexed source URLs
        total_chunks: Total chunks in the store
        total_tokens: Estimated tokens across all chunks
        last_ingested_at: ISO timestamp of the newest chunk, if any
        sources: Per-source breakdown (if detailed)
    """

    total_sources: int = 0
    total_chunks: int = 0
    total_tokens: int = 0
    last_ingested_at: str | None = None
    sources: list[SourceInfo] = field(default_factory=list)


@dataclass
class ClearResult(CommandResult):
    """Result of the clear command."""

    chunks_deleted: int = 0


@dataclass
class AppSettingsResult(CommandResult):
    """Result of the settings command: the admin-editable settings after any update."""

    model: str = ""
    max_tokens: int = 0
    brand_color: str = ""
    allow_origins: list[str] = field(default_factory=list)


@dataclass
class LogEntryInfo:
    """One ingestion run."""

    created_at: str
    summary: str
    base_url: str | None
    pdf_urls: list[str]
    chunk_count: int


@dataclass
class LogResult(CommandResult):
    """Result of the log command, newest entry first."""

    entries: list[LogEntryInfo] = field(default_factory=list)


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        llm_model: LLM model name, None in extractive mode
        embedding_model: Embedding model name, None when hashing
        answer_mode: "model" or "extractive"
        embedding_mode: "model" or "hash"
        data_dir: Data directory path
        settings: List of behavioral settings with sources
        config_path: Path to config file (if found)
    """

    llm_model: str | None = None
    embedding_model: str | None = None
    answer_mode: str = "extractive"
    embedding_mode: str = "hash"
    data_dir: str = ""
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None
