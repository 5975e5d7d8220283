# src/faqrag/commands/__init__.py
"""UI-agnostic command layer for faqrag.

Command functions return data structures, allowing UIs to render results
appropriately.

Usage:
    from faqrag.commands import ingest, query, status

    # Crawl a documentation site
    result = ingest.ingest(base_url="https://docs.example.com", on_progress=my_callback)

    # Ask a question
    result = query.query("How do I rotate an API key?")

    # Get knowledge base statistics
    result = status.status()
"""

from faqrag.commands import clear, config_cmd, ingest, log, query, settings_cmd, status
from faqrag.commands.base import (
    AppSettingsResult,
    Citation,
    ClearResult,
    CommandResult,
    CommandStage,
    ConfigResult,
    ConfirmCallback,
    ConfirmRequest,
    IngestResult,
    LogEntryInfo,
    LogResult,
    ProgressCallback,
    ProgressUpdate,
    QueryResult,
    SettingInfo,
    SourceInfo,
    StatusResult,
)

__all__ = [
    # Base types
    "CommandStage",
    "ProgressUpdate",
    "ProgressCallback",
    "ConfirmRequest",
    "ConfirmCallback",
    "CommandResult",
    # Result types
    "IngestResult",
    "QueryResult",
    "Citation",
    "StatusResult",
    "SourceInfo",
    "ClearResult",
    "AppSettingsResult",
    "LogResult",
    "LogEntryInfo",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "ingest",
    "query",
    "status",
    "clear",
    "settings_cmd",
    "log",
    "config_cmd",
]
