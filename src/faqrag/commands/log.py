# src/faqrag/commands/log.py
"""Log command - show the ingestion history."""

from __future__ import annotations

import os
from pathlib import Path

from faqrag.commands.base import LogEntryInfo, LogResult
from faqrag.config import get_stores, resolve_data_dir


def log(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    limit: int | None = None,
) -> LogResult:
    """List ingestion runs, newest first.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        limit: Show at most this many entries

    Returns:
        LogResult with the entries
    """
    effective_data_dir = resolve_data_dir(data_dir, config_path)

    if not os.path.exists(effective_data_dir):
        return LogResult(success=True)

    try:
        entries = get_stores(effective_data_dir)["ingestion_log"].entries()
    except Exception as e:
        return LogResult(success=False, error=f"Failed to access database: {e}")

    if limit is not None:
        entries = entries[:limit]

    return LogResult(
        success=True,
        entries=[
            LogEntryInfo(
                created_at=entry.created_at.isoformat(),
                summary=entry.summary,
                base_url=entry.base_url,
                pdf_urls=list(entry.pdf_urls),
                chunk_count=entry.chunk_count,
            )
            for entry in entries
        ],
    )
