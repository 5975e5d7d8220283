# src/faqrag/commands/status.py
"""Status command - show knowledge base statistics."""

from __future__ import annotations

import os
from pathlib import Path

from faqrag.commands.base import SourceInfo, StatusResult
from faqrag.config import get_stores, resolve_data_dir


def status(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    detailed: bool = False,
) -> StatusResult:
    """Get knowledge base statistics.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        detailed: If True, include per-source breakdown

    Returns:
        StatusResult with knowledge base statistics
    """
    effective_data_dir = resolve_data_dir(data_dir, config_path)

    if not os.path.exists(effective_data_dir):
        return StatusResult(success=True)

    try:
        stores = get_stores(effective_data_dir)
        stats = stores["chunk_store"].stats()
    except Exception as e:
        return StatusResult(success=False, error=f"Failed to access database: {e}")

    result = StatusResult(
        success=True,
        total_sources=stats.total_sources,
        total_chunks=stats.total_chunks,
        total_tokens=stats.total_tokens,
        last_ingested_at=stats.last_ingested_at.isoformat() if stats.last_ingested_at else None,
    )

    if detailed:
        result.sources = [
            SourceInfo(url=source.url, title=source.title, chunk_count=source.chunks)
            for source in stats.sources
        ]

    return result
