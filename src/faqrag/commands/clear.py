# src/faqrag/commands/clear.py
"""Clear command - remove every chunk and the ingestion history.

Confirmation goes through a callback so each UI can ask in its own way.
"""

from __future__ import annotations

import os
from pathlib import Path

from faqrag.commands.base import ClearResult, ConfirmCallback, ConfirmRequest
from faqrag.config import get_stores, resolve_data_dir


def clear(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_confirm: ConfirmCallback | None = None,
) -> ClearResult:
    """Delete all chunks and ingestion log entries.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        on_confirm: Optional callback for confirmation. Return True to
            proceed, False to cancel. If None, clearing proceeds without
            confirmation (equivalent to --force).

    Returns:
        ClearResult with the number of chunks deleted, or cancelled result
    """
    effective_data_dir = resolve_data_dir(data_dir, config_path)

    if not os.path.exists(effective_data_dir):
        return ClearResult(success=False, error="No database found.")

    try:
        stores = get_stores(effective_data_dir)
    except Exception as e:
        return ClearResult(success=False, error=f"Failed to access database: {e}")

    chunk_store = stores["chunk_store"]
    chunks_to_delete = chunk_store.count_chunks()

    if on_confirm is not None:
        confirm_request = ConfirmRequest(
            message="Clear the knowledge base?",
            details=f"This will remove {chunks_to_delete} chunks and the ingestion history.",
        )
        if not on_confirm(confirm_request):
            return ClearResult(success=False, error="Cancelled.")

    chunk_store.clear()
    stores["ingestion_log"].clear()

    return ClearResult(success=True, chunks_deleted=chunks_to_delete)
