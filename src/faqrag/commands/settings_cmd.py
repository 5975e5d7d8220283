# src/faqrag/commands/settings_cmd.py
"""Settings command - show or update the admin-editable settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from faqrag.commands.base import AppSettingsResult
from faqrag.config import get_stores, resolve_data_dir


def settings(
    updates: dict[str, Any] | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AppSettingsResult:
    """Read the stored app settings, applying updates first if given.

    Args:
        updates: Partial settings to merge (model, max_tokens, brand_color, allow_origins)
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        AppSettingsResult with the settings now in effect
    """
    effective_data_dir = resolve_data_dir(data_dir, config_path)

    try:
        settings_store = get_stores(effective_data_dir)["settings_store"]
        if updates:
            app_settings = settings_store.update_settings(**updates)
        else:
            app_settings = settings_store.get_settings()
    except ValueError as e:
        return AppSettingsResult(success=False, error=f"Invalid settings: {e}")
    except Exception as e:
        return AppSettingsResult(success=False, error=f"Failed to access database: {e}")

    return AppSettingsResult(
        success=True,
        model=app_settings.model,
        max_tokens=app_settings.max_tokens,
        brand_color=app_settings.brand_color,
        allow_origins=list(app_settings.allow_origins),
    )
