# src/faqrag/stores/sqlite_settings.py
"""SQLite settings store implementation."""

import sqlite3
from pathlib import Path
from typing import Any

from faqrag.models import AppSettings
from faqrag.stores.base import SettingsStore


class SQLiteSettingsStore(SettingsStore):
    """Keeps the single AppSettings document as JSON in SQLite."""

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS app_settings (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    data TEXT NOT NULL
                )
            """)
            conn.commit()

    def get_settings(self) -> AppSettings:
        """Stored settings, or defaults if none were saved."""
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute("SELECT data FROM app_settings WHERE id = 1").fetchone()
        if row is None:
            return AppSettings()
        return AppSettings.model_validate_json(row[0])

    def update_settings(self, **changes: Any) -> AppSettings:
        """Merge changes into the stored settings.

        Raises:
            ValueError: If a key is not an AppSettings field
            pydantic.ValidationError: If a value is invalid
        """
        unknown = set(changes) - set(AppSettings.model_fields)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

        merged = AppSettings.model_validate({**self.get_settings().model_dump(), **changes})
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT OR REPLACE INTO app_settings (id, data) VALUES (1, ?)",
                (merged.model_dump_json(),),
            )
            conn.commit()
        return merged
