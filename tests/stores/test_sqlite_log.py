# tests/stores/test_sqlite_log.py
"""Tests for the SQLite ingestion log."""

import os

import pytest

from faqrag.models import IngestionLogEntry
from faqrag.stores import SQLiteIngestionLog


@pytest.fixture
def log(temp_dir):
    return SQLiteIngestionLog(os.path.join(temp_dir, "ingestions.db"))


class TestSQLiteIngestionLog:
    def test_empty(self, log):
        assert log.entries() == []

    def test_round_trip(self, log):
        entry = IngestionLogEntry(
            summary="Ingested 2 documents and 5 chunks",
            base_url="https://docs.example.com",
            pdf_urls=["https://docs.example.com/guide.pdf"],
            chunk_count=5,
        )
        log.append(entry)
        assert log.entries() == [entry]

    def test_newest_first(self, log):
        for i in range(3):
            log.append(IngestionLogEntry(summary=f"run {i}"))
        assert [e.summary for e in log.entries()] == ["run 2", "run 1", "run 0"]

    def test_capped_at_25_by_default(self, log):
        for i in range(30):
            log.append(IngestionLogEntry(summary=f"run {i}"))

        entries = log.entries()
        assert len(entries) == 25
        assert entries[0].summary == "run 29"
        assert entries[-1].summary == "run 5"

    def test_custom_cap(self, temp_dir):
        log = SQLiteIngestionLog(os.path.join(temp_dir, "small.db"), max_entries=2)
        for i in range(4):
            log.append(IngestionLogEntry(summary=f"run {i}"))
        assert [e.summary for e in log.entries()] == ["run 3", "run 2"]

    def test_clear(self, log):
        log.append(IngestionLogEntry(summary="run"))
        log.clear()
        assert log.entries() == []
