# tests/commands/test_clear_command.py
"""Tests for the clear command."""

from faqrag.commands import clear
from faqrag.config import get_stores


class TestClearCommand:
    """Tests for clear.clear()."""

    def test_no_database(self, data_dir) -> None:
        result = clear.clear(data_dir=data_dir)

        assert result.success is False
        assert result.error == "No database found."

    def test_clear_without_confirmation(self, seeded_data_dir) -> None:
        result = clear.clear(data_dir=seeded_data_dir)

        assert result.success is True
        assert result.chunks_deleted == 3
        stores = get_stores(seeded_data_dir)
        assert stores["chunk_store"].count_chunks() == 0
        assert stores["ingestion_log"].entries() == []

    def test_confirmation_request(self, seeded_data_dir) -> None:
        requests = []

        def confirm(request):
            requests.append(request)
            return True

        result = clear.clear(data_dir=seeded_data_dir, on_confirm=confirm)

        assert result.success is True
        assert requests[0].message == "Clear the knowledge base?"
        assert "3 chunks" in requests[0].details

    def test_cancelled(self, seeded_data_dir) -> None:
        result = clear.clear(data_dir=seeded_data_dir, on_confirm=lambda request: False)

        assert result.success is False
        assert result.error == "Cancelled."
        assert get_stores(seeded_data_dir)["chunk_store"].count_chunks() == 3
