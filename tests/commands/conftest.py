"""Fixtures for command tests."""

import os

import pytest

from faqrag.config import get_stores
from faqrag.embedder import HashEmbedder
from faqrag.models import Chunk, IngestionLogEntry


@pytest.fixture(autouse=True)
def offline_env(monkeypatch, temp_dir):
    """No API keys or faqrag variables, and no config file in reach."""
    for key in list(os.environ):
        if key.startswith("FAQRAG_") or key == "OPENAI_API_KEY":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(temp_dir)


@pytest.fixture
def data_dir(temp_dir):
    return os.path.join(temp_dir, "kb")


@pytest.fixture
def seeded_data_dir(data_dir):
    """A data directory holding two sources and one ingestion run."""
    stores = get_stores(data_dir)
    embedder = HashEmbedder()
    contents = [
        ("https://help.test/account", "Account", "Reset your password from the account page."),
        ("https://help.test/account", "Account", "Change your email address in the profile."),
        ("https://help.test/billing", "Billing", "Invoices are emailed every month."),
    ]
    stores["chunk_store"].replace_chunks_for_origin(
        "https://help.test",
        [
            Chunk(
                source_url=url,
                title=title,
                content=content,
                embedding=embedder.embed_text(content),
                tokens=len(content.split()),
            )
            for url, title, content in contents
        ],
    )
    stores["ingestion_log"].append(
        IngestionLogEntry(
            summary="Ingested 2 documents and 3 chunks",
            base_url="https://help.test/",
            chunk_count=3,
        )
    )
    return data_dir
