# tests/test_retriever.py
"""Tests for the Retriever query pipeline."""

from unittest.mock import MagicMock

import pytest

from faqrag.composer import EXTRACTIVE_HEADER, AnswerComposer
from faqrag.embedder import Embedder
from faqrag.exceptions import InputError
from faqrag.models import Chunk
from faqrag.ranker import Ranker
from faqrag.retriever import (
    EMPTY_STORE_ANSWER,
    GREETING_ANSWER,
    NO_MATCH_ANSWER,
    Retriever,
)


def stored_chunk(content: str, url: str, title: str = "Doc") -> Chunk:
    return Chunk(source_url=url, title=title, content=content, embedding=[1.0, 0.0])


@pytest.fixture
def embedder():
    mock = MagicMock(spec=Embedder)
    mock.embed_text.return_value = [1.0, 0.0]
    return mock


@pytest.fixture
def retriever(stores, embedder):
    return Retriever(
        chunk_store=stores["chunk_store"],
        settings_store=stores["settings_store"],
        embedder=embedder,
        ranker=Ranker(),
        composer=AnswerComposer(),
    )


@pytest.fixture
def populated(stores):
    stores["chunk_store"].replace_chunks_for_origin(
        "https://docs.example.com",
        [
            stored_chunk(
                "You can reset your password from the account settings page.",
                "https://docs.example.com/account",
                title="Account",
            ),
            stored_chunk(
                "Invoices are emailed to the billing contact every month.",
                "https://docs.example.com/billing",
                title="Billing",
            ),
        ],
    )
    return stores


class TestGetAnswer:
    def test_blank_question_raises(self, retriever):
        with pytest.raises(InputError):
            retriever.get_answer("   ")

    def test_empty_store(self, retriever, embedder):
        result = retriever.get_answer("How do I reset my password?")
        assert result.answer == EMPTY_STORE_ANSWER
        assert result.sources == []
        embedder.embed_text.assert_not_called()

    def test_greeting_short_circuits(self, retriever, populated, embedder):
        result = retriever.get_answer("hi")
        assert result.answer == GREETING_ANSWER
        assert result.sources == []
        embedder.embed_text.assert_not_called()

    def test_greeting_with_question_is_answered(self, retriever, populated):
        result = retriever.get_answer("hi, how do I reset my password?")
        assert result.answer != GREETING_ANSWER
        assert len(result.sources) == 1

    def test_no_relevant_chunks(self, retriever, populated):
        result = retriever.get_answer("Which regions host the servers?")
        assert result.answer == NO_MATCH_ANSWER
        assert result.sources == []

    def test_answer_with_sources(self, retriever, populated):
        result = retriever.get_answer("  How do I reset my password?  ")

        assert result.answer.startswith(EXTRACTIVE_HEADER)
        assert "[S1]" in result.answer
        assert len(result.sources) == 1
        source = result.sources[0]
        assert source.url == "https://docs.example.com/account"
        assert source.title == "Account"
        assert source.snippet == "You can reset your password from the account settings page."
        assert source.score > 0

    def test_uses_stored_app_settings(self, stores, populated, embedder):
        stores["settings_store"].update_settings(model="openai/gpt-5-mini", max_tokens=99)
        llm_client = MagicMock()
        llm_client.complete.return_value = "Use the settings page [S1]."
        retriever = Retriever(
            chunk_store=stores["chunk_store"],
            settings_store=stores["settings_store"],
            embedder=embedder,
            ranker=Ranker(),
            composer=AnswerComposer(llm_client=llm_client),
        )

        result = retriever.get_answer("How do I reset my password?")

        assert result.answer == "Use the settings page [S1]."
        kwargs = llm_client.complete.call_args.kwargs
        assert kwargs["model"] == "openai/gpt-5-mini"
        assert kwargs["max_tokens"] == 99


class TestCite:
    def test_citations_follow_rank_order(self, retriever, populated):
        question = "reset password invoices billing"
        ranked = retriever.ranker.rank(
            question,
            retriever.embedder.embed_text(question),
            populated["chunk_store"].get_chunks(),
        )
        assert ranked
        citations = Retriever.cite(ranked)

        assert [c.url for c in citations] == [item.chunk.source_url for item in ranked]
        assert [c.id for c in citations] == [item.chunk.id for item in ranked]
        assert [c.score for c in citations] == [item.score for item in ranked]

    def test_snippet_truncated(self):
        from faqrag.models import RankedChunk

        chunk = stored_chunk("word " * 100, "https://a.test/long")
        citation = Retriever.cite([RankedChunk(chunk=chunk, score=0.5)])[0]
        assert citation.snippet.endswith("…")
        assert len(citation.snippet) == 221
