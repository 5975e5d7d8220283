"""Retrieval pipeline for faqrag."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from faqrag.exceptions import InputError
from faqrag.models import QueryResult, RankedChunk, SourceCitation
from faqrag.ranker import is_greeting
from faqrag.text import build_snippet

if TYPE_CHECKING:
    from faqrag.composer import AnswerComposer
    from faqrag.embedder import Embedder
    from faqrag.ranker import Ranker
    from faqrag.stores import ChunkStore, SettingsStore

logger = logging.getLogger(__name__)

GREETING_ANSWER = (
    "Hi there! Ask me a question about the documentation and I will answer "
    "from the knowledge base."
)
EMPTY_STORE_ANSWER = "No knowledge base has been ingested yet."
NO_MATCH_ANSWER = (
    "I could not find relevant information in the knowledge base for that question."
)


class Retriever:
    """Orchestrates the query pipeline.

    Pipeline:
    1. Greeting short-circuit
    2. Snapshot the chunk store
    3. Embed the question and rank the snapshot
    4. Compose an answer from the ranked chunks
    """

    def __init__(
        self,
        chunk_store: ChunkStore,
        settings_store: SettingsStore,
        embedder: Embedder,
        ranker: Ranker,
        composer: AnswerComposer,
    ) -> None:
        """Initialize the retriever.

        Args:
            chunk_store: Source of the chunk snapshot
            settings_store: Source of the model name and token limit
            embedder: Embedder for the question
            ranker: Scores and filters chunks
            composer: Turns ranked chunks into prose
        """
        self.chunk_store = chunk_store
        self.settings_store = settings_store
        self.embedder = embedder
        self.ranker = ranker
        self.composer = composer

    def get_answer(self, question: str) -> QueryResult:
        """Answer a question from the knowledge base.

        Args:
            question: The user's question

        Returns:
            QueryResult whose sources mirror the ranked chunks

        Raises:
            InputError: If the question is blank
        """
        question = question.strip()
        if not question:
            raise InputError("Question must not be empty")

        if is_greeting(question):
            return QueryResult(answer=GREETING_ANSWER)

        chunks = self.chunk_store.get_chunks()
        if not chunks:
            return QueryResult(answer=EMPTY_STORE_ANSWER)

        question_embedding = self.embedder.embed_text(question)
        ranked = self.ranker.rank(question, question_embedding, chunks)
        if not ranked:
            logger.info("No relevant chunks for question %r", question)
            return QueryResult(answer=NO_MATCH_ANSWER)

        answer = self.composer.compose(question, ranked, self.settings_store.get_settings())
        return QueryResult(answer=answer, sources=self.cite(ranked))

    @staticmethod
    def cite(ranked: list[RankedChunk]) -> list[SourceCitation]:
        """Source citations in rank order, numbered like [S1], [S2]..."""
        return [
            SourceCitation(
                id=item.chunk.id,
                title=item.chunk.title,
                url=item.chunk.source_url,
                snippet=build_snippet(item.chunk.content),
                score=item.score,
            )
            for item in ranked
        ]
