"""Chunk ranking: combined embedding and lexical scoring."""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING

from faqrag.embedder.similarity import cosine_similarity
from faqrag.models import Chunk, RankedChunk
from faqrag.text import tokenize

if TYPE_CHECKING:
    from faqrag.settings import Settings

logger = logging.getLogger(__name__)

GREETING_WORDS = frozenset({"hi", "hello", "hey", "heya", "hiya", "howdy", "yo", "greetings"})
TIME_OF_DAY_WORDS = frozenset({"morning", "afternoon", "evening"})
GREETING_FILLER = frozenset(
    {"there", "all", "everyone", "team", "bot", "folks", "friend", "guys", "good", "day"}
)
MAX_GREETING_WORDS = 3

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def is_greeting(question: str) -> bool:
    """True when the question is nothing but a short greeting.

    "hi", "Hello there!", "good morning all" qualify; anything with a real
    word in it ("hi, what is SSO?") does not.
    """
    words = _NON_ALNUM.sub(" ", question.lower()).split()
    if not words or len(words) > MAX_GREETING_WORDS:
        return False
    allowed = GREETING_WORDS | TIME_OF_DAY_WORDS | GREETING_FILLER
    if any(word not in allowed for word in words):
        return False
    if "good" in words and "day" in words:
        return True
    return any(word in GREETING_WORDS or word in TIME_OF_DAY_WORDS for word in words)


class Ranker:
    """Scores stored chunks against a question and keeps the best per source.

    score = cosine_weight * cosine + lexical_weight * min(overlap, lexical_cap) / lexical_cap

    A chunk sharing no relevance token with the question is never eligible,
    whatever its cosine similarity.
    """

    def __init__(
        self,
        top_n: int = 5,
        min_score: float = 0.15,
        cosine_weight: float = 0.8,
        lexical_weight: float = 0.2,
        lexical_cap: int = 5,
    ) -> None:
        """Initialize the ranker.

        Args:
            top_n: Maximum number of chunks returned
            min_score: Chunks scoring below this are dropped
            cosine_weight: Weight of embedding cosine similarity
            lexical_weight: Weight of the normalized lexical overlap
            lexical_cap: Overlap count at which the lexical term saturates at 1.0
        """
        if top_n < 1:
            raise ValueError("top_n must be at least 1")
        if lexical_cap < 1:
            raise ValueError("lexical_cap must be at least 1")
        self.top_n = top_n
        self.min_score = min_score
        self.cosine_weight = cosine_weight
        self.lexical_weight = lexical_weight
        self.lexical_cap = lexical_cap

    @classmethod
    def from_settings(cls, settings: Settings) -> Ranker:
        return cls(
            top_n=settings.top_k,
            min_score=settings.min_score,
            cosine_weight=settings.cosine_weight,
            lexical_weight=settings.lexical_weight,
            lexical_cap=settings.lexical_cap,
        )

    def combine(self, cosine: float, overlap: int) -> float:
        """Combine a cosine similarity and a raw token overlap count."""
        lexical = min(overlap, self.lexical_cap) / self.lexical_cap
        return self.cosine_weight * cosine + self.lexical_weight * lexical

    def rank(
        self,
        question: str,
        question_embedding: list[float],
        chunks: list[Chunk],
    ) -> list[RankedChunk]:
        """Rank chunks for a question.

        Args:
            question: The user's question
            question_embedding: Embedding of the question
            chunks: Snapshot of every stored chunk

        Returns:
            At most ``top_n`` RankedChunks, descending by score, relevant
            (finite score >= min_score, at least one shared token) and with
            at most one chunk per source URL
        """
        question_tokens = tokenize(question)
        if not question_tokens:
            return []

        candidates: list[RankedChunk] = []
        for chunk in chunks:
            overlap = len(question_tokens & tokenize(chunk.content))
            if overlap == 0:
                continue
            score = self.combine(cosine_similarity(question_embedding, chunk.embedding), overlap)
            if not math.isfinite(score) or score < self.min_score:
                continue
            candidates.append(RankedChunk(chunk=chunk, score=score))

        # sort is stable: equal scores keep store order
        candidates.sort(key=lambda ranked: ranked.score, reverse=True)
        results = self.dedupe(candidates)[: self.top_n]

        logger.debug(
            "Ranked %d chunks: %d eligible, %d kept", len(chunks), len(candidates), len(results)
        )
        return results

    @staticmethod
    def dedupe(ranked: list[RankedChunk]) -> list[RankedChunk]:
        """Keep the first chunk per source URL, preserving order."""
        seen: set[str] = set()
        unique: list[RankedChunk] = []
        for item in ranked:
            if item.chunk.source_url in seen:
                continue
            seen.add(item.chunk.source_url)
            unique.append(item)
        return unique
