"""Answer composition: LLM synthesis with an extractive fallback."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from faqrag.providers.litellm.models import BUILTIN_FALLBACK_MODELS
from faqrag.text import split_sentences, tokenize

if TYPE_CHECKING:
    from faqrag.models import AppSettings, RankedChunk
    from faqrag.providers import LLMClient
    from faqrag.settings import Settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a documentation assistant. Answer using only the provided sources "
    "and cite source numbers inline as [S1], [S2], etc. If the sources do not "
    "contain the answer, say so."
)

USER_PROMPT = """Question: {question}

Context:
{context}"""

EXTRACTIVE_HEADER = "Here is what I found in the knowledge base:"

# Sentence-length bounds for extractive candidates, in words.
MIN_SENTENCE_WORDS = 6
MAX_SENTENCE_WORDS = 60
SENTENCES_PER_CHUNK = 2
MAX_HIGHLIGHTS = 4

_DEFINITION_QUESTION = re.compile(
    r"^\s*what\s+(?:is|are)\s+(?:an?\s+|the\s+)?(?P<topic>.+?)[\s?.!]*$", re.IGNORECASE
)
_COPULA = re.compile(r"\b(?:is|are)\b", re.IGNORECASE)
_BOILERPLATE = re.compile(
    r"^(?:this\s+(?:page|section|guide|article|document|tutorial|site)\b"
    r"|in\s+this\s+(?:page|section|guide|article|tutorial)\b"
    r"|click\b|learn\s+more\b|see\s+also\b|for\s+more\s+information\b)",
    re.IGNORECASE,
)
_SENTENCE_END = re.compile(r"[.!?][\"')\]]?(?=\s|$)")


def build_context(ranked: list[RankedChunk]) -> str:
    """Label each chunk as ``Source n: title`` followed by its content."""
    return "\n\n".join(
        f"Source {index}: {item.chunk.title}\n{item.chunk.content}"
        for index, item in enumerate(ranked, 1)
    )


def definition_topic(question: str) -> set[str]:
    """Topic tokens of a "what is X" / "what are X" question, else empty."""
    match = _DEFINITION_QUESTION.match(question)
    if not match:
        return set()
    return tokenize(match.group("topic"))


def trim_to_sentence(text: str, budget: int) -> str:
    """Cut text to at most ``budget`` characters, at a sentence end if possible.

    Falls back to a word boundary plus an ellipsis when no sentence ends in
    the back half of the budget.
    """
    if len(text) <= budget:
        return text
    window = text[:budget]
    ends = [m.end() for m in _SENTENCE_END.finditer(window)]
    if ends and ends[-1] >= budget // 2:
        return window[: ends[-1]].rstrip()
    cut = window.rsplit(" ", 1)[0] if " " in window else window
    return cut.rstrip(" ,;:") + "…"


class AnswerComposer:
    """Turns ranked chunks into answer prose.

    With an LLM client, the chunks become labelled context for a single
    completion, trying each candidate model in turn. Without one, or when
    every candidate fails or returns nothing, the answer is assembled from
    the chunks' most relevant sentences.
    """

    def __init__(
        self,
        llm_client: LLMClient | None = None,
        temperature: float = 0.2,
        fallback_model: str | None = None,
        builtin_fallbacks: tuple[str, ...] = BUILTIN_FALLBACK_MODELS,
        extractive_chunks: int = 3,
        summary_char_budget: int = 480,
    ) -> None:
        """Initialize the composer.

        Args:
            llm_client: Client for model mode, or None for extractive only
            temperature: Sampling temperature for model mode
            fallback_model: Model tried after the configured one (from env)
            builtin_fallbacks: Models tried last, in order
            extractive_chunks: How many top chunks feed the extractive answer
            summary_char_budget: Target length of the extractive overview
        """
        self._llm_client = llm_client
        self.temperature = temperature
        self.fallback_model = fallback_model
        self.builtin_fallbacks = builtin_fallbacks
        self.extractive_chunks = extractive_chunks
        self.summary_char_budget = summary_char_budget

    @classmethod
    def from_settings(cls, settings: Settings, llm_client: LLMClient | None) -> AnswerComposer:
        return cls(
            llm_client=llm_client,
            temperature=settings.temperature,
            fallback_model=settings.fallback_model,
            extractive_chunks=settings.extractive_chunks,
            summary_char_budget=settings.summary_char_budget,
        )

    @property
    def uses_model(self) -> bool:
        return self._llm_client is not None

    def compose(
        self,
        question: str,
        ranked: list[RankedChunk],
        app_settings: AppSettings,
    ) -> str:
        """Compose an answer for ranked, filtered, deduplicated chunks.

        Never raises for model failures; those fall through to extraction.
        """
        if self._llm_client is not None:
            answer = self.generate(question, ranked, app_settings)
            if answer:
                return answer
            logger.warning("No model produced an answer, using extractive fallback")
        return self.extract(question, ranked)

    @property
    def client_model(self) -> str | None:
        """Default model of the LLM client, if it names one."""
        model = getattr(self._llm_client, "model", None)
        return model if isinstance(model, str) else None

    def candidate_models(self, configured: str) -> list[str]:
        """Models to try in order, without blanks or duplicates.

        Order: the admin-selected model, the client's own model, the
        environment fallback, then the built-in fallbacks.

        ``gpt-4o-mini`` and ``openai/gpt-4o-mini`` count as the same model.
        """
        candidates: list[str] = []
        seen: set[str] = set()
        for model in (
            configured,
            self.client_model,
            self.fallback_model,
            *self.builtin_fallbacks,
        ):
            if not model or not model.strip():
                continue
            key = model.strip().split("/", 1)[-1].lower()
            if key in seen:
                continue
            seen.add(key)
            candidates.append(model.strip())
        return candidates

    def generate(
        self,
        question: str,
        ranked: list[RankedChunk],
        app_settings: AppSettings,
    ) -> str | None:
        """Model mode. Returns None when every candidate fails."""
        if self._llm_client is None:
            return None

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": USER_PROMPT.format(question=question, context=build_context(ranked)),
            },
        ]

        for model in self.candidate_models(app_settings.model):
            try:
                text = self._llm_client.complete(
                    messages=messages,
                    temperature=self.temperature,
                    max_tokens=app_settings.max_tokens,
                    model=model,
                )
            except Exception as e:
                logger.warning("LLM call failed for model %s: %s", model, e)
                continue
            if text and text.strip():
                return text.strip()
            logger.warning("LLM returned empty output for model %s", model)

        return None

    def extract(self, question: str, ranked: list[RankedChunk]) -> str:
        """Extractive mode: overview plus cited highlights from the top chunks."""
        question_tokens = tokenize(question)
        topic = definition_topic(question)

        picks: list[tuple[str, int]] = []
        opening: tuple[str, int] | None = None
        for index, item in enumerate(ranked[: self.extractive_chunks], 1):
            sentences = self._candidate_sentences(item.chunk.content)
            if topic and opening is None:
                definition = next(
                    (s for s in sentences if _COPULA.search(s) and tokenize(s) & topic), None
                )
                if definition is not None:
                    opening = (definition, index)
            for sentence in self._select(sentences, question_tokens):
                picks.append((sentence, index))

        if opening is not None:
            picks = [opening] + [pick for pick in picks if pick[0] != opening[0]]

        if not picks:
            return EXTRACTIVE_HEADER

        overview, overview_source, rest = self._overview(picks)
        lines = [EXTRACTIVE_HEADER, "", f"{overview} [S{overview_source}]"]

        highlights: list[str] = []
        seen = {overview}
        for sentence, index in rest:
            if sentence in seen or len(highlights) >= MAX_HIGHLIGHTS:
                continue
            seen.add(sentence)
            highlights.append(f"- {sentence} [S{index}]")
        if highlights:
            lines.append("")
            lines.extend(highlights)

        return "\n".join(lines)

    def _candidate_sentences(self, content: str) -> list[str]:
        sentences = split_sentences(
            content,
            min_words=MIN_SENTENCE_WORDS,
            max_words=MAX_SENTENCE_WORDS,
            drop_noise=True,
        )
        if not sentences:
            sentences = split_sentences(content)
        without_boilerplate = [s for s in sentences if not _BOILERPLATE.match(s)]
        return without_boilerplate or sentences

    @staticmethod
    def _select(sentences: list[str], question_tokens: set[str]) -> list[str]:
        """Highest-overlap sentences, ties by position; first sentences if none overlap."""
        scored = [
            (len(question_tokens & tokenize(sentence)), position, sentence)
            for position, sentence in enumerate(sentences)
        ]
        matching = [entry for entry in scored if entry[0] > 0]
        if not matching:
            return sentences[:SENTENCES_PER_CHUNK]
        matching.sort(key=lambda entry: (-entry[0], entry[1]))
        return [sentence for _, _, sentence in matching[:SENTENCES_PER_CHUNK]]

    def _overview(
        self, picks: list[tuple[str, int]]
    ) -> tuple[str, int, list[tuple[str, int]]]:
        """Join leading sentences from the first source up to the character budget."""
        first_source = picks[0][1]
        parts: list[str] = []
        used = 0
        for sentence, index in picks:
            if index != first_source:
                break
            projected = len(" ".join(parts + [sentence]))
            if parts and projected > self.summary_char_budget:
                break
            parts.append(sentence)
            used += 1

        overview = trim_to_sentence(" ".join(parts), self.summary_char_budget)
        return overview, first_source, picks[used:]
