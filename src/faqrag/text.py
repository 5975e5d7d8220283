"""Text segmentation: cleaning, chunking, sentences and relevance tokens.

Everything here is pure and deterministic; the ranker and the extractive
composer rely on ``tokenize`` and ``split_sentences`` producing the same
output for the same input.
"""

from __future__ import annotations

import math
import re
from functools import lru_cache

import pysbd

DEFAULT_SNIPPET_LIMIT = 220
ELLIPSIS = "…"

_LINE_BREAKS = re.compile(r"\r\n|\r")
_BLANK_RUNS = re.compile(r"\n{2,}")
_HORIZONTAL_SPACE = re.compile(r"[\t ]+")
_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")

STOP_WORDS = frozenset(
    """
    about above after again against all also and any are aren because been before being
    below between both but can cannot could did didn does doesn doing don down during each
    few for from further had has have having her here hers herself him himself his how
    into its itself just let more most much must mustn myself nor not now off once only
    other our ours ourselves out over own same shall she should some such than that the
    their theirs them themselves then there these they this those through too under until
    very was wasn were weren what when where which while who whom why will with won would
    you your yours yourself yourselves tell please know want need use using get
    """.split()
)

# Boilerplate that turns up in crawled pages and never answers a question.
NOISE_PHRASES = (
    "cookie",
    "cookies",
    "privacy policy",
    "terms of service",
    "terms of use",
    "all rights reserved",
    "copyright",
    "skip to content",
    "skip to main content",
    "sign in",
    "sign up",
    "log in",
    "subscribe",
    "newsletter",
    "read more",
    "contact sales",
    "last updated",
    "was this page helpful",
    "edit this page",
    "table of contents",
    "search documentation",
    "accept all",
)

_MONTHS = (
    "jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?|"
    "aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_DATE_PATTERNS = (
    re.compile(r"\b\d{4}-\d{1,2}-\d{1,2}\b"),
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"),
    re.compile(rf"\b(?:{_MONTHS})\.?\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}\b", re.IGNORECASE),
    re.compile(rf"\b\d{{1,2}}\s+(?:{_MONTHS})\.?\s+\d{{4}}\b", re.IGNORECASE),
)


def clean_text(text: str) -> str:
    """Normalize line endings and whitespace.

    ``\\r\\n`` and ``\\r`` become ``\\n``, two or more newlines collapse to a
    single blank line, runs of tabs/spaces collapse to one space, and the
    result is stripped.
    """
    text = _LINE_BREAKS.sub("\n", text)
    text = _BLANK_RUNS.sub("\n\n", text)
    text = _HORIZONTAL_SPACE.sub(" ", text)
    return text.strip()


def chunk_text(text: str, chunk_size: int = 320, chunk_overlap: int = 60) -> list[str]:
    """Split text into overlapping windows of whitespace tokens.

    Short text (at most ``chunk_size`` tokens) comes back as a single chunk
    equal to ``clean_text(text)``. Longer text is cut into windows of
    ``chunk_size`` tokens joined by single spaces; each window starts
    ``chunk_size - chunk_overlap`` tokens after the previous one (always at
    least one token, so the loop terminates). The last window may be short.

    Args:
        text: Raw document text
        chunk_size: Window length in tokens
        chunk_overlap: Tokens shared by consecutive windows

    Returns:
        List of chunk strings; empty if the text is blank
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    sanitized = clean_text(text)
    if not sanitized:
        return []

    tokens = sanitized.split()
    if len(tokens) <= chunk_size:
        return [sanitized]

    chunks: list[str] = []
    start = 0
    while start < len(tokens):
        end = min(len(tokens), start + chunk_size)
        chunks.append(" ".join(tokens[start:end]))
        if end == len(tokens):
            break
        start = max(end - chunk_overlap, start + 1)

    return chunks


def estimate_tokens(text: str) -> int:
    """Rough token count: words * 1.3, rounded half up, never below 1.

    Blank text still counts as 1.
    """
    words = len(text.split())
    return max(1, math.floor(words * 1.3 + 0.5))


def build_snippet(text: str, limit: int = DEFAULT_SNIPPET_LIMIT) -> str:
    """Cleaned text cut to ``limit`` characters, with an ellipsis if cut."""
    sanitized = clean_text(text)
    if len(sanitized) <= limit:
        return sanitized
    return f"{sanitized[:limit]}{ELLIPSIS}"


def tokenize(text: str) -> set[str]:
    """Relevance tokens of a text.

    Lower-cased alphanumeric words longer than two characters that are not
    stop words, as a set.
    """
    words = _NON_ALNUM.sub(" ", text.lower()).split()
    return {word for word in words if len(word) > 2 and word not in STOP_WORDS}


def is_noise(sentence: str) -> bool:
    """True for boilerplate UI phrases, cookie/privacy notices and dated lines."""
    lowered = sentence.lower()
    if any(phrase in lowered for phrase in NOISE_PHRASES):
        return True
    return any(pattern.search(sentence) for pattern in _DATE_PATTERNS)


@lru_cache(maxsize=4)
def _segmenter(language: str) -> pysbd.Segmenter:
    return pysbd.Segmenter(language=language, clean=False)


def split_sentences(
    text: str,
    min_words: int | None = None,
    max_words: int | None = None,
    drop_noise: bool = False,
    language: str = "en",
) -> list[str]:
    """Split text into sentences.

    The text is cleaned and cut at paragraph breaks first, then each
    paragraph is segmented with pySBD, which breaks on terminal punctuation
    followed by whitespace while leaving abbreviations and decimals intact.

    Args:
        text: Text to split
        min_words: Drop sentences with fewer words (fragments)
        max_words: Drop sentences with more words (run-ons, flattened tables)
        drop_noise: Drop sentences matching ``is_noise``
        language: pySBD language code

    Returns:
        Sentences in document order
    """
    sanitized = clean_text(text)
    if not sanitized:
        return []

    segmenter = _segmenter(language)
    sentences: list[str] = []
    for paragraph in _PARAGRAPH_BREAK.split(sanitized):
        paragraph = " ".join(paragraph.split())
        if not paragraph:
            continue
        for sentence in segmenter.segment(paragraph):
            sentence = sentence.strip()
            if not sentence:
                continue
            word_count = len(sentence.split())
            if min_words is not None and word_count < min_words:
                continue
            if max_words is not None and word_count > max_words:
                continue
            if drop_noise and is_noise(sentence):
                continue
            sentences.append(sentence)

    return sentences
