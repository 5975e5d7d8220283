"""Deterministic hash-based embedder used when no embedding model is available."""

import hashlib
import re

import numpy as np

from faqrag.embedder.base import Embedder

DEFAULT_HASH_DIMENSION = 768

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def _bucket(word: str, dimension: int) -> int:
    digest = hashlib.sha1(word.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big") % dimension


class HashEmbedder(Embedder):
    """Bag-of-words embedder using the hashing trick.

    Each word is hashed with SHA-1; the first four digest bytes, read as an
    unsigned big-endian integer, pick the slot to increment. The vector is
    then L2-normalized. Identical input always yields a bit-identical vector,
    so stored chunks stay comparable across restarts without any model.
    """

    def __init__(self, dimension: int = DEFAULT_HASH_DIMENSION) -> None:
        if dimension < 1:
            raise ValueError("dimension must be positive")
        self.dimension = dimension

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        return [self._embed(text) for text in texts]

    def _embed(self, text: str) -> list[float]:
        vector = np.zeros(self.dimension, dtype=np.float64)
        words = _NON_ALNUM.sub(" ", text.lower()).split()
        for word in words:
            vector[_bucket(word, self.dimension)] += 1.0

        norm = float(np.linalg.norm(vector))
        if norm == 0:
            return vector.tolist()
        return (vector / norm).tolist()
