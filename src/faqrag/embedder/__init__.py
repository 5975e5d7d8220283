"""Embedding functionality for faqrag."""

from faqrag.embedder.base import Embedder
from faqrag.embedder.client import ClientEmbedder
from faqrag.embedder.hashing import DEFAULT_HASH_DIMENSION, HashEmbedder
from faqrag.embedder.similarity import cosine_similarity

__all__ = [
    "DEFAULT_HASH_DIMENSION",
    "ClientEmbedder",
    "Embedder",
    "HashEmbedder",
    "cosine_similarity",
]
