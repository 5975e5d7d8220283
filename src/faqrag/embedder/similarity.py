"""Vector similarity helpers."""

import math

import numpy as np


def cosine_similarity(a: list[float], b: list[float]) -> float:
    """Cosine similarity over the shared prefix of two vectors.

    Only the first ``min(len(a), len(b))`` components are compared, and both
    magnitudes are taken over that same prefix. Vectors produced by different
    embedders (hash fallback vs. model) therefore never raise, they just
    score low and meaninglessly.

    Returns 0.0 when either prefix has zero magnitude.
    """
    length = min(len(a), len(b))
    if length == 0:
        return 0.0

    a_arr = np.asarray(a[:length], dtype=np.float64)
    b_arr = np.asarray(b[:length], dtype=np.float64)

    a_mag = float(np.dot(a_arr, a_arr))
    b_mag = float(np.dot(b_arr, b_arr))
    if a_mag == 0 or b_mag == 0:
        return 0.0

    return float(np.dot(a_arr, b_arr)) / math.sqrt(a_mag * b_mag)
