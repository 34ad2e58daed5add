"""Similarity engine — provider delegation plus cosine-similarity math."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from similarity_ranker.exceptions import DimensionMismatchError, EmbeddingProviderError
from similarity_ranker.ranking.base import EmbeddingProvider

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return the cosine of the angle between *a* and *b*.

    A zero-magnitude operand yields ``0.0`` rather than NaN.  Each vector
    is scaled by its largest absolute component first, so very large or
    very small magnitudes neither overflow nor underflow.  The result is
    clipped into ``[-1.0, 1.0]`` to absorb floating-point drift.

    Raises
    ------
    DimensionMismatchError
        If the vectors have different lengths.
    ValueError
        If either vector contains NaN or infinity.
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.shape != vb.shape:
        raise DimensionMismatchError(va.size, vb.size)

    if not (np.isfinite(va).all() and np.isfinite(vb).all()):
        raise ValueError("Vectors must contain only finite values")

    scale_a = np.abs(va).max(initial=0.0)
    scale_b = np.abs(vb).max(initial=0.0)
    if scale_a == 0.0 or scale_b == 0.0:
        return 0.0

    va = va / scale_a
    vb = vb / scale_b
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    score = np.dot(va, vb) / (norm_a * norm_b)
    return float(np.clip(score, -1.0, 1.0))


class SimilarityEngine:
    """Wraps an :class:`EmbeddingProvider` and compares the vectors it returns.

    The engine does no network or parsing work itself; every provider
    error surfaces as :class:`EmbeddingProviderError`.
    """

    cosine_similarity = staticmethod(cosine_similarity)

    def __init__(self, provider: EmbeddingProvider) -> None:
        self.provider = provider

    def embed(self, text: str) -> list[float]:
        try:
            return list(self.provider.embed(text))
        except Exception as exc:
            raise EmbeddingProviderError(f"Embedding request failed: {exc}") from exc

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        try:
            vectors = self.provider.embed_batch(list(texts))
        except Exception as exc:
            raise EmbeddingProviderError(f"Batch embedding request failed: {exc}") from exc

        if len(vectors) != len(texts):
            raise EmbeddingProviderError(
                f"Provider returned {len(vectors)} embeddings for {len(texts)} texts"
            )
        logger.debug("Embedded batch of %d texts", len(texts))
        return [list(v) for v in vectors]

    def similarity(self, a: str, b: str) -> float:
        """Embed two texts and return their cosine similarity."""
        vec_a, vec_b = self.embed_batch([a, b])
        return cosine_similarity(vec_a, vec_b)
