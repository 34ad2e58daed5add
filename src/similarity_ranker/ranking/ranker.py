"""Ranking aggregator — score every text unit against a query.

Usage::

    from similarity_ranker.ranking.ranker import rank_directory, sort_by_score

    scores = rank_directory("docs/", "How do I reset my password?", mode="segment")
    for hit in sort_by_score(scores, top_k=5):
        print(hit)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Literal

from similarity_ranker.ingestion.readers import ReaderRegistry
from similarity_ranker.ingestion.scanner import scan_directory
from similarity_ranker.models import (
    DirectoryRanking,
    RankedUnit,
    ScanMode,
    TextUnit,
    unit_metadata,
    unit_text,
)
from similarity_ranker.ranking.base import EmbeddingProvider
from similarity_ranker.ranking.similarity import SimilarityEngine, cosine_similarity

logger = logging.getLogger(__name__)


def rank(
    provider: EmbeddingProvider | SimilarityEngine,
    query: str,
    units: Sequence[TextUnit],
) -> dict[TextUnit, float]:
    """Score each of *units* by cosine similarity to *query*.

    Parameters
    ----------
    provider:
        Embedding provider, or an engine already wrapping one.
    query:
        Natural-language query string.
    units:
        Lines or segments, typically from
        :func:`~similarity_ranker.ingestion.scanner.scan_directory`.

    Returns
    -------
    dict[TextUnit, float]
        Exactly one entry per input unit; nothing is filtered by score.
        Iteration order carries no meaning; use :func:`sort_by_score`.

    Raises
    ------
    EmbeddingProviderError
        If any embedding call fails; no partial result is returned.
    """
    if not units:
        return {}

    engine = provider if isinstance(provider, SimilarityEngine) else SimilarityEngine(provider)
    query_vector = engine.embed(query)

    texts = [unit_text(u) for u in units]
    if len(texts) > 1:
        unit_vectors = engine.embed_batch(texts)
    else:
        unit_vectors = [engine.embed(texts[0])]

    scores = {unit: cosine_similarity(vector, query_vector) for unit, vector in zip(units, unit_vectors)}
    logger.info("Ranked %d units against query (%d chars)", len(scores), len(query))
    return scores


def sort_by_score(scores: Mapping[TextUnit, float], top_k: int | None = None) -> list[RankedUnit]:
    """Turn a score mapping into a list ordered by descending score.

    Ties keep the mapping's insertion order.  ``top_k=None`` keeps all.
    """
    ordered = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    if top_k is not None:
        ordered = ordered[:top_k]
    return [
        RankedUnit(text=unit_text(unit), score=score, metadata=unit_metadata(unit))
        for unit, score in ordered
    ]


def rank_directory(
    directory: str | Path,
    query: str,
    mode: ScanMode | str = ScanMode.LINE,
    *,
    provider: EmbeddingProvider | None = None,
    registry: ReaderRegistry | None = None,
    unsupported_policy: Literal["skip", "error"] | None = None,
) -> DirectoryRanking:
    """Scan *directory* and rank its units against *query*.

    When *provider* is ``None`` the default HuggingFace provider from the
    global settings is loaded.  *unsupported_policy* is forwarded to
    :func:`~similarity_ranker.ingestion.scanner.scan_directory`.

    Returns
    -------
    DirectoryRanking
        The score mapping, with the scan's ``failures`` (unreadable
        files) and ``skipped`` (files without a reader) attached.
    """
    scan = scan_directory(
        directory, mode, registry=registry, unsupported_policy=unsupported_policy
    )
    if provider is None:
        from similarity_ranker.ranking.providers import get_embedding_provider

        provider = get_embedding_provider()
    scores = rank(provider, query, scan.units)
    return DirectoryRanking(scores, failures=scan.failures, skipped=scan.skipped)
