"""
Ranking — embedding providers, cosine similarity and query ranking.

Public surface
--------------
- :func:`rank` — score a set of units against a query.
- :func:`rank_directory` — scan a directory, then :func:`rank` it.
- :func:`sort_by_score` — ordered view of a score mapping.
- :class:`SimilarityEngine`, :func:`cosine_similarity` — vector math.
- :class:`EmbeddingProvider` — abstract provider (subclass for new backends).
- :class:`LangChainEmbeddingProvider` — adapter for LangChain embeddings.
- :func:`get_embedding_provider` — default HuggingFace provider factory.
"""

from similarity_ranker.ranking.base import EmbeddingProvider
from similarity_ranker.ranking.ranker import rank, rank_directory, sort_by_score
from similarity_ranker.ranking.similarity import SimilarityEngine, cosine_similarity

__all__ = [
    "EmbeddingProvider",
    "LangChainEmbeddingProvider",
    "SimilarityEngine",
    "cosine_similarity",
    "get_embedding_provider",
    "rank",
    "rank_directory",
    "sort_by_score",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import providers to avoid pulling in LangChain at import time."""
    if name in ("LangChainEmbeddingProvider", "get_embedding_provider"):
        from similarity_ranker.ranking import providers

        return getattr(providers, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
