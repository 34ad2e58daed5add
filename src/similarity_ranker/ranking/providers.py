"""Concrete embedding providers backed by LangChain embedding models."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from similarity_ranker.config import settings
from similarity_ranker.ranking.base import EmbeddingProvider

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class LangChainEmbeddingProvider(EmbeddingProvider):
    """Adapter from any LangChain ``Embeddings`` to :class:`EmbeddingProvider`.

    Parameters
    ----------
    embeddings:
        A LangChain embedding model, e.g. ``HuggingFaceEmbeddings``.
    """

    def __init__(self, embeddings: Embeddings) -> None:
        self._embeddings = embeddings

    def embed(self, text: str) -> list[float]:
        return self._embeddings.embed_query(text)

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        return self._embeddings.embed_documents(list(texts))


def get_embedding_provider(model_name: str | None = None) -> LangChainEmbeddingProvider:
    """Return the configured sentence-transformer embedding provider.

    ``langchain_huggingface`` is imported here so the rest of the package
    loads without the model stack installed.
    """
    from langchain_huggingface import HuggingFaceEmbeddings

    model_name = model_name or settings.embedding_model
    logger.info("Loading embedding model: %s", model_name)
    return LangChainEmbeddingProvider(HuggingFaceEmbeddings(model_name=model_name))
