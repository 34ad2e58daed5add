"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from similarity_ranker.ranking.base import EmbeddingProvider


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


class LengthEmbeddingProvider(EmbeddingProvider):
    """Deterministic fake: embeds text as ``[len(text), 1.0]`` and counts calls."""

    def __init__(self) -> None:
        self.embed_calls: list[str] = []
        self.batch_calls: list[list[str]] = []

    def embed(self, text: str) -> list[float]:
        self.embed_calls.append(text)
        return [float(len(text)), 1.0]

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        self.batch_calls.append(list(texts))
        return [[float(len(t)), 1.0] for t in texts]


class FailingEmbeddingProvider(EmbeddingProvider):
    """Fake whose every call raises, like an unreachable embedding service."""

    def embed(self, text: str) -> list[float]:
        raise ConnectionError("embedding service unavailable")

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        raise ConnectionError("embedding service unavailable")


@pytest.fixture()
def length_provider() -> LengthEmbeddingProvider:
    return LengthEmbeddingProvider()


@pytest.fixture()
def failing_provider() -> FailingEmbeddingProvider:
    return FailingEmbeddingProvider()
