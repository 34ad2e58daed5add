"""Unit tests for cosine similarity and the SimilarityEngine."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pytest

from similarity_ranker.exceptions import DimensionMismatchError, EmbeddingProviderError
from similarity_ranker.ranking.base import EmbeddingProvider
from similarity_ranker.ranking.similarity import SimilarityEngine, cosine_similarity


class TestCosineSimilarity:
    def test_identical_vectors(self) -> None:
        assert cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0, 0.0]) == pytest.approx(1.0, abs=1e-4)

    def test_orthogonal_vectors(self) -> None:
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0, abs=1e-4)

    def test_known_geometric_result(self) -> None:
        assert cosine_similarity([3.0, 4.0], [5.0, 12.0]) == pytest.approx(0.9692, abs=1e-4)

    def test_opposite_vectors(self) -> None:
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0, abs=1e-4)

    def test_zero_vector_returns_exactly_zero(self) -> None:
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
        assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0

    def test_returns_python_float(self) -> None:
        assert type(cosine_similarity([1, 2], [2, 1])) is float

    def test_accepts_numpy_arrays(self) -> None:
        a = np.array([3.0, 4.0], dtype=np.float32)
        b = np.array([5.0, 12.0], dtype=np.float32)
        assert cosine_similarity(a, b) == pytest.approx(0.9692, abs=1e-4)

    def test_dimension_mismatch_fails_fast(self) -> None:
        with pytest.raises(DimensionMismatchError, match="3 != 2"):
            cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0])

    def test_self_similarity_of_random_vectors(self) -> None:
        rng = np.random.default_rng(7)
        for _ in range(20):
            v = rng.normal(size=16)
            assert cosine_similarity(v, v) == pytest.approx(1.0, abs=1e-4)

    def test_scores_stay_in_range(self) -> None:
        rng = np.random.default_rng(11)
        for _ in range(50):
            a, b = rng.normal(size=(2, 8))
            assert -1.0 <= cosine_similarity(a, b) <= 1.0

    def test_huge_vectors_do_not_overflow(self) -> None:
        v = [1e200, 1e200]
        assert cosine_similarity(v, v) == pytest.approx(1.0, abs=1e-4)
        assert cosine_similarity(v, [1e200, -1e200]) == pytest.approx(0.0, abs=1e-4)

    def test_tiny_vectors_do_not_underflow(self) -> None:
        v = [1e-200, 1e-200]
        assert cosine_similarity(v, v) == pytest.approx(1.0, abs=1e-4)
        assert cosine_similarity([1e-300, 0.0], [5.0, 0.0]) == pytest.approx(1.0, abs=1e-4)

    @pytest.mark.parametrize("bad", [[float("nan"), 1.0], [float("inf"), 1.0]])
    def test_non_finite_values_rejected(self, bad: list[float]) -> None:
        with pytest.raises(ValueError, match="finite"):
            cosine_similarity(bad, [1.0, 1.0])

    def test_exposed_on_engine(self) -> None:
        assert SimilarityEngine.cosine_similarity([3, 4], [5, 12]) == pytest.approx(0.9692, abs=1e-4)


class _ShortBatchProvider(EmbeddingProvider):
    def embed(self, text: str) -> list[float]:
        return [1.0]

    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        return [[1.0]]


class TestSimilarityEngine:
    def test_embed_delegates_to_provider(self, length_provider) -> None:
        engine = SimilarityEngine(length_provider)
        assert engine.embed("abcd") == [4.0, 1.0]
        assert length_provider.embed_calls == ["abcd"]

    def test_embed_batch_single_round_trip(self, length_provider) -> None:
        engine = SimilarityEngine(length_provider)
        vectors = engine.embed_batch(["a", "bb", "ccc"])
        assert vectors == [[1.0, 1.0], [2.0, 1.0], [3.0, 1.0]]
        assert length_provider.batch_calls == [["a", "bb", "ccc"]]

    def test_empty_batch_skips_provider(self, length_provider) -> None:
        assert SimilarityEngine(length_provider).embed_batch([]) == []
        assert length_provider.batch_calls == []

    def test_provider_error_is_wrapped(self, failing_provider) -> None:
        engine = SimilarityEngine(failing_provider)
        with pytest.raises(EmbeddingProviderError) as excinfo:
            engine.embed("query")
        assert isinstance(excinfo.value.__cause__, ConnectionError)
        with pytest.raises(EmbeddingProviderError):
            engine.embed_batch(["a", "b"])

    def test_short_batch_is_an_error(self) -> None:
        engine = SimilarityEngine(_ShortBatchProvider())
        with pytest.raises(EmbeddingProviderError, match="1 embeddings for 2 texts"):
            engine.embed_batch(["a", "b"])

    def test_similarity_of_two_texts(self, length_provider) -> None:
        engine = SimilarityEngine(length_provider)
        assert engine.similarity("same", "same") == pytest.approx(1.0, abs=1e-4)
