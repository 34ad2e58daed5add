"""Abstract base class for embedding providers.

Adding a new provider (OpenAI, Ollama, a local ONNX model …) only
requires subclassing :class:`EmbeddingProvider` and implementing the two
abstract methods.  The ranking stack never talks to a model directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class EmbeddingProvider(ABC):
    """Text → vector capability.

    Every vector returned by one instance must share the same
    dimensionality.  Implementations shared between threads must be
    reentrant; the ranking layer adds no locking of its own.
    """

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Return the embedding of a single *text*."""
        ...

    @abstractmethod
    def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """Return one embedding per entry of *texts*, in the same order.

        Providers should make a single round-trip for the whole batch
        where the backend allows it.
        """
        ...
