"""Error hierarchy for ingestion and ranking.

Only :class:`DimensionMismatchError` and :class:`EmbeddingProviderError`
are expected to reach callers of :func:`~similarity_ranker.ranking.ranker.rank`.
Unreadable files are recorded by the scanner as
:class:`~similarity_ranker.models.ScanFailure` entries instead of raised.
"""

from __future__ import annotations


class SimilarityRankerError(Exception):
    """Base class for every error raised by this package."""


class UnreadableFileError(SimilarityRankerError):
    """A file could be opened but its content is not usable."""


class UnsupportedFormatError(SimilarityRankerError, ValueError):
    """No reader is registered for a file's extension."""

    def __init__(self, path: str, extension: str) -> None:
        super().__init__(f"No reader registered for extension {extension!r}: {path}")
        self.path = path
        self.extension = extension


class DimensionMismatchError(SimilarityRankerError, ValueError):
    """Two vectors of different lengths were compared."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Vector dimensions differ: {left} != {right}")
        self.left = left
        self.right = right


class EmbeddingProviderError(SimilarityRankerError):
    """The external embedding provider failed or returned malformed output."""
