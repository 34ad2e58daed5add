"""Domain models for scanned text units, scan diagnostics and ranked results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Union

from pydantic import BaseModel, Field


class ScanMode(str, Enum):
    """Shape of the units a directory scan produces."""

    LINE = "line"
    SEGMENT = "segment"


@dataclass(frozen=True)
class Segment:
    """A line of ingested text annotated with where it came from.

    Attributes
    ----------
    text:
        The stripped line content.
    metadata:
        Key/value annotations; a scan always sets ``file_name``.

    Segments are hashed on ``text`` alone so they can key a score mapping;
    equality still compares the metadata.
    """

    text: str
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def file_name(self) -> str | None:
        return self.metadata.get("file_name")


TextUnit = Union[str, Segment]


def unit_text(unit: TextUnit) -> str:
    """Return the raw text of a line or segment."""
    return unit.text if isinstance(unit, Segment) else unit


def unit_metadata(unit: TextUnit) -> dict[str, Any]:
    """Return the metadata of a segment, or an empty dict for a plain line."""
    return dict(unit.metadata) if isinstance(unit, Segment) else {}


class ScanFailure(BaseModel):
    """Non-fatal diagnostic for a file the scanner could not read.

    Attributes
    ----------
    file_name:
        Base name of the file.
    path:
        Full path as visited by the scanner.
    error_type:
        Class name of the exception the reader raised.
    message:
        The exception message.
    """

    file_name: str
    path: str
    error_type: str
    message: str = ""


@dataclass
class ScanResult:
    """Everything a single directory scan produced."""

    units: list[TextUnit] = field(default_factory=list)
    failures: list[ScanFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self) -> Iterator[TextUnit]:
        return iter(self.units)

    @property
    def ok(self) -> bool:
        """``True`` when no file failed to read."""
        return not self.failures


class DirectoryRanking(dict):
    """Score mapping for a scanned directory, plus that scan's diagnostics.

    Behaves exactly like the ``dict[TextUnit, float]`` returned by
    :func:`~similarity_ranker.ranking.ranker.rank`; ``failures`` and
    ``skipped`` carry the files that contributed nothing and why.
    """

    def __init__(
        self,
        scores: dict[TextUnit, float] | None = None,
        failures: list[ScanFailure] | None = None,
        skipped: list[str] | None = None,
    ) -> None:
        super().__init__(scores or {})
        self.failures: list[ScanFailure] = list(failures or [])
        self.skipped: list[str] = list(skipped or [])


class RankedUnit(BaseModel):
    """A unit paired with its similarity to the query."""

    text: str
    score: float
    metadata: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:  # noqa: D105
        source = self.metadata.get("file_name")
        prefix = f"[{source}] " if source else ""
        return f"{self.score:.4f} {prefix}{self.text[:120]}"
