"""Directory scanner — turns one directory of files into deduplicated text units."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from similarity_ranker.config import settings
from similarity_ranker.exceptions import UnsupportedFormatError
from similarity_ranker.ingestion.readers import ReaderRegistry, default_registry
from similarity_ranker.models import ScanFailure, ScanMode, ScanResult, Segment, TextUnit

logger = logging.getLogger(__name__)


def scan_directory(
    directory: str | Path,
    mode: ScanMode | str = ScanMode.LINE,
    *,
    registry: ReaderRegistry | None = None,
    unsupported_policy: Literal["skip", "error"] | None = None,
) -> ScanResult:
    """Read every file directly inside *directory* into unique text units.

    Parameters
    ----------
    directory:
        Directory to scan.  Subdirectories are ignored.
    mode:
        ``"line"`` returns plain strings; ``"segment"`` returns
        :class:`~similarity_ranker.models.Segment` objects carrying the
        originating ``file_name``.
    registry:
        Reader table used for dispatch.  Defaults to
        :func:`~similarity_ranker.ingestion.readers.default_registry`.
    unsupported_policy:
        ``"skip"`` or ``"error"`` for files without a reader.  Defaults to
        ``settings.unsupported_format_policy``.

    Returns
    -------
    ScanResult
        Units in first-occurrence order, plus the files that failed to
        read and the files skipped for lack of a reader.

    Raises
    ------
    FileNotFoundError
        If *directory* does not exist.
    NotADirectoryError
        If *directory* is not a directory.
    UnsupportedFormatError
        Only under the ``"error"`` policy.
    ValueError
        If *mode* or the unsupported-format policy is not recognised.
    """
    mode = ScanMode(mode)
    registry = registry or default_registry()
    policy = unsupported_policy or settings.unsupported_format_policy
    if policy not in ("skip", "error"):
        raise ValueError(f"Unknown unsupported-format policy: {policy!r}")

    root = Path(directory)
    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    result = ScanResult()
    seen: set[str] = set()

    for path in sorted(p for p in root.iterdir() if p.is_file()):
        if not registry.supports(path):
            if policy == "error":
                raise UnsupportedFormatError(str(path), path.suffix.lower())
            logger.debug("Skipping %s: no reader for %r", path.name, path.suffix)
            result.skipped.append(path.name)
            continue

        for line in _read_lines(registry, path, result.failures):
            text = line.strip()
            if not text or text in seen:
                continue
            seen.add(text)
            result.units.append(_to_unit(text, path, mode))

    logger.info(
        "Scanned %s: %d unique %ss, %d failed, %d skipped",
        root,
        len(result.units),
        mode.value,
        len(result.failures),
        len(result.skipped),
    )
    return result


def _read_lines(registry: ReaderRegistry, path: Path, failures: list[ScanFailure]) -> list[str]:
    try:
        return registry.read(path)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Could not read %s: %s", path.name, exc)
        failures.append(
            ScanFailure(
                file_name=path.name,
                path=str(path),
                error_type=type(exc).__name__,
                message=str(exc),
            )
        )
        return []


def _to_unit(text: str, path: Path, mode: ScanMode) -> TextUnit:
    if mode is ScanMode.SEGMENT:
        return Segment(text=text, metadata={"file_name": path.name})
    return text


def fetch_unique_lines(directory: str | Path) -> list[str]:
    """Return the unique non-blank lines of every file in *directory*."""
    return list(scan_directory(directory, ScanMode.LINE).units)


def fetch_segments(directory: str | Path) -> list[Segment]:
    """Same as :func:`fetch_unique_lines` but each line carries its file name."""
    return list(scan_directory(directory, ScanMode.SEGMENT).units)
