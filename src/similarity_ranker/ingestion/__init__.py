"""
Ingestion — reading a directory of heterogeneous files into text units.

Public surface
--------------
- :func:`scan_directory` — dispatch, dedup and (optionally) segment a directory.
- :class:`ReaderRegistry` / :func:`default_registry` — extension → reader table.
- :func:`fetch_unique_lines`, :func:`fetch_segments` — scan shortcuts.
"""

from similarity_ranker.ingestion.readers import ReaderRegistry, default_registry
from similarity_ranker.ingestion.scanner import fetch_segments, fetch_unique_lines, scan_directory

__all__ = [
    "ReaderRegistry",
    "default_registry",
    "fetch_segments",
    "fetch_unique_lines",
    "scan_directory",
]
