"""Document ingestion and embedding-similarity ranking.

Scans one directory of text, CSV, JSON, Markdown, PDF and Word files
into deduplicated text units and ranks them against a query by cosine
similarity of their embeddings.
"""

from similarity_ranker.ingestion.scanner import scan_directory
from similarity_ranker.models import DirectoryRanking, RankedUnit, ScanMode, ScanResult, Segment, TextUnit
from similarity_ranker.ranking.ranker import rank, rank_directory, sort_by_score

__all__ = [
    "DirectoryRanking",
    "RankedUnit",
    "ScanMode",
    "ScanResult",
    "Segment",
    "TextUnit",
    "rank",
    "rank_directory",
    "scan_directory",
    "sort_by_score",
]

__version__ = "0.1.0"
