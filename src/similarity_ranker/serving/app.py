"""FastAPI application exposing directory ranking as a REST API."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from similarity_ranker.config import settings
from similarity_ranker.exceptions import EmbeddingProviderError, UnsupportedFormatError
from similarity_ranker.ingestion.scanner import scan_directory
from similarity_ranker.models import RankedUnit, ScanFailure, ScanMode
from similarity_ranker.ranking.base import EmbeddingProvider
from similarity_ranker.ranking.ranker import rank, sort_by_score

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Similarity Ranker API",
    version="0.1.0",
    description="Rank the lines of a document directory against a query.",
)


@lru_cache(maxsize=1)
def get_provider() -> EmbeddingProvider:
    """Load the default embedding provider once per process."""
    from similarity_ranker.ranking.providers import get_embedding_provider

    return get_embedding_provider()


# ── Request / Response schemas ────────────────────────────────────────
class RankRequest(BaseModel):
    """Directory to scan and the query to rank it against."""

    directory: str
    query: str
    mode: ScanMode = ScanMode.LINE
    top_k: int | None = Field(default=None, ge=1)


class RankResponse(BaseModel):
    """Units ordered by descending similarity, plus scan diagnostics."""

    results: list[RankedUnit] = []
    failures: list[ScanFailure] = []
    skipped: list[str] = []


def _resolve_directory(requested: str) -> Path:
    """Resolve *requested* against ``settings.documents_root``.

    Relative paths are taken relative to the root.  Anything that resolves
    outside the root, including via ``..`` or symlinks, is refused with 403.
    """
    root = Path(settings.documents_root).resolve()
    target = (root / requested).resolve()
    if not target.is_relative_to(root):
        logger.warning("Refused directory outside documents root: %s", requested)
        raise HTTPException(status_code=403, detail="Directory is outside the documents root")
    return target


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.post("/rank", response_model=RankResponse)
def rank_endpoint(
    request: RankRequest,
    provider: EmbeddingProvider = Depends(get_provider),
) -> RankResponse:
    """Scan the requested directory and rank its units against the query."""
    directory = _resolve_directory(request.directory)
    try:
        scan = scan_directory(directory, request.mode)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except NotADirectoryError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    try:
        scores = rank(provider, request.query, scan.units)
    except EmbeddingProviderError as exc:
        logger.error("Ranking failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return RankResponse(
        results=sort_by_score(scores, top_k=request.top_k),
        failures=scan.failures,
        skipped=scan.skipped,
    )
