"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Embedding
    embedding_model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="HuggingFace model id used by the default embedding provider",
    )

    # Ingestion
    unsupported_format_policy: Literal["skip", "error"] = Field(
        default="skip",
        description=(
            "What a directory scan does with a file whose extension has no "
            "registered reader: 'skip' it and keep going, or raise and abort."
        ),
    )
    file_encoding: str = "utf-8"

    # Serving
    documents_root: Path = Field(
        default_factory=Path.cwd,
        description="Directory the /rank endpoint is confined to; requests outside it are refused",
    )

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
