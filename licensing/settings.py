"""
licensing.settings
==================

Configuration settings for the licensing registry.

This module provides centralized configuration options.  Defaults can be
overridden via environment variables or a ``.env`` file.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Store settings
# ---------------------------------------------------------------------------
STORE_FILE = os.environ.get("LICENSING_STORE_FILE", "persons.txt")
STORE_ENCODING = os.environ.get("LICENSING_STORE_ENCODING", "utf-8")


# ---------------------------------------------------------------------------
# Pydantic settings model
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for application settings, loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LICENSING_",  # LICENSING_STORE_FILE, LICENSING_STORE_ENCODING
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    store_file: Path = Field(default=Path(STORE_FILE), description="Flat file holding person records")
    store_encoding: str = Field(default=STORE_ENCODING, description="Text encoding of the store file")


# Initialize settings
settings = Settings()
