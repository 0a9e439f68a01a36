"""Configuration management for Angler Finance.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import os
import tempfile
from datetime import timedelta
from pathlib import Path

# Base project root - assumes this file is in angler_finance/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("ANGLER_DATA_DIR", _PROJECT_ROOT / "data"))

# Database
DB_PATH = Path(
    os.getenv("ANGLER_DB_PATH", DATA_DIR / "angler_finance.db")
).resolve()

# User settings (currency, budgets)
SETTINGS_PATH = Path(
    os.getenv("ANGLER_SETTINGS_PATH", DATA_DIR / "settings.json")
).resolve()

# Export artifacts land in the system temp directory unless overridden
EXPORT_DIR = Path(os.getenv("ANGLER_EXPORT_DIR", tempfile.gettempdir()))

# Artifacts older than this are swept before each export
EXPORT_MAX_AGE = timedelta(hours=24)
EXPORT_SUFFIXES = (".csv", ".pdf")

# US Letter, in points
PAGE_WIDTH = 612
PAGE_HEIGHT = 792

# Number of rows shown in the statistics rankings
TOP_N = 5


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, DB_PATH.parent, SETTINGS_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def get_db_path() -> str:
    """Get the database path as a string."""
    return str(DB_PATH)


def get_export_dir() -> Path:
    """Get the export directory, creating it when missing."""
    EXPORT_DIR.mkdir(parents=True, exist_ok=True)
    return EXPORT_DIR
