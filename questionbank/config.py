"""
Configuration for QuestionBank.

Defaults live in module constants; deployments override them through
environment variables or a .env file:
- QUESTIONBANK_CATALOG_DIR: directory of subject YAML files
- QUESTIONBANK_PROGRESS_DB: SQLite file holding saved progress
- QUESTIONBANK_LOG_LEVEL: logging level name (default INFO)
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_CATALOG_DIR = Path(__file__).parent / "content"
DEFAULT_PROGRESS_DIR = Path.home() / ".questionbank"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"
DEFAULT_LOG_LEVEL = "INFO"

# Name of the single persisted progress entry
STORAGE_KEY = "questionBankProgress"


@dataclass
class Settings:
    catalog_dir: Path = DEFAULT_CATALOG_DIR
    progress_db: Path = DEFAULT_PROGRESS_DB
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    """Read settings from the environment (after loading .env if present)."""
    load_dotenv()
    return Settings(
        catalog_dir=Path(os.getenv("QUESTIONBANK_CATALOG_DIR") or DEFAULT_CATALOG_DIR),
        progress_db=Path(os.getenv("QUESTIONBANK_PROGRESS_DB") or DEFAULT_PROGRESS_DB),
        log_level=(os.getenv("QUESTIONBANK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
