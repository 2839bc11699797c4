# -*- coding: utf-8 -*-


from pathlib import Path
from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv

# ============================================================================
# Load .env file for local environment configuration
# ============================================================================
load_dotenv()

# ============================================================================
# Read settings from environment variables (from .env or system)
# ============================================================================
# Persistence API Settings
_API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080/api")
_API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))
_API_TOKEN = os.getenv("API_TOKEN", None)
_DOCUMENT_BUCKET = os.getenv("DOCUMENT_BUCKET", "land-documents")

# Logging
_LOGS_DIR = os.getenv("LOGS_DIR", None)
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Wizard behaviour
_SLAB_ENTRY_COUNT_POLICY = os.getenv("SLAB_ENTRY_COUNT_POLICY", "reject").lower()
_STRICT_STEP_NAVIGATION = os.getenv("STRICT_STEP_NAVIGATION", "true").lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Application configuration."""

    # Application Info
    APP_NAME: str = "Land Record Wizard"
    APP_TITLE: str = "Land Ownership Record Registration"
    VERSION: str = "1.0.0"

    # Persistence API Backend Settings
    API_BASE_URL: str = _API_BASE_URL
    API_VERSION: str = "v1"
    API_TIMEOUT: int = _API_TIMEOUT
    API_TOKEN: Optional[str] = _API_TOKEN

    # Document uploads
    DOCUMENT_BUCKET: str = _DOCUMENT_BUCKET
    DOCUMENT_UPLOAD_FIELD: str = "file"

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    LOGS_DIR: Path = Path(_LOGS_DIR) if _LOGS_DIR else PROJECT_ROOT / "logs"

    # Logging
    LOG_FILE: str = "lrw.log"
    LOG_PATH: Path = LOGS_DIR / LOG_FILE
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    LOG_CONSOLE_LEVEL: str = _LOG_LEVEL

    # Wizard
    WIZARD_STEP_COUNT: int = 6
    REFERENCE_PREFIX: str = "LRW"

    # "reject" | "reconcile"
    SLAB_ENTRY_COUNT_POLICY: str = _SLAB_ENTRY_COUNT_POLICY

    # StepNavigator refuses ungated forward moves when True
    STRICT_STEP_NAVIGATION: bool = _STRICT_STEP_NAVIGATION
