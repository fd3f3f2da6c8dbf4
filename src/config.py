"""Configuration module for the Academic Administration API.

This module provides centralized configuration management, including directory
paths, database settings, API server settings, and pagination defaults.
All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/academic.db"
)

# Echo every SQL statement (set to "true" to debug queries)
SQL_ECHO: bool = os.getenv("SQL_ECHO", "false").lower() == "true"

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))

# CORS allowed origins (comma-separated list)
# FRONTEND_URL is honoured first so a single deployed frontend needs one
# variable. CORS_ALLOWED_ORIGINS adds more.
_CORS_ALLOWED_ORIGINS_STR: str = ",".join(
    value
    for value in (
        os.getenv("FRONTEND_URL", ""),
        os.getenv(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
            "http://127.0.0.1:3000",
        ),
    )
    if value
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

CORS_ALLOWED_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE"]

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Pagination Configuration ---

DEFAULT_PAGE: int = 1
DEFAULT_PAGE_LIMIT: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))

# --- Class Configuration ---

# Length of the random invite code generated for each new class
INVITE_CODE_LENGTH: int = 7

DEFAULT_CLASS_CAPACITY: int = 50
