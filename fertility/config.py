"""
Fertility Prognosis Engine — Configuration
==========================================
Runtime settings for logging and the optional evaluation cache.
Loads overrides from the project-level .env file.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent          # repo root
PACKAGE_DIR = Path(__file__).resolve().parent                  # fertility/

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("FERTILITY_LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("FERTILITY_LOG_FILE", "")            # empty = console only

# ── Evaluation cache ────────────────────────────────────────────────────
CACHE_MAX_ENTRIES: int = int(os.getenv("FERTILITY_CACHE_MAX_ENTRIES", "256"))
