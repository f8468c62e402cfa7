"""
config.py
---------
Central configuration for the trip planner backend.
All settings loaded from environment variables; nothing secret is hard-coded.
"""

import os
from pathlib import Path

# Load .env from the package directory (if it exists) so env vars in that file
# are picked up by os.getenv() below.
from dotenv import load_dotenv

_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path, override=False)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ── Data sources ──────────────────────────────────────────────────────────────
# By default every tool serves its built-in catalog (no external calls).
# Set PLACES_PROXY_BASE_URL to route place/transport lookups through a proxy.
USE_STUB_PLACES:    bool = _flag("USE_STUB_PLACES",    "true")
USE_STUB_TRANSPORT: bool = _flag("USE_STUB_TRANSPORT", "true")

PLACES_PROXY_BASE_URL: str = os.getenv("PLACES_PROXY_BASE_URL", "")
# Timeout in seconds for every proxy HTTP call
PROXY_REQUEST_TIMEOUT: float = float(os.getenv("PROXY_REQUEST_TIMEOUT", "10"))

# ── Cache ─────────────────────────────────────────────────────────────────────
CACHE_BACKEND:     str = os.getenv("CACHE_BACKEND", "in_memory")   # "in_memory" | "redis"
CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "300"))  # 5 minutes

REDIS_HOST:     str = os.getenv("REDIS_HOST",     "localhost")
REDIS_PORT:     int = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB:       int = int(os.getenv("REDIS_DB",   "0"))
REDIS_PASSWORD: str = os.getenv("REDIS_PASSWORD", "")

# ── Scheduling ────────────────────────────────────────────────────────────────
# An activity is not started when fewer than this many minutes remain
# before the destination's evening end.
MIN_ACTIVITY_MINUTES: int = int(os.getenv("MIN_ACTIVITY_MINUTES", "30"))

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
# JSONL performance logs; defaults to logs/ beside the package
LOGS_DIR: str = os.getenv("LOGS_DIR", "")
