"""
Central configuration loader.
Reads from environment variables (via .env); every key has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")

DEFAULT_DB_FILE = "tracker.db"
DEFAULT_PORT = 3000


def _get(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(key, default)


def _get_bool(key: str, default: str = "false") -> bool:
    return (_get(key, default) or "").lower() in ("1", "true", "yes")


# ---------------------------------------------------------------------------
# Server config
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ServerConfig:
    host: str
    port: int
    reload: bool
    log_level: str
    db_path: Path


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=_get("SERVER_HOST", default="0.0.0.0"),  # type: ignore[arg-type]
        port=int(_get("PORT", default=str(DEFAULT_PORT))),  # type: ignore[arg-type]
        reload=_get_bool("SERVER_RELOAD"),
        log_level=(_get("LOG_LEVEL", default="INFO") or "INFO").upper(),
        db_path=get_db_path(),
    )


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_db_path() -> Path:
    return Path(_get("DB_FILE", default=DEFAULT_DB_FILE))  # type: ignore[arg-type]
