from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


logger = logging.getLogger(__name__)

DEFAULT_SPREADSHEET_ID = "1bNhlUVWnt43Pq1hqDALXbfGDVazD7VhaeKM58hBTsN0"
DEFAULT_CREDENTIALS_FILE = "credentials.json"


@dataclass(frozen=True)
class AppConfig:
    spreadsheet_id: str
    google_creds: Optional[str]
    credentials_file: str
    sheets_timeout: float

    session_secret: str
    session_max_age: int
    session_https_only: bool

    host: str
    port: int
    log_level: str

    zone_passwords_json: Optional[str] = None
    office_passwords_json: Optional[str] = None


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _as_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        logger.warning("Ignoring non-integer setting %r, using %s", value, default)
        return default


def _as_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        logger.warning("Ignoring non-numeric setting %r, using %s", value, default)
        return default


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Cached so the generated session secret is stable for the process
    """
    load_dotenv(override=False)

    session_secret = _getenv("SESSION_SECRET")
    if session_secret is None:
        logger.warning("SESSION_SECRET is not set; using a random key, sessions will not survive a restart")
        session_secret = secrets.token_urlsafe(32)

    return AppConfig(
        spreadsheet_id=_getenv("SPREADSHEET_ID", DEFAULT_SPREADSHEET_ID) or DEFAULT_SPREADSHEET_ID,
        google_creds=_getenv("GOOGLE_CREDS"),
        credentials_file=_getenv("GOOGLE_CREDENTIALS_FILE", DEFAULT_CREDENTIALS_FILE) or DEFAULT_CREDENTIALS_FILE,
        sheets_timeout=_as_float(_getenv("SHEETS_TIMEOUT"), 15.0),
        session_secret=session_secret,
        session_max_age=_as_int(_getenv("SESSION_MAX_AGE"), 24 * 60 * 60),
        session_https_only=(_getenv("SESSION_HTTPS_ONLY", "false") or "false").lower() == "true",
        host=_getenv("HOST", "0.0.0.0") or "0.0.0.0",
        port=_as_int(_getenv("PORT"), 8080),
        log_level=_getenv("LOG_LEVEL", "INFO") or "INFO",
        zone_passwords_json=_getenv("ZONE_PASSWORDS_JSON"),
        office_passwords_json=_getenv("OFFICE_PASSWORDS_JSON"),
    )
