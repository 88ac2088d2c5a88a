"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the data source location and loader options from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        data_source: Local path or http(s) URL of the panel file (CSV or JSON).
        cache_dir: Local cache directory for downloaded sources.
        fetch_timeout: Request timeout in seconds for remote sources.
        log_path: Optional log file; stdout only when ``None``.
    """
    data_source: str
    cache_dir: Path
    fetch_timeout: float
    log_path: Path | None



def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `VDEM_DATA_SOURCE` is set but empty, or the timeout
            is not a positive number.
    """
    data_source = os.getenv("VDEM_DATA_SOURCE", "data/vdem-lite.json").strip()
    cache_dir = Path(os.getenv("VDEM_CACHE_DIR", "data/vdem_cache"))
    raw_timeout = os.getenv("VDEM_FETCH_TIMEOUT", "60")
    log_path_env = os.getenv("VDEM_LOG_PATH", "").strip()

    if not data_source:
        raise RuntimeError(
            "VDEM_DATA_SOURCE is empty. Set it in .env "
            "(example: 'data/vdem-lite.json' or an https:// URL)."
        )

    try:
        fetch_timeout = float(raw_timeout)
    except ValueError:
        raise RuntimeError(f"VDEM_FETCH_TIMEOUT must be a number, got {raw_timeout!r}") from None
    if fetch_timeout <= 0:
        raise RuntimeError(f"VDEM_FETCH_TIMEOUT must be positive, got {fetch_timeout}")

    return Settings(
        data_source=data_source,
        cache_dir=cache_dir,
        fetch_timeout=fetch_timeout,
        log_path=Path(log_path_env) if log_path_env else None,
    )
