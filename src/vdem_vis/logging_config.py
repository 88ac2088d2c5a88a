"""Utilities to configure consistent logging across the loader and views."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable

# Third-party loggers that are chatty at INFO during fetch/parse.
NOISY_LOGGERS = ("urllib3", "fsspec", "distributed")


def configure_logging(
    log_path: Path | None = None,
    level: int = logging.INFO,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure root logging handlers and formatting.

    Args:
        log_path: Optional path to a file where logs will be written.
        level: Logging level (defaults to INFO).
        quiet: Logger names capped at WARNING regardless of `level`.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    # Streamlit reruns the script on every interaction; replace, don't stack.
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
        force=True,
    )

    for name in quiet:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
