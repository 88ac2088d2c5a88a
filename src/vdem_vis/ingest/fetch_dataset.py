"""Utilities to locate and download the panel data file.

Local paths are used in place; http(s) sources are downloaded once into a
cache directory and reused on subsequent loads.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from urllib.parse import urlparse

import requests

from vdem_vis.errors import LoadError

log = logging.getLogger(__name__)


def is_remote(source: str) -> bool:
    """Return True when `source` is an http(s) URL."""
    return urlparse(source).scheme in ("http", "https")


def cache_path_for(source: str, cache_dir: Path) -> Path:
    """Return the cache file path for a remote source.

    The file name keeps the URL's basename (and therefore its extension) and
    is prefixed with a short hash so that two URLs with the same basename do
    not collide.
    """
    name = Path(urlparse(source).path).name or "panel"
    digest = hashlib.sha1(source.encode("utf-8")).hexdigest()[:10]
    return cache_dir / f"{digest}_{name}"


def fetch_dataset(source: str, cache_dir: Path, timeout: float = 60.0) -> Path:
    """Return a local path for `source`, downloading it if necessary.

    Args:
        source: Local file path or http(s) URL.
        cache_dir: Local directory to cache downloaded files.
        timeout: Request timeout in seconds.

    Returns:
        Path to the local (or cached) data file.

    Raises:
        LoadError: if the local file does not exist or the download fails.
    """
    if not is_remote(source):
        path = Path(source)
        if not path.is_file():
            raise LoadError(source, "file not found")
        return path

    cache_dir.mkdir(parents=True, exist_ok=True)
    out_path = cache_path_for(source, cache_dir)

    if out_path.exists() and out_path.stat().st_size > 0:
        log.info("Cache hit: %s", out_path)
        return out_path

    log.info("Downloading %s", source)
    try:
        r = requests.get(source, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise LoadError(source, str(e)) from e

    if not r.content:
        raise LoadError(source, "empty response body")

    out_path.write_bytes(r.content)
    log.info("Saved: %s (%d bytes)", out_path, out_path.stat().st_size)
    return out_path
