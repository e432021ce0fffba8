"""Download OpenFlights airport and route files into the data directory."""

import logging
from pathlib import Path

from src.api import fetch_text
from src.config import AIRPORTS_URL, DATA_DIR, ROUTES_URL

log = logging.getLogger("routemap")

SOURCES = {
    "airports": (AIRPORTS_URL, "airports.dat"),
    "routes": (ROUTES_URL, "routes.dat"),
}


def download(kind, data_dir=None):
    """Fetch one OpenFlights file. Returns the written path, or None on failure."""
    url, filename = SOURCES[kind]
    data_dir = Path(data_dir) if data_dir else DATA_DIR
    log.info("[%s] Fetching %s ...", kind, url)
    text = fetch_text(url)
    if not text:
        log.error("[%s] Could not fetch %s.", kind, url)
        return None

    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / filename
    path.write_text(text, encoding="utf-8")
    lines = text.count("\n")
    log.info("[%s] Stored %d lines in %s.", kind, lines, path)
    return path


def download_all(data_dir=None, kinds=None):
    """Fetch every requested file. Returns {kind: path or None}."""
    kinds = kinds or list(SOURCES)
    return {kind: download(kind, data_dir) for kind in kinds}
