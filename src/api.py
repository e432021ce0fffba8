"""HTTP session for OpenFlights data downloads."""

import logging
import time

import requests

from src.config import HEADERS, MAX_RETRIES, RETRY_BACKOFF

log = logging.getLogger("routemap")

session = requests.Session()
session.headers.update(HEADERS)


def fetch_text(url):
    """GET a text body, retrying transient failures. Returns None on failure."""
    for attempt in range(1, MAX_RETRIES + 1):
        try:
            resp = session.get(url, timeout=60)
            if resp.status_code == 200:
                # OpenFlights files are UTF-8 but served without a charset.
                resp.encoding = "utf-8"
                return resp.text
            if resp.status_code == 404:
                log.debug("404 for %s", url)
                return None
            log.warning("HTTP %d for %s (attempt %d)", resp.status_code, url, attempt)
        except requests.RequestException as exc:
            log.warning("Request error: %s (attempt %d)", exc, attempt)
        if attempt < MAX_RETRIES:
            time.sleep(RETRY_BACKOFF * attempt)

    log.error("Failed after %d attempts: %s", MAX_RETRIES, url)
    return None
