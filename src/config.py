"""Shared configuration: paths, constants, logging setup."""

import logging
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Where the OpenFlights data files live.
# By default this is the local "data" directory inside the repo, but it can be
# overridden so that a pre-downloaded data folder can live anywhere on disk.
#
# Env vars:
# - ROUTEMAP_DATA_DIR      -> directory containing airports.dat / routes.dat
# - ROUTEMAP_AIRPORTS_PATH -> full path (or URL) of the airport file
# - ROUTEMAP_ROUTES_PATH   -> full path (or URL) of the route file
# - ROUTEMAP_ROUTE_LAYOUT  -> column layout of the route file
# - ROUTEMAP_OUTPUT_DIR    -> directory where GeoJSON exports are written
_default_data_dir = PROJECT_ROOT / "data"
DATA_DIR = Path(os.getenv("ROUTEMAP_DATA_DIR", _default_data_dir))

AIRPORTS_PATH = os.getenv("ROUTEMAP_AIRPORTS_PATH", str(DATA_DIR / "airports.dat"))
ROUTES_PATH = os.getenv("ROUTEMAP_ROUTES_PATH", str(DATA_DIR / "routes.dat"))
ROUTE_LAYOUT = os.getenv("ROUTEMAP_ROUTE_LAYOUT", "openflights")

_default_output_dir = PROJECT_ROOT / "output"
OUTPUT_DIR = Path(os.getenv("ROUTEMAP_OUTPUT_DIR", _default_output_dir))

OPENFLIGHTS_BASE_URL = "https://raw.githubusercontent.com/jpatokal/openflights/master/data"
AIRPORTS_URL = OPENFLIGHTS_BASE_URL + "/airports.dat"
ROUTES_URL = OPENFLIGHTS_BASE_URL + "/routes.dat"

# OpenFlights writes NULL as a literal backslash-N.
NULL_MARKER = "\\N"
HEADER_SENTINELS = ("data", "airline", "airport id")

GREAT_CIRCLE_POINTS = 100
SEARCH_LIMIT = 10
TOP_CONNECTIONS = 3
SEARCH_DEBOUNCE = 0.15

MAX_RETRIES = 3
RETRY_BACKOFF = 5

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/plain, text/csv, */*",
    "Accept-Language": "en-US,en;q=0.9",
}


def setup_logging(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("routemap")
