"""Turn raw OpenFlights CSV rows into airport candidates and route pairs.

This is a best-effort boundary: rows that do not have the expected shape
are skipped and counted, never raised. Code validity, coordinate ranges and
uniqueness are checked later by the airport index.
"""

import csv
import io
import logging

from src.api import fetch_text
from src.config import HEADER_SENTINELS
from src.models import Airport
from src.openflights import get_layout

log = logging.getLogger("routemap")

# airports.dat: id,name,city,country,iata,icao,lat,lon,alt,tz,dst,tzdb,type,source
AIRPORT_NAME = 1
AIRPORT_IATA = 4
AIRPORT_ICAO = 5
AIRPORT_LAT = 6
AIRPORT_LON = 7
AIRPORT_MIN_COLUMNS = AIRPORT_LON + 1


def read_rows(source):
    """Yield CSV rows from a local path or an http(s) URL."""
    source = str(source)
    if source.startswith(("http://", "https://")):
        text = fetch_text(source)
        if text is None:
            raise RuntimeError(f"Could not download {source}")
        yield from csv.reader(io.StringIO(text))
        return

    with open(source, newline="", encoding="utf-8", errors="replace") as fh:
        yield from csv.reader(fh)


def is_header(row):
    return bool(row) and row[0].strip().lower() in HEADER_SENTINELS


def parse_airports(rows):
    """Yield an Airport candidate for every well-formed airport row."""
    parsed = 0
    skipped = 0
    for row in rows:
        if is_header(row):
            continue
        if len(row) < AIRPORT_MIN_COLUMNS:
            skipped += 1
            log.debug("Skipping airport row with %d columns: %r", len(row), row)
            continue
        try:
            lat = float(row[AIRPORT_LAT])
            lon = float(row[AIRPORT_LON])
        except ValueError:
            skipped += 1
            log.debug("Skipping airport row with bad coordinates: %r", row)
            continue
        parsed += 1
        yield Airport(
            primary_code=row[AIRPORT_ICAO],
            alternate_code=row[AIRPORT_IATA],
            name=row[AIRPORT_NAME],
            latitude=lat,
            longitude=lon,
        )
    log.info("Parsed %d airport rows (%d malformed skipped).", parsed, skipped)


def parse_routes(rows, layout="openflights"):
    """Yield (origin, destination) code pairs using the given route layout."""
    layout = get_layout(layout)
    parsed = 0
    skipped = 0
    for row in rows:
        if is_header(row):
            continue
        if len(row) < layout.min_columns:
            skipped += 1
            log.debug("Skipping route row with %d columns: %r", len(row), row)
            continue
        parsed += 1
        yield row[layout.origin].strip(), row[layout.destination].strip()
    log.info("Parsed %d route rows (%d malformed skipped, layout=%s).", parsed, skipped, layout.name)
