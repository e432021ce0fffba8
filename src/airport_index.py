"""Canonical airport directory keyed by ICAO code, plus IATA -> ICAO lookup."""

import logging
from dataclasses import replace
from types import MappingProxyType

from src.config import NULL_MARKER

log = logging.getLogger("routemap")


def is_valid_code(code):
    """False for None, empty/whitespace strings and the OpenFlights null marker."""
    if not code:
        return False
    code = code.strip()
    return bool(code) and code != NULL_MARKER


class AirportIndex:
    """Sealed airport directory with code resolution.

    Built once by `build_airport_index`; both mappings are read-only views.
    """

    def __init__(self, airports, alternates, ambiguous_alternates=frozenset()):
        self.airports = MappingProxyType(dict(airports))
        self.alternates = MappingProxyType(dict(alternates))
        self.ambiguous_alternates = frozenset(ambiguous_alternates)

    def __len__(self):
        return len(self.airports)

    def __contains__(self, code):
        return code in self.airports

    def __iter__(self):
        return iter(self.airports.values())

    def resolve(self, code):
        """Return the canonical code for an ICAO or IATA code, or None."""
        if not is_valid_code(code):
            return None
        code = code.strip()
        if code in self.airports:
            return code
        return self.alternates.get(code)

    def get(self, code):
        primary = self.resolve(code)
        if primary is None:
            return None
        return self.airports.get(primary)

    def restricted_to(self, codes):
        """Index holding only the given canonical codes (and their alternates)."""
        keep = {c: a for c, a in self.airports.items() if c in codes}
        alternates = {alt: c for alt, c in self.alternates.items() if c in keep}
        return AirportIndex(keep, alternates, self.ambiguous_alternates)


def _clean(airport):
    alt = airport.alternate_code
    return replace(
        airport,
        primary_code=airport.primary_code.strip(),
        alternate_code=alt.strip() if is_valid_code(alt) else None,
        name=(airport.name or "").strip(),
    )


def build_airport_index(candidates):
    """Build the sealed directory from parsed Airport candidates.

    Candidates without a valid ICAO code or with out-of-range coordinates are
    dropped. When an ICAO code repeats, a candidate carrying an IATA code
    replaces the stored one; otherwise the first one wins. IATA collisions
    resolve last-write-wins.
    """
    airports = {}
    alternates = {}
    ambiguous = set()
    no_code = 0
    bad_coords = 0
    duplicates = 0

    for candidate in candidates:
        if not is_valid_code(candidate.primary_code):
            no_code += 1
            continue
        if not candidate.has_valid_coordinates():
            bad_coords += 1
            log.debug(
                "Dropping %s: coordinates out of range (%s, %s)",
                candidate.primary_code, candidate.latitude, candidate.longitude,
            )
            continue

        airport = _clean(candidate)
        icao = airport.primary_code
        iata = airport.alternate_code

        if iata:
            previous = alternates.get(iata)
            if previous is not None and previous != icao:
                ambiguous.add(iata)
                log.debug("IATA %s claimed by %s and %s; keeping %s", iata, previous, icao, icao)
            alternates[iata] = icao

        if icao in airports:
            duplicates += 1
            if not iata:
                continue
        airports[icao] = airport

    log.info(
        "Indexed %d airports (%d without ICAO, %d bad coordinates, %d duplicate ICAO, %d ambiguous IATA).",
        len(airports), no_code, bad_coords, duplicates, len(ambiguous),
    )
    return AirportIndex(airports, alternates, ambiguous)
