"""Diacritic-insensitive airport search.

Ranking, best first:
  1. match tier: exact, then prefix, then substring
  2. matched field: IATA, then ICAO, then name
  3. the normalized matched text, alphabetically
"""

import heapq
import unicodedata
from typing import NamedTuple

from src.config import SEARCH_LIMIT

EXACT, PREFIX, SUBSTRING = 0, 1, 2
FIELD_ALTERNATE, FIELD_PRIMARY, FIELD_NAME = 0, 1, 2


def normalize_text(text):
    """Case-fold and strip combining marks ("Zürich" -> "zurich")."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


class SearchRecord(NamedTuple):
    airport: object
    fields: tuple   # ((field priority, normalized text), ...), empty fields left out


def build_record(airport):
    fields = (
        (FIELD_ALTERNATE, normalize_text(airport.alternate_code)),
        (FIELD_PRIMARY, normalize_text(airport.primary_code)),
        (FIELD_NAME, normalize_text(airport.name)),
    )
    return SearchRecord(airport, tuple(f for f in fields if f[1]))


def match_rank(record, query):
    """(tier, field, matched text) of the record's best field, or None."""
    best = None
    for field, text in record.fields:
        if text == query:
            tier = EXACT
        elif text.startswith(query):
            tier = PREFIX
        elif query in text:
            tier = SUBSTRING
        else:
            continue
        rank = (tier, field, text)
        if best is None or rank < best:
            best = rank
    return best


class SearchIndex:
    """Precomputed search records over a sealed airport directory."""

    def __init__(self, airports):
        self.records = tuple(build_record(a) for a in airports)

    def __len__(self):
        return len(self.records)

    def search(self, query, limit=SEARCH_LIMIT):
        if limit <= 0:
            return []
        # Combining marks alone normalize to nothing.
        needle = normalize_text(query).strip()
        if not needle:
            return []

        ranked = []
        for record in self.records:
            rank = match_rank(record, needle)
            if rank is not None:
                ranked.append((rank, record.airport.primary_code, record.airport))
        best = heapq.nsmallest(limit, ranked, key=lambda item: item[:2])
        return [airport for _, _, airport in best]
