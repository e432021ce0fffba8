"""Canonicalize route endpoints and collapse return legs."""

import logging
from typing import NamedTuple, Tuple

from src.models import Route

log = logging.getLogger("routemap")


class RouteSets(NamedTuple):
    unique: Tuple[Route, ...]   # one direction per airport pair, for drawing
    all: Tuple[Route, ...]      # every valid directed route, for counting
    dropped: int


def normalize_routes(pairs, resolve):
    """Resolve (origin, destination) pairs to canonical codes and deduplicate.

    A pair is dropped when either endpoint does not resolve. Every kept route
    goes into `all`. `unique` keeps the first direction seen for each airport
    pair; the reverse leg, if it shows up later, is skipped.
    """
    unique = []
    all_routes = []
    seen = set()
    dropped = 0

    for origin, destination in pairs:
        a = resolve(origin)
        b = resolve(destination)
        if a is None or b is None:
            dropped += 1
            log.debug("Dropping route %s-%s: unresolved endpoint", origin, destination)
            continue

        route = Route(a, b)
        all_routes.append(route)
        if route.key in seen:
            continue
        seen.add(route.key)
        unique.append(route)

    log.info(
        "Normalized routes: %d directed, %d unique, %d dropped (unknown airports).",
        len(all_routes), len(unique), dropped,
    )
    return RouteSets(tuple(unique), tuple(all_routes), dropped)


def routes_touching(routes, code):
    """Routes with `code` at either end, in input order."""
    return [r for r in routes if r.touches(code)]


def build_adjacency(routes):
    """Map each code to the frozenset of codes it shares a route with."""
    adjacency = {}
    for origin, destination in routes:
        adjacency.setdefault(origin, set()).add(destination)
        adjacency.setdefault(destination, set()).add(origin)
    return {code: frozenset(codes) for code, codes in adjacency.items()}


def referenced_codes(routes):
    codes = set()
    for origin, destination in routes:
        codes.add(origin)
        codes.add(destination)
    return codes
