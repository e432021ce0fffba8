"""Per-airport and network-wide flight statistics.

Everything here counts over the dataset's *all* routes. The unique route set
hides one direction of every return flight and would undercount.
"""

from collections import Counter
from typing import List, NamedTuple, Optional

from src.config import TOP_CONNECTIONS
from src.models import Airport


class FlightStats(NamedTuple):
    outbound: int
    inbound: int
    total: int


class ConnectedAirport(NamedTuple):
    code: str
    count: int
    airport: Optional[Airport]


class TopConnections(NamedTuple):
    outbound: List[ConnectedAirport]
    inbound: List[ConnectedAirport]
    combined: List[ConnectedAirport]


class NetworkTotals(NamedTuple):
    airports: int
    flights: int
    unique_routes: int
    directed_routes: int


_EMPTY = Counter()


class RouteCounts:
    """Outbound/inbound counters per airport, built in one pass over routes.

    Counters keep first-seen order, which breaks ties in the top-N lists.
    """

    def __init__(self, routes):
        self.outbound = {}
        self.inbound = {}
        self.combined = {}
        pairs = set()
        for origin, destination in routes:
            self.outbound.setdefault(origin, Counter())[destination] += 1
            self.inbound.setdefault(destination, Counter())[origin] += 1
            self.combined.setdefault(origin, Counter())[destination] += 1
            if origin != destination:
                self.combined.setdefault(destination, Counter())[origin] += 1
            pairs.add((origin, destination))
        self.directed_routes = len(pairs)

    def outbound_count(self, code):
        return sum(self.outbound.get(code, _EMPTY).values())

    def inbound_count(self, code):
        return sum(self.inbound.get(code, _EMPTY).values())


def _ranked(counter, airports, limit):
    ordered = sorted(counter.items(), key=lambda item: -item[1])
    return [ConnectedAirport(code, count, airports.get(code)) for code, count in ordered[:limit]]


def flight_stats(dataset, code):
    """Departing / arriving / total flights for an airport; zeros if unknown."""
    primary = dataset.resolve(code)
    if primary is None:
        return FlightStats(0, 0, 0)
    counts = dataset.route_counts
    outbound = counts.outbound_count(primary)
    inbound = counts.inbound_count(primary)
    return FlightStats(outbound, inbound, outbound + inbound)


def top_connections(dataset, code, limit=TOP_CONNECTIONS):
    """Busiest partner airports, by direction and combined."""
    primary = dataset.resolve(code)
    if primary is None or limit <= 0:
        return TopConnections([], [], [])
    counts = dataset.route_counts
    airports = dataset.airports
    return TopConnections(
        outbound=_ranked(counts.outbound.get(primary, _EMPTY), airports, limit),
        inbound=_ranked(counts.inbound.get(primary, _EMPTY), airports, limit),
        combined=_ranked(counts.combined.get(primary, _EMPTY), airports, limit),
    )


def connected_airports(dataset, code):
    """Codes sharing a drawn route with the airport."""
    primary = dataset.resolve(code)
    if primary is None:
        return frozenset()
    return dataset.connected(primary)


def network_totals(dataset):
    return NetworkTotals(
        airports=len(dataset.airports),
        flights=len(dataset.all_routes),
        unique_routes=len(dataset.unique_routes),
        directed_routes=dataset.route_counts.directed_routes,
    )
