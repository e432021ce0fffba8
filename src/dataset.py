"""The sealed flight dataset and the pipeline that builds it.

raw rows -> parser -> airport index -> route sets -> FlightDataset

A FlightDataset is never modified after `build_dataset` returns. Derived
views (counts, adjacency) are computed on first use and cached on the
instance, which is safe because the underlying data cannot change.
"""

import logging
import time
from dataclasses import dataclass
from functools import cached_property
from typing import Tuple

from src.airport_index import AirportIndex, build_airport_index
from src.config import AIRPORTS_PATH, GREAT_CIRCLE_POINTS, ROUTE_LAYOUT, ROUTES_PATH, SEARCH_LIMIT
from src.geometry import plot_route_paths
from src.models import Route
from src.openflights import parse_airports, parse_routes, read_rows
from src.routes import build_adjacency, normalize_routes, referenced_codes, routes_touching
from src.search import SearchIndex
from src.stats import RouteCounts

log = logging.getLogger("routemap")


@dataclass(frozen=True, eq=False)
class FlightDataset:
    index: AirportIndex
    unique_routes: Tuple[Route, ...]
    all_routes: Tuple[Route, ...]
    search_index: SearchIndex
    version: int = 0
    ready: bool = True

    @classmethod
    def empty(cls):
        """Placeholder shown while the first load is still running."""
        return cls(AirportIndex({}, {}), (), (), SearchIndex(()), version=0, ready=False)

    @property
    def loading(self):
        return not self.ready

    @property
    def airports(self):
        return self.index.airports

    def resolve(self, code):
        return self.index.resolve(code)

    def get(self, code):
        return self.index.get(code)

    def search(self, query, limit=SEARCH_LIMIT):
        return self.search_index.search(query, limit)

    @cached_property
    def route_counts(self):
        return RouteCounts(self.all_routes)

    @cached_property
    def _adjacency(self):
        return build_adjacency(self.unique_routes)

    def connected(self, code):
        return self._adjacency.get(code, frozenset())

    def routes_for(self, code):
        """Unique routes starting or ending at the airport."""
        primary = self.resolve(code)
        if primary is None:
            return []
        return routes_touching(self.unique_routes, primary)

    def paths(self, routes=None, npoints=GREAT_CIRCLE_POINTS):
        """Great-circle FeatureCollection for `routes` (default: all unique routes)."""
        if routes is None:
            routes = self.unique_routes
        return plot_route_paths(routes, self.airports, npoints)


def build_dataset(airport_rows, route_rows, route_layout=ROUTE_LAYOUT, routed_only=True, version=1):
    """Run the whole pipeline over raw CSV rows and seal the result.

    With `routed_only` the directory keeps just the airports that appear on at
    least one valid route, which is what the map shows.
    """
    start = time.perf_counter()
    index = build_airport_index(parse_airports(airport_rows))
    route_sets = normalize_routes(parse_routes(route_rows, route_layout), index.resolve)

    if routed_only:
        index = index.restricted_to(referenced_codes(route_sets.unique))
        log.info("Kept %d airports served by at least one route.", len(index))

    dataset = FlightDataset(
        index=index,
        unique_routes=route_sets.unique,
        all_routes=route_sets.all,
        search_index=SearchIndex(index),
        version=version,
    )
    log.info(
        "Dataset v%d ready: %d airports, %d flights, %d unique routes (%.1f ms)",
        version, len(dataset.airports), len(dataset.all_routes), len(dataset.unique_routes),
        (time.perf_counter() - start) * 1000,
    )
    return dataset


def load_dataset(airports_source=None, routes_source=None, route_layout=ROUTE_LAYOUT,
                 routed_only=True, version=1):
    """Read airport and route files (paths or URLs) and build the dataset."""
    airports_source = airports_source or AIRPORTS_PATH
    routes_source = routes_source or ROUTES_PATH
    log.info("Loading airports from %s", airports_source)
    log.info("Loading routes from %s (layout=%s)", routes_source, route_layout)
    return build_dataset(
        read_rows(airports_source),
        read_rows(routes_source),
        route_layout=route_layout,
        routed_only=routed_only,
        version=version,
    )
