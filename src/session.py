"""A viewing session: owns the current dataset snapshot and the selection.

Loads run on a background worker. Until the first load finishes, `dataset`
is an empty placeholder with `loading` set. A reload swaps in the new
snapshot when it completes; anyone still holding the old one keeps a
consistent (if stale) view. A load that finishes after `close()` is discarded.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from src.config import ROUTE_LAYOUT, SEARCH_DEBOUNCE, SEARCH_LIMIT, TOP_CONNECTIONS
from src.dataset import FlightDataset, load_dataset
from src.geometry import feature_collection
from src.scheduler import DebouncedCall
from src.stats import flight_stats, network_totals, top_connections

log = logging.getLogger("routemap")

IDLE = "idle"
LOADING = "loading"
READY = "ready"
CLOSED = "closed"


class FlightSession:

    def __init__(self, airports_source=None, routes_source=None, route_layout=ROUTE_LAYOUT,
                 routed_only=True, loader=load_dataset, search_delay=SEARCH_DEBOUNCE):
        self.airports_source = airports_source
        self.routes_source = routes_source
        self.route_layout = route_layout
        self.routed_only = routed_only
        self._loader = loader
        self._lock = threading.Lock()
        self._dataset = FlightDataset.empty()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="routemap-load")
        self._pending = None
        self._next_version = 0
        self._selected = None
        self._closed = False
        self._search = DebouncedCall(self._run_search, search_delay)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ---- lifecycle ----

    @property
    def state(self):
        if self._closed:
            return CLOSED
        pending = self._pending
        if pending is not None and not pending.done():
            return LOADING
        if self._dataset.ready:
            return READY
        return IDLE

    @property
    def dataset(self):
        return self._dataset

    def load(self):
        """Start a (re)load in the background. Returns the Future of the new dataset."""
        with self._lock:
            if self._closed:
                raise RuntimeError("Session is closed")
            self._next_version += 1
            version = self._next_version
        future = self._executor.submit(self._load, version)
        self._pending = future
        return future

    def _load(self, version):
        try:
            dataset = self._loader(
                airports_source=self.airports_source,
                routes_source=self.routes_source,
                route_layout=self.route_layout,
                routed_only=self.routed_only,
                version=version,
            )
        except Exception:
            log.exception("Dataset load v%d failed; keeping v%d", version, self._dataset.version)
            raise

        with self._lock:
            if self._closed:
                log.debug("Session closed; discarding dataset v%d", version)
                return dataset
            if dataset.version < self._dataset.version:
                return dataset
            self._dataset = dataset
            if self._selected is not None and self._selected not in dataset.airports:
                log.info("Selected airport %s not in reloaded dataset; clearing selection", self._selected)
                self._selected = None
        return dataset

    def wait(self, timeout=None):
        """Block until the latest load finishes and return the current dataset."""
        pending = self._pending
        if pending is not None:
            pending.result(timeout)
        return self._dataset

    def close(self):
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._search.cancel()
        self._executor.shutdown(wait=False)

    # ---- selection ----

    @property
    def selected(self):
        return self._selected

    @property
    def selected_airport(self):
        if self._selected is None:
            return None
        return self._dataset.airports.get(self._selected)

    def select(self, code):
        """Select an airport by ICAO or IATA code; None clears the selection."""
        with self._lock:
            if code is None:
                self._selected = None
                return None
            dataset = self._dataset
            primary = dataset.resolve(code)
            if primary is None or primary not in dataset.airports:
                raise ValueError(f"Unknown airport '{code}'")
            self._selected = primary
            return dataset.airports[primary]

    def selected_stats(self):
        return flight_stats(self._dataset, self._selected)

    def selected_connections(self, limit=TOP_CONNECTIONS):
        return top_connections(self._dataset, self._selected, limit)

    def selected_paths(self):
        """Great-circle paths of the routes touching the selected airport."""
        if self._selected is None:
            return feature_collection([])
        dataset = self._dataset
        return dataset.paths(dataset.routes_for(self._selected))

    def totals(self):
        return network_totals(self._dataset)

    # ---- search ----

    def search(self, query, limit=SEARCH_LIMIT):
        return self._dataset.search(query, limit)

    def schedule_search(self, query, callback, limit=SEARCH_LIMIT):
        """Debounced search; `callback(results)` runs for the last query only."""
        self._search.submit(query, callback, limit)

    def _run_search(self, query, callback, limit):
        callback(self.search(query, limit))
