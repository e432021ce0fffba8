import threading
from concurrent.futures import TimeoutError as FutureTimeout

import pytest

from src.dataset import FlightDataset, build_dataset
from src.geometry import feature_collection
from src.scheduler import DebouncedCall
from src.session import CLOSED, IDLE, READY, FlightSession
from src.stats import FlightStats


@pytest.fixture
def loader(airport_rows, route_rows):
    calls = []

    def _load(**kwargs):
        calls.append(kwargs)
        return build_dataset(airport_rows, route_rows, version=kwargs["version"])

    _load.calls = calls
    return _load


@pytest.fixture
def session(loader):
    with FlightSession("airports.dat", "routes.dat", loader=loader, search_delay=0.1) as s:
        yield s


def test_session_starts_idle_with_loading_placeholder(session):
    assert session.state == IDLE
    assert session.dataset.loading
    assert session.search("lhr") == []


def test_load_makes_dataset_ready(session, loader):
    session.load().result(timeout=5)

    assert session.state == READY
    assert session.dataset.ready
    assert session.dataset.version == 1
    assert loader.calls[0]["airports_source"] == "airports.dat"
    assert loader.calls[0]["routes_source"] == "routes.dat"


def test_reload_replaces_snapshot_old_one_stays_valid(session):
    session.load()
    first = session.wait(timeout=5)
    session.load()
    second = session.wait(timeout=5)

    assert second is not first
    assert second.version == 2
    assert len(first.unique_routes) == len(second.unique_routes)


def test_failed_load_keeps_previous_snapshot(airport_rows, route_rows):
    results = [build_dataset(airport_rows, route_rows, version=1)]

    def _load(**kwargs):
        if results:
            return results.pop()
        raise OSError("disk gone")

    with FlightSession(loader=_load) as session:
        session.load()
        first = session.wait(timeout=5)
        future = session.load()
        with pytest.raises(OSError):
            future.result(timeout=5)
        assert session.dataset is first


def test_select_by_alternate_code(session):
    session.load().result(timeout=5)

    airport = session.select("LHR")

    assert airport.primary_code == "EGLL"
    assert session.selected == "EGLL"
    assert session.selected_airport is airport
    assert session.selected_stats() == FlightStats(3, 2, 5)
    assert [c.code for c in session.selected_connections(1).outbound] == ["KJFK"]
    assert len(session.selected_paths()["features"]) == 2


def test_select_unknown_or_clear(session):
    session.load().result(timeout=5)

    with pytest.raises(ValueError):
        session.select("ZZZ")
    session.select("JFK")
    session.select(None)
    assert session.selected is None
    assert session.selected_stats() == FlightStats(0, 0, 0)
    assert session.selected_paths() == feature_collection([])


def test_totals(session):
    session.load().result(timeout=5)

    assert session.totals().flights == 8


def test_schedule_search_runs_only_last_query(session):
    session.load().result(timeout=5)
    done = threading.Event()
    results = []

    def callback(found):
        results.append([a.primary_code for a in found])
        done.set()

    session.schedule_search("lon", callback)
    session.schedule_search("zur", callback)

    assert done.wait(timeout=5)
    assert results == [["LSZH"]]


def test_close_rejects_new_loads(loader):
    session = FlightSession(loader=loader)
    session.close()

    assert session.state == CLOSED
    with pytest.raises(RuntimeError):
        session.load()


def test_load_finishing_after_close_is_discarded(airport_rows, route_rows):
    started = threading.Event()
    release = threading.Event()

    def _load(**kwargs):
        started.set()
        release.wait(timeout=5)
        return build_dataset(airport_rows, route_rows, version=kwargs["version"])

    session = FlightSession(loader=_load)
    future = session.load()
    assert started.wait(timeout=5)
    session.close()
    release.set()

    assert future.result(timeout=5).ready
    assert session.state == CLOSED
    assert session.dataset.loading


def test_select_holds_off_a_concurrent_reload(monkeypatch, airport_rows, route_rows):
    without_heathrow = [r for r in route_rows if "LHR" not in r]
    datasets = [
        build_dataset(airport_rows, without_heathrow, version=2),
        build_dataset(airport_rows, route_rows, version=1),
    ]
    release = threading.Event()
    original_resolve = FlightDataset.resolve

    def _load(**kwargs):
        if kwargs["version"] == 2:
            release.wait(timeout=5)
        return datasets.pop()

    with FlightSession(loader=_load) as session:
        session.load().result(timeout=5)
        reload = session.load()

        def resolve_during_reload(self, code):
            if not release.is_set():
                release.set()
                # The swap needs the session lock, which select is holding.
                with pytest.raises(FutureTimeout):
                    reload.result(timeout=0.3)
            return original_resolve(self, code)

        monkeypatch.setattr(FlightDataset, "resolve", resolve_during_reload)
        session.select("LHR")
        reload.result(timeout=5)

        assert session.dataset.version == 2
        assert "EGLL" not in session.dataset.airports
        assert session.selected is None


def test_debounced_call_cancel():
    calls = []
    debounced = DebouncedCall(calls.append, delay=10)

    debounced.submit("a")
    assert debounced.pending
    debounced.cancel()

    assert not debounced.pending
    assert calls == []


def test_debounced_call_supersedes_pending_input():
    calls = []
    done = threading.Event()

    def record(value):
        calls.append(value)
        done.set()

    debounced = DebouncedCall(record, delay=0.2)
    debounced.submit("a")
    debounced.submit("b")
    timer = debounced.submit("c")

    assert done.wait(timeout=5)
    timer.join(timeout=5)
    assert calls == ["c"]
    assert not debounced.pending
