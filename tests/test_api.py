import pytest
import requests

import src.api as api
from src.openflights import download as download_mod


class FakeResponse:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text
        self.encoding = None


@pytest.fixture(autouse=True)
def sleeps(monkeypatch):
    waited = []
    monkeypatch.setattr(api.time, "sleep", waited.append)
    return waited


def _serve(monkeypatch, responses):
    calls = []

    def fake_get(url, timeout=None):
        calls.append(url)
        item = responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    monkeypatch.setattr(api.session, "get", fake_get)
    return calls


def test_fetch_text_success(monkeypatch, sleeps):
    _serve(monkeypatch, [FakeResponse(200, "a,b\n")])

    assert api.fetch_text("https://example.test/x") == "a,b\n"
    assert sleeps == []


def test_fetch_text_retries_after_errors(monkeypatch, sleeps):
    calls = _serve(monkeypatch, [
        requests.ConnectionError("boom"),
        FakeResponse(503),
        FakeResponse(200, "ok"),
    ])

    assert api.fetch_text("https://example.test/x") == "ok"
    assert len(calls) == 3
    assert sleeps == [api.RETRY_BACKOFF, api.RETRY_BACKOFF * 2]


def test_fetch_text_404_returns_none(monkeypatch):
    calls = _serve(monkeypatch, [FakeResponse(404)])

    assert api.fetch_text("https://example.test/x") is None
    assert len(calls) == 1


def test_fetch_text_gives_up(monkeypatch):
    _serve(monkeypatch, [FakeResponse(500)] * api.MAX_RETRIES)

    assert api.fetch_text("https://example.test/x") is None


def test_download_writes_file(monkeypatch, tmp_path):
    monkeypatch.setattr(download_mod, "fetch_text", lambda url: "1,Airport\n2,Other\n")

    paths = download_mod.download_all(tmp_path, ["airports"])

    assert paths == {"airports": tmp_path / "airports.dat"}
    assert (tmp_path / "airports.dat").read_text(encoding="utf-8") == "1,Airport\n2,Other\n"


def test_download_failure_returns_none(monkeypatch, tmp_path):
    monkeypatch.setattr(download_mod, "fetch_text", lambda url: None)

    assert download_mod.download("routes", tmp_path) is None
    assert not (tmp_path / "routes.dat").exists()
