"""Tests for dataset loading."""
from __future__ import annotations

import json

import pytest
import requests

from loader import LoadError, fetch_listings


class DummyResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._payload


class DummySession:
    """Stands in for requests.Session; records the requested URLs."""

    def __init__(self, response=None, exc: Exception | None = None) -> None:
        self.headers: dict[str, str] = {}
        self.requested: list[str] = []
        self.response = response
        self.exc = exc

    def get(self, url, timeout=None):
        self.requested.append(url)
        if self.exc:
            raise self.exc
        return self.response


def test_local_file_limited_to_head(tmp_path):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps([{"name": f"L{i}"} for i in range(60)]))

    listings = fetch_listings(str(path), limit=50)

    assert len(listings) == 50
    assert listings[0]["name"] == "L0"
    assert listings[-1]["name"] == "L49"


def test_local_file_skips_non_objects(tmp_path):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps([{"name": "A"}, "junk", None, {"name": "B"}]))

    assert fetch_listings(str(path)) == [{"name": "A"}, {"name": "B"}]


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(LoadError, match="cannot read"):
        fetch_listings(str(tmp_path / "nope.json"))


def test_invalid_json_raises_load_error(tmp_path):
    path = tmp_path / "listings.json"
    path.write_text("{not json")

    with pytest.raises(LoadError, match="invalid JSON"):
        fetch_listings(str(path))


def test_top_level_must_be_array(tmp_path):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps({"listings": []}))

    with pytest.raises(LoadError, match="expected a JSON array"):
        fetch_listings(str(path))


def test_remote_fetch_uses_session():
    session = DummySession(DummyResponse(payload=[{"name": "A"}, {"name": "B"}]))

    listings = fetch_listings("https://example.com/listings.json", limit=1, session=session)

    assert listings == [{"name": "A"}]
    assert session.requested == ["https://example.com/listings.json"]
    assert session.headers["Accept"] == "application/json"


def test_remote_http_error_carries_status():
    session = DummySession(DummyResponse(status_code=404))

    with pytest.raises(LoadError, match="status: 404"):
        fetch_listings("https://example.com/listings.json", session=session)


def test_remote_transport_error():
    session = DummySession(exc=requests.exceptions.ConnectionError("connection refused"))

    with pytest.raises(LoadError, match="connection refused"):
        fetch_listings("https://example.com/listings.json", session=session)


def test_remote_invalid_json():
    session = DummySession(DummyResponse(text="<html>"))

    with pytest.raises(LoadError, match="invalid JSON response"):
        fetch_listings("http://example.com/listings.json", session=session)


def test_non_utf8_file_raises_load_error(tmp_path):
    path = tmp_path / "listings.json"
    path.write_bytes(b'[{"name": "\xff\xfe"}]')

    with pytest.raises(LoadError, match="invalid JSON"):
        fetch_listings(str(path))


def test_deeply_nested_json_raises_load_error(tmp_path):
    path = tmp_path / "listings.json"
    path.write_text("[" * 200_000 + "]" * 200_000)

    with pytest.raises(LoadError, match="invalid JSON"):
        fetch_listings(str(path))
