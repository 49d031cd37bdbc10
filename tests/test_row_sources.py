"""Tests for the row sources: the artworks API client and the DataFrame source."""

import pandas as pd
import pytest
import requests

from artwork_browser.config import BrowserConfig
from artwork_browser.core.records import Page
from artwork_browser.errors import FetchError, ValidationError
from artwork_browser.source.artic import ArticRowSource, build_session, parse_page_payload
from artwork_browser.source.frame import FrameRowSource, demo_artworks


class _FakeResponse:
    def __init__(self, status_code, payload=None, bad_json=False):
        self.status_code = status_code
        self._payload = payload
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value")
        return self._payload


class _FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        self.closed = True


def _payload(ids, total=120):
    return {
        "pagination": {"total": total, "limit": len(ids), "current_page": 1},
        "data": [{"id": i, "title": f"Artwork {i}", "date_start": 1900} for i in ids],
    }


class TestArticRowSource:
    def test_fetch_page(self):
        session = _FakeSession(_FakeResponse(200, _payload([11, 12, 13])))
        source = ArticRowSource("https://example.test/artworks", timeout=3, session=session)

        page = source.fetch_page(2, 3)

        assert page.index == 2
        assert page.ids == [11, 12, 13]
        assert page.total == 120
        url, params, timeout = session.calls[0]
        assert url == "https://example.test/artworks"
        assert params["page"] == 2
        assert params["limit"] == 3
        assert params["fields"].startswith("id,title")
        assert timeout == 3

    def test_transport_error_gives_empty_page(self):
        session = _FakeSession(exc=requests.ConnectionError("down"))
        page = ArticRowSource(session=session).fetch_page(1, 12)
        assert page == Page.empty(1)

    def test_http_error_gives_empty_page(self):
        session = _FakeSession(_FakeResponse(503, {"detail": "busy"}))
        page = ArticRowSource(session=session).fetch_page(3, 12)
        assert page.is_empty
        assert page.total == 0

    def test_invalid_json_gives_empty_page(self):
        session = _FakeSession(_FakeResponse(200, bad_json=True))
        page = ArticRowSource(session=session).fetch_page(1, 12)
        assert page.is_empty

    def test_failure_is_logged(self, caplog):
        session = _FakeSession(exc=requests.Timeout("slow"))
        with caplog.at_level("WARNING", logger="artwork_browser.source.base"):
            ArticRowSource(session=session).fetch_page(4, 12)
        assert "Fetching page 4 failed" in caplog.text

    def test_invalid_page_index_is_caller_error(self):
        with pytest.raises(ValidationError):
            ArticRowSource(session=_FakeSession()).fetch_page(0, 12)

    def test_close_closes_session(self):
        session = _FakeSession()
        ArticRowSource(session=session).close()
        assert session.closed

    def test_from_config(self):
        config = BrowserConfig(api_url="https://example.test/a", http_timeout=2.5)
        source = ArticRowSource.from_config(config)
        assert source.api_url == "https://example.test/a"
        assert source.timeout == 2.5
        source.close()

    def test_build_session_headers(self):
        session = build_session(user_agent="tester/1.0", retries=1)
        assert session.headers["User-Agent"] == "tester/1.0"
        assert session.get_adapter("https://api.artic.edu").max_retries.total == 1
        session.close()


class TestParsePagePayload:
    def test_missing_total_uses_row_count(self):
        page = parse_page_payload({"data": [{"id": 1}, {"id": 2}]}, 1)
        assert page.total == 2

    @pytest.mark.parametrize("payload", [
        [],
        {"pagination": {"total": 3}},
        {"data": [{"title": "no id"}]},
        {"data": [{"id": "x"}]},
        {"data": [], "pagination": {"total": "many"}},
    ])
    def test_malformed(self, payload):
        with pytest.raises(FetchError):
            parse_page_payload(payload, 1)


class TestFrameRowSource:
    def test_pages(self):
        frame = pd.DataFrame({"id": range(100, 130), "title": ["t"] * 30})
        source = FrameRowSource(frame)

        first = source.fetch_page(1, 12)
        last = source.fetch_page(3, 12)

        assert first.ids == list(range(100, 112))
        assert last.ids == list(range(124, 130))
        assert last.total == 30

    def test_past_the_end(self):
        source = FrameRowSource(pd.DataFrame({"id": [1, 2, 3]}))
        page = source.fetch_page(5, 12)
        assert page.is_empty
        assert page.total == 3

    def test_missing_values_become_none(self):
        frame = pd.DataFrame({
            "id": [1, 2],
            "title": ["Bowl", None],
            "date_start": [1850, float("nan")],
        })
        rows = FrameRowSource(frame).fetch_page(1, 12).rows
        assert rows[1].title is None
        assert rows[1].date_start is None
        assert rows[0].date_start == 1850

    def test_demo_data(self):
        frame = demo_artworks(n_rows=50, seed=1)
        source = FrameRowSource(frame)
        assert source.total == 50
        assert len(source.fetch_page(1, 12)) == 12
        pd.testing.assert_frame_equal(frame, demo_artworks(n_rows=50, seed=1))


class TestFakeSource:
    def test_failed_page_recovers(self, source_factory):
        source = source_factory(total=30, fail_pages={2})
        assert source.fetch_page(2, 12).is_empty
        assert source.fetch_page(3, 12).ids == list(range(25, 31))
