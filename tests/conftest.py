"""Shared test fixtures for artwork-browser."""

import time

import pytest

from artwork_browser.core.records import Artwork, Page
from artwork_browser.core.selection import SelectionStore
from artwork_browser.errors import FetchError
from artwork_browser.source.base import RowSource

PAGE_SIZE = 12


def _make_rows(ids):
    return tuple(Artwork(id=i, title=f"Artwork {i}") for i in ids)


def _make_page(index, ids, total=None):
    rows = _make_rows(ids)
    return Page(index=index, rows=rows, total=len(rows) if total is None else total)


class _FakeRowSource(RowSource):
    """In-memory source over ids 1..total; records each fetch.

    ``fail_pages`` raise FetchError (recovered as an empty page),
    ``crash_pages`` raise RuntimeError, and ``delays`` maps a page to a
    sleep in seconds before it is returned.
    """

    def __init__(self, total=60, fail_pages=(), crash_pages=(), delays=None):
        self.total = total
        self.fail_pages = set(fail_pages)
        self.crash_pages = set(crash_pages)
        self.delays = dict(delays or {})
        self.calls = []
        self.closed = False

    def _load_page(self, page_index, page_size):
        self.calls.append((page_index, page_size))
        time.sleep(self.delays.get(page_index, 0))
        if page_index in self.crash_pages:
            raise RuntimeError(f"source crashed on page {page_index}")
        if page_index in self.fail_pages:
            raise FetchError("boom")
        start = (page_index - 1) * page_size + 1
        stop = min(start + page_size, self.total + 1)
        return _make_page(page_index, range(start, stop), total=self.total)

    def close(self):
        self.closed = True


@pytest.fixture
def store():
    return SelectionStore()


@pytest.fixture
def page1():
    """First 12-row page of a 60-row dataset."""
    return _make_page(1, range(1, 13), total=60)


@pytest.fixture
def page2():
    """Second 12-row page of a 60-row dataset."""
    return _make_page(2, range(13, 25), total=60)


@pytest.fixture
def fake_source():
    return _FakeRowSource(total=60)


@pytest.fixture
def source_factory():
    """Build a fake source, e.g. ``source_factory(total=30, fail_pages={2})``."""
    return _FakeRowSource


@pytest.fixture
def rows_of():
    """Build a tuple of Artwork rows from ids."""
    return _make_rows


@pytest.fixture
def page_of():
    """Build a Page, e.g. ``page_of(3, range(25, 37), total=60)``."""
    return _make_page
