"""RowSource: the page-fetch boundary between the table and its data."""

from __future__ import annotations

import logging

from ..core.records import Page
from ..core.validation import validate_page_index, validate_page_size
from ..errors import FetchError

_LOG = logging.getLogger(__name__)


class RowSource:
    """Supplies one page of rows plus the dataset total.

    Subclasses implement ``_load_page`` and raise FetchError on any
    transport or decoding problem. ``fetch_page`` turns that into an empty
    page with a zero total, so callers never see the exception.
    """

    def fetch_page(self, page_index: int, page_size: int) -> Page:
        page_index = validate_page_index(page_index)
        page_size = validate_page_size(page_size)
        try:
            page = self._load_page(page_index, page_size)
        except FetchError as exc:
            _LOG.warning("Fetching page %d failed: %s", page_index, exc)
            return Page.empty(page_index)
        _LOG.debug(
            "Fetched page %d: %d rows of %d total.", page_index, len(page), page.total,
        )
        return page

    def _load_page(self, page_index: int, page_size: int) -> Page:
        raise NotImplementedError

    def close(self) -> None:
        """Release held resources such as HTTP connections."""
