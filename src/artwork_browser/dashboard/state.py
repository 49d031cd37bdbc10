"""BrowserState: centralized state for the artwork table."""

from __future__ import annotations

import asyncio
import logging
import math

import param

from ..config import DEFAULT_PAGE_SIZE
from ..core.bulk import BulkSelectionPlanner, PageLoadReconciler, SelectionResult
from ..core.records import Page
from ..core.selection import SelectionSnapshot, SelectionStore
from ..core.validation import parse_bulk_count, validate_page_index
from ..display_utils import rows_to_frame
from ..source.base import RowSource

_LOG = logging.getLogger(__name__)


class BrowserState(param.Parameterized):
    """Centralized state for the artwork table.

    Owns the page on screen and the SelectionStore, and is the only caller
    of the bulk planner and the page-load reconciler. Every user event
    arrives through one of the ``on_*`` methods:

    - ``on_page_change``: fetch a page, then reconcile the pending budget
      against it exactly once.
    - ``on_toggle_visible``: checkbox edits on the page on screen.
    - ``on_bulk_select_submit``: the "select N rows" box.

    Page loads carry a sequence token. Only the most recently issued token
    may install its page; a slower, older fetch that resolves later is
    dropped.
    """

    # --- Page on screen ---
    page_index = param.Integer(default=1, bounds=(1, None))
    page_size = param.Integer(default=DEFAULT_PAGE_SIZE, bounds=(1, None), constant=True)
    total_records = param.Integer(default=0, bounds=(0, None))
    rows = param.DataFrame(default=None, allow_None=True, doc="Display frame of the page on screen")
    loading = param.Boolean(default=False)
    target_page = param.Integer(default=1, bounds=(1, None), doc="Page most recently requested")

    # --- Selection mirror (updated from SelectionStore callbacks) ---
    total_selected = param.Integer(default=0)
    pending_count = param.Integer(default=0)
    selection_revision = param.Integer(default=0)

    status_text = param.String(default="")

    def __init__(self, source: RowSource, **params):
        super().__init__(**params)
        self._source = source
        self.store = SelectionStore()
        self.planner = BulkSelectionPlanner(self.store)
        self.reconciler = PageLoadReconciler(self.store)
        self._page = Page.empty(self.page_index)
        self._latest_token = 0
        self.target_page = self.page_index
        self.rows = rows_to_frame(())
        self.store.on_change(self._on_selection_change)

    @property
    def current_page(self) -> Page:
        return self._page

    @property
    def page_count(self) -> int:
        if self.total_records == 0:
            return 1
        return math.ceil(self.total_records / self.page_size)

    # ------------------------------------------------------------------
    # Page loading
    # ------------------------------------------------------------------

    def begin_page_load(self, page_index: int) -> int:
        """Start a page change and return its sequence token."""
        page_index = validate_page_index(page_index)
        self._latest_token += 1
        self.param.update(target_page=page_index, loading=True)
        return self._latest_token

    def complete_page_load(self, token: int, page: Page) -> bool:
        """Install a fetched page if ``token`` is still the latest.

        Returns False, changing nothing, for a stale token. Otherwise the
        pending budget is reconciled against the new rows before the page
        is published, so the table renders the final selection once.
        """
        if token != self._latest_token:
            _LOG.debug(
                "Discarding stale page %d (token %d, latest %d).",
                page.index, token, self._latest_token,
            )
            return False
        self.reconciler.reconcile(page.rows)
        self._page = page
        self.param.update(
            page_index=page.index,
            total_records=page.total,
            rows=rows_to_frame(page.rows),
            loading=False,
        )
        return True

    def abort_page_load(self, token: int) -> None:
        """Back out of a page change whose fetch raised.

        The page on screen stays; ``loading`` and ``target_page`` return to it
        unless a newer load has started since.
        """
        if token == self._latest_token:
            self.param.update(target_page=self.page_index, loading=False)

    async def on_page_change(self, new_page_index: int) -> bool:
        """Fetch ``new_page_index`` off the event loop, then install it."""
        token = self.begin_page_load(new_page_index)
        page_index = self.target_page
        try:
            page = await asyncio.to_thread(self._source.fetch_page, page_index, self.page_size)
        except Exception:
            self.abort_page_load(token)
            raise
        return self.complete_page_load(token, page)

    def load_page(self, new_page_index: int) -> bool:
        """Blocking variant of ``on_page_change`` for startup and scripts."""
        token = self.begin_page_load(new_page_index)
        try:
            page = self._source.fetch_page(self.target_page, self.page_size)
        except Exception:
            self.abort_page_load(token)
            raise
        return self.complete_page_load(token, page)

    async def refresh(self) -> bool:
        """Fetch the page on screen again, e.g. after a failed load."""
        return await self.on_page_change(self.page_index)

    # ------------------------------------------------------------------
    # Selection events
    # ------------------------------------------------------------------

    def on_toggle_visible(self, checked_ids) -> None:
        """Apply checkbox edits made on the page currently on screen."""
        self.store.toggle_visible(self._page.ids, checked_ids)

    def on_bulk_select_submit(self, raw_input) -> SelectionResult:
        """Parse the "select N rows" input and plan it against the page on screen.

        ValidationError propagates to the caller with the selection untouched.
        """
        count = parse_bulk_count(raw_input)
        result = self.planner.plan_bulk(count, self._page.rows)
        if result.pending_count:
            self.status_text = (
                f"Selected {result.added_count} rows on this page; "
                f"{result.pending_count} more will be selected as you browse."
            )
        else:
            self.status_text = f"Selected {result.added_count} rows."
        return result

    def total_selected_count(self) -> int:
        return self.store.total_selected

    def is_pending(self) -> bool:
        return self.store.pending_count > 0

    def selected_positions(self) -> list[int]:
        """Positions of selected rows within the page on screen."""
        return [i for i, row in enumerate(self._page.rows) if row.id in self.store]

    def _on_selection_change(self, snapshot: SelectionSnapshot) -> None:
        self.param.update(
            total_selected=snapshot.total_selected,
            pending_count=snapshot.pending_count,
            selection_revision=self.selection_revision + 1,
        )

    # ------------------------------------------------------------------
    # Display text
    # ------------------------------------------------------------------

    def selection_summary(self) -> str:
        text = f"Selected: {self.store.total_selected} rows"
        pending = self.store.pending_count
        if pending:
            text += f" (Selection pending for {pending} rows on other pages)"
        return text

    def page_report(self) -> str:
        """Paginator caption, e.g. "Showing 13 to 24 of 120 entries"."""
        n_rows = len(self._page)
        if n_rows == 0:
            return f"Showing 0 to 0 of {self.total_records} entries"
        first = (self._page.index - 1) * self.page_size + 1
        last = first + n_rows - 1
        return f"Showing {first} to {last} of {self.total_records} entries"
