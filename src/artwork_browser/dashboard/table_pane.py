"""ArtworkTable: Tabulator view of the page on screen plus pagination controls."""

from __future__ import annotations

from functools import partial

import panel as pn

from ..core.records import API_FIELDS
from ..display_utils import column_titles
from .state import BrowserState

EMPTY_MESSAGE = "No artworks found."

_TABLE_WIDTHS = {
    "title": 320,
    "place_of_origin": 160,
    "artist_display": 260,
    "inscriptions": 220,
    "date_start": 110,
    "date_end": 110,
}


class ArtworkTable:
    """Checkbox table over BrowserState.

    User checkbox edits go to ``state.on_toggle_visible``. When the table
    itself is refreshed from state (new page, selection change) the
    ``_syncing`` flag keeps those programmatic updates from being read back
    as user edits.
    """

    def __init__(self, state: BrowserState) -> None:
        self.state = state
        self._syncing = False

        self.table = pn.widgets.Tabulator(
            state.rows,
            selectable="checkbox",
            show_index=False,
            disabled=True,
            pagination=None,
            hidden_columns=["id"],
            titles=column_titles(API_FIELDS),
            widths=_TABLE_WIDTHS,
            layout="fit_data_stretch",
            sizing_mode="stretch_width",
            min_height=200,
        )
        self.empty_message = pn.pane.Markdown(
            EMPTY_MESSAGE, visible=False, styles={"color": "#6b7280"},
        )
        self.report = pn.pane.Markdown(state.page_report(), margin=(10, 5))
        self.prev_button = pn.widgets.Button(name="Previous", width=90)
        self.next_button = pn.widgets.Button(name="Next", width=90)
        self.reload_button = pn.widgets.Button(name="Reload", width=90)
        self.page_input = pn.widgets.IntInput(
            name="Page", value=state.target_page, start=1,
            end=max(state.page_count, state.target_page), width=80,
        )

        self._wire_bindings()
        self._refresh_controls()

    def _wire_bindings(self) -> None:
        self.table.param.watch(self._on_table_selection, "selection")
        self.state.param.watch(self._on_rows_change, "rows")
        self.state.param.watch(self._on_selection_revision, "selection_revision")
        self.state.param.watch(self._on_loading_change, "loading")
        self.state.param.watch(lambda event: self._refresh_controls(), "target_page")
        self.prev_button.on_click(self._on_prev)
        self.next_button.on_click(self._on_next)
        self.reload_button.on_click(self._on_reload)
        self.page_input.param.watch(self._on_page_input, "value")

    # --- Selection ---

    def _on_table_selection(self, event) -> None:
        """Forward user checkbox edits as the checked ids of this page."""
        if self._syncing:
            return
        page_ids = self.state.current_page.ids
        checked = [page_ids[i] for i in event.new if 0 <= i < len(page_ids)]
        self.state.on_toggle_visible(checked)

    def _on_selection_revision(self, event) -> None:
        self._sync_selection()

    def _sync_selection(self) -> None:
        positions = self.state.selected_positions()
        if positions == list(self.table.selection):
            return
        self._syncing = True
        try:
            self.table.selection = positions
        finally:
            self._syncing = False

    # --- Page changes ---

    def _on_rows_change(self, event) -> None:
        self._syncing = True
        try:
            self.table.value = event.new
            self.table.selection = self.state.selected_positions()
        finally:
            self._syncing = False
        self._refresh_controls()

    def _on_loading_change(self, event) -> None:
        self.table.loading = event.new
        self._refresh_controls()

    def _refresh_controls(self) -> None:
        state = self.state
        target = state.target_page
        self.prev_button.disabled = target <= 1
        self.next_button.disabled = target >= state.page_count
        self.empty_message.visible = state.current_page.is_empty and not state.loading
        self.report.object = state.page_report()
        self._syncing = True
        try:
            # A failed fetch reports total 0, so the target can exceed page_count.
            self.page_input.param.update(end=max(state.page_count, target), value=target)
        finally:
            self._syncing = False

    async def go_to_page(self, page_index: int) -> bool:
        """Navigate to ``page_index``, clamped to the known page range."""
        page_index = max(1, min(int(page_index), self.state.page_count))
        return await self.state.on_page_change(page_index)

    async def _on_prev(self, event) -> None:
        await self.go_to_page(self.state.target_page - 1)

    async def _on_next(self, event) -> None:
        await self.go_to_page(self.state.target_page + 1)

    async def _on_reload(self, event) -> None:
        await self.state.refresh()

    def _on_page_input(self, event) -> None:
        if self._syncing or event.new is None or event.new == self.state.target_page:
            return
        pn.state.execute(partial(self.go_to_page, event.new))

    def build_panel(self) -> pn.Column:
        """Build the table with its paginator row."""
        paginator = pn.Row(
            self.report,
            pn.layout.HSpacer(),
            self.prev_button,
            self.page_input,
            self.next_button,
            self.reload_button,
            sizing_mode="stretch_width",
            css_classes=["artwork-paginator"],
        )
        return pn.Column(
            self.table,
            self.empty_message,
            paginator,
            sizing_mode="stretch_width",
        )
