"""Tests for the Panel view: table sync, pagination controls and the bulk popover."""

import asyncio

import panel as pn
import pytest

from artwork_browser.config import BrowserConfig
from artwork_browser.dashboard.app import BrowserApp
from artwork_browser.dashboard.bulk_select import BulkSelectControls, SelectionIndicator
from artwork_browser.dashboard.state import BrowserState
from artwork_browser.dashboard.table_pane import ArtworkTable


@pytest.fixture
def state(fake_source):
    s = BrowserState(fake_source, page_size=12)
    s.load_page(1)
    return s


class TestArtworkTable:
    def test_user_checkbox_edit_becomes_toggle(self, state):
        view = ArtworkTable(state)
        view.table.selection = [0, 2]
        assert state.store.selected_ids == {1, 3}

        view.table.selection = [2]
        assert state.store.selected_ids == {3}

    def test_bulk_selection_checks_rows(self, state):
        view = ArtworkTable(state)
        state.on_bulk_select_submit("4")
        assert list(view.table.selection) == [0, 1, 2, 3]

    def test_new_page_renders_reconciled_selection(self, state):
        view = ArtworkTable(state)
        state.on_bulk_select_submit("15")

        state.load_page(2)

        assert view.table.value["id"].tolist() == list(range(13, 25))
        assert list(view.table.selection) == [0, 1, 2]
        # The programmatic refresh is not read back as a user edit
        assert state.store.selected_ids == set(range(1, 16))

    def test_controls_follow_page(self, state):
        view = ArtworkTable(state)
        assert view.prev_button.disabled
        assert not view.next_button.disabled
        assert view.report.object == "Showing 1 to 12 of 60 entries"

        state.load_page(5)

        assert not view.prev_button.disabled
        assert view.next_button.disabled
        assert view.page_input.value == 5
        assert view.page_input.end == 5

    def test_go_to_page_clamps(self, state):
        view = ArtworkTable(state)
        asyncio.run(view.go_to_page(99))
        assert state.page_index == 5
        asyncio.run(view.go_to_page(0))
        assert state.page_index == 1

    def test_reload_refetches_after_failure(self, source_factory):
        source = source_factory(total=60, fail_pages={2})
        s = BrowserState(source, page_size=12)
        view = ArtworkTable(s)
        s.load_page(2)
        assert view.empty_message.visible

        source.fail_pages.clear()
        asyncio.run(view._on_reload(None))

        assert not view.empty_message.visible
        assert view.table.value["id"].tolist() == list(range(13, 25))

    def test_empty_message(self, fake_source):
        fake_source.fail_pages = {3}
        s = BrowserState(fake_source, page_size=12)
        s.load_page(1)
        view = ArtworkTable(s)
        assert not view.empty_message.visible

        s.load_page(3)

        assert view.empty_message.visible
        assert view.table.value.empty


class TestBulkSelectControls:
    def test_invalid_input_keeps_text(self, state):
        controls = BulkSelectControls(state)
        controls.popover.visible = True
        controls.count_input.value = "abc"

        assert controls.submit() is False

        assert controls.error_alert.visible
        assert "Please enter a valid number" in controls.error_alert.object
        assert controls.count_input.value == "abc"
        assert controls.popover.visible
        assert state.total_selected_count() == 0

    def test_valid_input_clears_and_closes(self, state):
        controls = BulkSelectControls(state)
        controls.popover.visible = True
        controls.count_input.value = "15"

        assert controls.submit() is True

        assert state.total_selected_count() == 15
        assert controls.count_input.value == ""
        assert not controls.popover.visible
        assert not controls.error_alert.visible

    def test_toggle_button_opens_popover(self, state):
        controls = BulkSelectControls(state)
        controls._on_toggle(None)
        assert controls.popover.visible
        controls._on_toggle(None)
        assert not controls.popover.visible


class TestSelectionIndicator:
    def test_summary_updates(self, state):
        indicator = SelectionIndicator(state)
        assert indicator.pane.object == "Selected: 0 rows"

        state.on_bulk_select_submit("20")

        assert indicator.pane.object == (
            "Selected: 20 rows (Selection pending for 8 rows on other pages)"
        )
        assert indicator.status.object.startswith("Selected 12 rows on this page")


class TestBrowserApp:
    def test_serve_closes_source_when_server_stops(self, fake_source, monkeypatch):
        served = []
        monkeypatch.setattr(pn, "serve", lambda panels, **kwargs: served.append(kwargs))
        app = BrowserApp(source=fake_source, config=BrowserConfig(page_size=12))

        assert app.state.current_page.ids == list(range(1, 13))
        app.serve(port=5007, show=False)

        assert served[0]["port"] == 5007
        assert fake_source.closed
