"""BulkSelectControls and SelectionIndicator: the "select N rows" popover and count line."""

from __future__ import annotations

import panel as pn

from ..errors import ValidationError
from .state import BrowserState

_POPOVER_CSS = """
:host {
  background: #ffffff;
  border: 1px solid #e5e7eb;
  border-radius: 8px;
  box-shadow: 0 4px 16px rgba(0,0,0,0.08), 0 1px 3px rgba(0,0,0,0.06);
  padding: 8px 12px;
}
"""


class BulkSelectControls:
    """A toggle button that opens a small "Select Multiple Rows" panel.

    Invalid input raises a blocking notice (the template modal when one is
    attached, plus an inline alert) and leaves the typed text in place for
    correction. A successful request clears the input and closes the panel.
    """

    def __init__(self, state: BrowserState) -> None:
        self.state = state
        self._template: pn.template.MaterialTemplate | None = None
        self._build_widgets()

    def _build_widgets(self) -> None:
        self.toggle_button = pn.widgets.Button(
            name="▾ Select rows", button_type="light", width=130,
        )
        self.count_input = pn.widgets.TextInput(placeholder="e.g., 2", width=100)
        self.select_button = pn.widgets.Button(
            name="Select", button_type="primary", width=80,
        )
        self.error_alert = pn.pane.Alert("", alert_type="danger", visible=False)
        self._modal_message = pn.pane.Markdown("")

        self.popover = pn.Column(
            pn.pane.Markdown("**Select Multiple Rows**", margin=(0, 5)),
            pn.pane.Markdown(
                "Enter number of rows to select across all pages",
                styles={"color": "#6b7280", "font-size": "12px"},
                margin=(0, 5),
            ),
            pn.Row(self.count_input, self.select_button),
            self.error_alert,
            visible=False,
            width=300,
            stylesheets=[_POPOVER_CSS],
        )

        self.toggle_button.on_click(self._on_toggle)
        self.select_button.on_click(self._on_submit)

    def _on_toggle(self, event) -> None:
        self.popover.visible = not self.popover.visible

    def _on_submit(self, event) -> None:
        self.submit()

    def submit(self) -> bool:
        """Submit the typed count. Returns True when the request was accepted."""
        raw = self.count_input.value_input or self.count_input.value
        try:
            self.state.on_bulk_select_submit(raw)
        except ValidationError as exc:
            self._show_error(str(exc))
            return False
        self.error_alert.visible = False
        self.count_input.param.update(value="", value_input="")
        self.popover.visible = False
        return True

    def _show_error(self, message: str) -> None:
        self.error_alert.param.update(object=message, visible=True)
        self._modal_message.object = f"### Invalid number\n\n{message}"
        if self._template is not None:
            self._template.open_modal()

    def set_template(self, template: pn.template.MaterialTemplate) -> None:
        """Set reference to the template so we can open its modal."""
        self._template = template

    def build_modal_content(self) -> list:
        """Return content to place inside the template modal."""
        return [self._modal_message]

    def build_panel(self) -> pn.Column:
        return pn.Column(self.toggle_button, self.popover, margin=0)


class SelectionIndicator:
    """The "Selected: K rows (Selection pending for N rows on other pages)" line."""

    def __init__(self, state: BrowserState) -> None:
        self.state = state
        self.pane = pn.pane.Markdown(
            state.selection_summary(),
            styles={"color": "#1a73e8", "font-size": "13px", "font-weight": "500"},
            margin=(0, 5),
        )
        self.status = pn.pane.Markdown(
            state.status_text, styles={"color": "#6b7280", "font-size": "12px"},
            margin=(0, 5),
        )
        state.param.watch(self._on_selection_change, ["total_selected", "pending_count"])
        state.param.watch(self._on_status_change, "status_text")

    def _on_selection_change(self, *events) -> None:
        self.pane.object = self.state.selection_summary()

    def _on_status_change(self, event) -> None:
        self.status.object = event.new

    def build_panel(self) -> pn.Column:
        return pn.Column(self.pane, self.status, margin=0)
