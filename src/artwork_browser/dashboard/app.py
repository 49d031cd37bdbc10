"""BrowserApp: assembles the Panel template and serves the artwork table."""

from __future__ import annotations

import logging

import panel as pn

from ..config import BrowserConfig
from ..source.artic import ArticRowSource
from ..source.base import RowSource
from .bulk_select import BulkSelectControls, SelectionIndicator
from .state import BrowserState
from .table_pane import ArtworkTable

_LOG = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Custom CSS
# ---------------------------------------------------------------------------

_BROWSER_CSS = """
:root, :host {
  --design-primary-color: #1a73e8;
  --design-primary-text-color: #ffffff;
  --design-background-color: #ffffff;
  --panel-primary-color: #1a73e8;
  --mdc-theme-primary: #1a73e8;
}

/* ---- Pill buttons ---- */
.bk-btn-primary {
  border-radius: 6px !important;
  background-color: #eef2ff !important;
  border: 1px solid #e0e7ff !important;
  color: #4f46e5 !important;
  box-shadow: none !important;
  font-weight: 500 !important;
  text-transform: none !important;
}
.bk-btn-primary:hover {
  background-color: #e0e7ff !important;
}

/* ---- Inputs ---- */
.bk-input {
  border-radius: 6px !important;
  border: 1px solid #d1d5db !important;
  font-size: 13px !important;
}

/* ---- Table header ---- */
.tabulator .tabulator-header {
  background-color: #f9fafb !important;
  border-bottom: 1px solid #e5e7eb !important;
}
.tabulator .tabulator-col-title {
  font-size: 11px !important;
  font-weight: 700 !important;
  color: #6b7280 !important;
  letter-spacing: 0.05em !important;
}
.tabulator-row:hover {
  background-color: #f9fafb !important;
}

/* ---- Paginator ---- */
.artwork-paginator {
  border-top: 1px solid #e5e7eb;
  padding-top: 6px;
  font-size: 13px;
  color: #374151;
}

/* ---- Compact header ---- */
.mdc-top-app-bar {
  height: 44px !important;
  min-height: 44px !important;
  background: #ffffff !important;
  box-shadow: none !important;
  border-bottom: 1px solid #f0f0f0 !important;
}
.mdc-top-app-bar__row {
  height: 44px !important;
  min-height: 44px !important;
}
.mdc-top-app-bar--fixed-adjust {
  padding-top: 44px !important;
}
"""


class BrowserApp:
    """Interactive artwork browser application.

    Assembles a Panel MaterialTemplate with:
    - Header row: selection count and the "select N rows" popover
    - Main area: checkbox table of the page on screen with its paginator
    """

    def __init__(
        self,
        source: RowSource | None = None,
        config: BrowserConfig | None = None,
    ) -> None:
        pn.extension("tabulator", sizing_mode="stretch_width")
        pn.config.raw_css.append(_BROWSER_CSS)
        pn.config.loading_color = "#1a73e8"

        self.config = config or BrowserConfig.from_env()
        if source is None:
            source = ArticRowSource.from_config(self.config)
        self.source = source

        self.state = BrowserState(source, page_size=self.config.page_size)
        self.table = ArtworkTable(self.state)
        self.bulk_controls = BulkSelectControls(self.state)
        self.indicator = SelectionIndicator(self.state)

        # Initial page
        self.state.load_page(1)

    def _build_template(self) -> pn.template.MaterialTemplate:
        """Build the Panel MaterialTemplate layout."""
        template = pn.template.MaterialTemplate(
            title="Artworks",
            header_background="#ffffff",
            header_color="#202124",
        )

        self.bulk_controls.set_template(template)
        template.modal.extend(self.bulk_controls.build_modal_content())

        toolbar = pn.Row(
            self.indicator.build_panel(),
            pn.layout.HSpacer(),
            self.bulk_controls.build_panel(),
            sizing_mode="stretch_width",
        )
        template.main.append(
            pn.Column(toolbar, self.table.build_panel(), sizing_mode="stretch_width")
        )
        return template

    def serve(self, port: int = 0, show: bool = True, **kwargs) -> None:
        """Start the Panel server and optionally open the browser.

        Parameters
        ----------
        port : int
            Port number. 0 = auto-assign.
        show : bool
            Whether to open the browser automatically.
        **kwargs
            Additional keyword arguments passed to pn.serve().
        """
        template = self._build_template()
        _LOG.info("Serving artwork browser (page size %d).", self.config.page_size)
        try:
            pn.serve(
                template,
                port=port or 0,
                show=show,
                title="Artwork Browser",
                **kwargs,
            )
        finally:
            self.close()

    def close(self) -> None:
        """Release the row source once the server has stopped."""
        _LOG.info("Closing artwork browser.")
        self.source.close()
