"""artwork-browser: a paginated artwork table with selection that follows you across pages."""

from ._version import __version__
from .core.bulk import BulkSelectionPlanner, PageLoadReconciler, SelectionResult
from .core.records import Artwork, Page
from .core.selection import SelectionSnapshot, SelectionState, SelectionStore
from .errors import ArtworkBrowserError, FetchError, ValidationError


def browse(source=None, port=0, show=True):
    """Launch the artwork browser in a browser tab.

    Parameters
    ----------
    source : RowSource, optional
        Where pages come from. Defaults to the Art Institute of Chicago API,
        configured from ARTWORK_BROWSER_* environment variables.
    port : int
        Port number. 0 = auto-assign.
    show : bool
        Whether to open the browser automatically.
    """
    from .dashboard.app import BrowserApp

    app = BrowserApp(source=source)
    app.serve(port=port, show=show)


__all__ = [
    "__version__",
    "browse",
    "Artwork",
    "Page",
    "SelectionState",
    "SelectionSnapshot",
    "SelectionStore",
    "SelectionResult",
    "BulkSelectionPlanner",
    "PageLoadReconciler",
    "ArtworkBrowserError",
    "FetchError",
    "ValidationError",
]
