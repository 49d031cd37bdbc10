"""FrameRowSource: pages served from an in-memory DataFrame."""

from __future__ import annotations

import numpy as np
import pandas as pd

from ..core.records import API_FIELDS, Artwork, Page
from ..core.validation import validate_artwork_frame
from ..errors import FetchError
from .base import RowSource

_PLACES = [
    "France", "Italy", "Japan", "China", "United States", "Netherlands",
    "Mexico", "Egypt", "India", "England", None,
]
_ARTISTS = [
    "Claude Monet", "Vincent van Gogh", "Katsushika Hokusai", "Mary Cassatt",
    "Georges Seurat", "Grant Wood", "Edward Hopper", "Unknown Maker", None,
]
_SUBJECTS = [
    "Water Lilies", "Landscape", "Portrait", "Still Life", "Harbor",
    "Garden", "Figure Study", "Bowl", "Vase", "Textile Fragment",
]


class FrameRowSource(RowSource):
    """Row source over a DataFrame with one row per artwork.

    The frame needs an ``id`` column; any of the other artwork fields may
    be missing or NaN.
    """

    def __init__(self, frame: pd.DataFrame) -> None:
        validate_artwork_frame(frame)
        columns = [c for c in API_FIELDS if c in frame.columns]
        self._frame = frame[columns].reset_index(drop=True)

    @property
    def total(self) -> int:
        return len(self._frame)

    def _load_page(self, page_index: int, page_size: int) -> Page:
        start = (page_index - 1) * page_size
        chunk = self._frame.iloc[start:start + page_size]
        chunk = chunk.astype(object).where(chunk.notna(), None)
        try:
            rows = tuple(Artwork.from_api(rec) for rec in chunk.to_dict("records"))
        except (KeyError, TypeError, ValueError) as exc:
            raise FetchError(f"Malformed artwork row: {exc!r}") from exc
        return Page(index=page_index, rows=rows, total=len(self._frame))


def demo_artworks(n_rows: int = 240, seed: int = 42) -> pd.DataFrame:
    """Generate a reproducible artwork table for offline browsing.

    Roughly a tenth of the optional fields are left empty so the table's
    placeholder text shows up.
    """
    rng = np.random.default_rng(seed)
    ids = np.arange(1, n_rows + 1) * 7 + 1000
    starts = rng.integers(1400, 1990, size=n_rows)
    ends = starts + rng.integers(0, 15, size=n_rows)
    subjects = rng.choice(_SUBJECTS, size=n_rows)
    frame = pd.DataFrame({
        "id": ids,
        "title": [f"{s} No. {i + 1}" for i, s in enumerate(subjects)],
        "place_of_origin": rng.choice(np.array(_PLACES, dtype=object), size=n_rows),
        "artist_display": rng.choice(np.array(_ARTISTS, dtype=object), size=n_rows),
        "inscriptions": np.where(
            rng.random(n_rows) < 0.3, "Signed lower right", None,
        ),
        "date_start": starts,
        "date_end": ends,
    })
    blank = rng.random(n_rows) < 0.1
    frame.loc[blank, "date_start"] = 0
    return frame
