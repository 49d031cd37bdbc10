"""Artwork rows and the pages that carry them.

Rows are compared by ``id`` alone: the display fields take no part in
equality or hashing, so a row re-fetched with different text is still the
same row as far as selection is concerned.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

# Fields requested from the artworks API, in table column order.
API_FIELDS = (
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value)
    return text if text.strip() else None


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return int(value)


@dataclass(frozen=True)
class Artwork:
    """One table row. Only ``id`` matters to selection."""

    id: int
    title: str | None = field(default=None, compare=False)
    place_of_origin: str | None = field(default=None, compare=False)
    artist_display: str | None = field(default=None, compare=False)
    inscriptions: str | None = field(default=None, compare=False)
    date_start: int | None = field(default=None, compare=False)
    date_end: int | None = field(default=None, compare=False)

    @classmethod
    def from_api(cls, item: dict) -> Artwork:
        """Build an Artwork from one record of the artworks API ``data`` list.

        Raises KeyError when ``id`` is absent and TypeError/ValueError when a
        numeric field cannot be read as an integer.
        """
        if not isinstance(item, dict):
            raise TypeError(f"Expected an artwork record dict, got {type(item).__name__}.")
        raw_id = item["id"]
        if raw_id is None or isinstance(raw_id, bool):
            raise ValueError(f"Artwork id must be an integer, got {raw_id!r}.")
        return cls(
            id=int(raw_id),
            title=_optional_text(item.get("title")),
            place_of_origin=_optional_text(item.get("place_of_origin")),
            artist_display=_optional_text(item.get("artist_display")),
            inscriptions=_optional_text(item.get("inscriptions")),
            date_start=_optional_int(item.get("date_start")),
            date_end=_optional_int(item.get("date_end")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in API_FIELDS}


@dataclass(frozen=True)
class Page:
    """One fetched window of rows plus the dataset total.

    ``index`` is 1-based. ``total`` is the number of records in the whole
    dataset, not on this page.
    """

    index: int
    rows: tuple[Artwork, ...] = ()
    total: int = 0

    @classmethod
    def empty(cls, index: int) -> Page:
        return cls(index=index)

    @property
    def ids(self) -> list[int]:
        """Row ids in display order."""
        return [row.id for row in self.rows]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def __len__(self) -> int:
        return len(self.rows)
