"""Display utilities: placeholder text, years, and column headers for the table."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from .core.records import API_FIELDS, Artwork

_ACRONYMS = {"id"}

# Text shown in place of a missing value, per column.
MISSING_TEXT = {
    "title": "N/A",
    "place_of_origin": "Unknown",
    "artist_display": "Unknown Artist",
    "inscriptions": "N/A",
}

COLUMN_TITLES = {
    "title": "TITLE",
    "place_of_origin": "PLACE OF ORIGIN",
    "artist_display": "ARTIST",
    "inscriptions": "INSCRIPTIONS",
    "date_start": "START DATE",
    "date_end": "END DATE",
}


def prettify_name(name: str) -> str:
    """Convert snake_case names to Title Case with smart acronyms.

    Examples::

        prettify_name("place_of_origin")  # -> "Place Of Origin"
        prettify_name("artwork_id")       # -> "Artwork ID"
    """
    words = name.replace("_", " ").split()
    return " ".join(
        w.upper() if w.lower() in _ACRONYMS else w.capitalize()
        for w in words
    )


def format_text(value: str | None, column: str) -> str:
    if value is None or not str(value).strip():
        return MISSING_TEXT.get(column, "N/A")
    return str(value)


def format_year(value: int | None) -> str:
    # The API reports unknown years as 0.
    if not value:
        return "N/A"
    return str(value)


def rows_to_frame(rows: Iterable[Artwork]) -> pd.DataFrame:
    """Build the display DataFrame for one page, ids kept as a column."""
    records = []
    for row in rows:
        records.append({
            "id": row.id,
            "title": format_text(row.title, "title"),
            "place_of_origin": format_text(row.place_of_origin, "place_of_origin"),
            "artist_display": format_text(row.artist_display, "artist_display"),
            "inscriptions": format_text(row.inscriptions, "inscriptions"),
            "date_start": format_year(row.date_start),
            "date_end": format_year(row.date_end),
        })
    return pd.DataFrame(records, columns=list(API_FIELDS))


def column_titles(columns: Iterable[str]) -> dict[str, str]:
    return {c: COLUMN_TITLES.get(c, prettify_name(c)) for c in columns}
