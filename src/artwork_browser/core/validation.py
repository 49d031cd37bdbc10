"""Input validation with clear error messages for table users."""

from __future__ import annotations

import numbers
import re
from typing import Any

import pandas as pd

from ..errors import ValidationError

# A decimal number; group 1 is its integer part.
_NUMBER = re.compile(r"^([+-]?\d+)(?:\.\d*)?(?:[eE][+-]?\d+)?$")

INVALID_COUNT_MESSAGE = "Please enter a valid number"


def validate_requested_count(value: Any) -> int:
    """Validate a bulk selection count: a positive integer.

    Returns the count as a plain int.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{INVALID_COUNT_MESSAGE}: expected a whole number of rows, "
            f"got {type(value).__name__}."
        )
    if value <= 0:
        raise ValidationError(
            f"{INVALID_COUNT_MESSAGE}: the number of rows must be at least 1, got {value}."
        )
    return int(value)


def parse_bulk_count(raw: Any) -> int:
    """Parse the text typed into the "select N rows" box.

    Only the integer part of a number counts, so ``"3.5"`` is 3 and
    ``"1e1"`` is 1. Blank or non-numeric text (``"12abc"``) is rejected, as is
    a number with no integer digits (``".5"``) or an integer part below 1.
    """
    if raw is None:
        raise ValidationError(f"{INVALID_COUNT_MESSAGE}: no number was entered.")
    text = str(raw).strip()
    if not text:
        raise ValidationError(f"{INVALID_COUNT_MESSAGE}: no number was entered.")
    match = _NUMBER.match(text)
    if match is None:
        raise ValidationError(f"{INVALID_COUNT_MESSAGE}: '{text}' is not a number.")
    return validate_requested_count(int(match.group(1)))


def validate_page_index(value: Any) -> int:
    """Page indexes are 1-based integers."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(f"Page index must be an integer, got {type(value).__name__}.")
    if value < 1:
        raise ValidationError(f"Page index must be 1 or greater, got {value}.")
    return int(value)


def validate_page_size(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(f"Page size must be an integer, got {type(value).__name__}.")
    if value < 1:
        raise ValidationError(f"Page size must be 1 or greater, got {value}.")
    return int(value)


def validate_artwork_frame(frame: Any) -> pd.DataFrame:
    """Validate a DataFrame used as an in-memory artwork table.

    Returns the validated DataFrame (unchanged).
    """
    if not isinstance(frame, pd.DataFrame):
        raise TypeError(
            f"Expected a pandas DataFrame, got {type(frame).__name__}. "
            "Provide one row per artwork with an 'id' column."
        )
    if "id" not in frame.columns:
        raise ValueError(
            f"Artwork table needs an 'id' column. Found columns: {list(frame.columns)[:5]}"
        )
    if frame["id"].isna().any():
        raise ValueError("Artwork ids must not be missing.")
    if frame["id"].duplicated().any():
        dupes = frame.loc[frame["id"].duplicated(), "id"].unique().tolist()
        raise ValueError(
            f"Artwork ids must be unique. Found duplicates: {dupes[:5]}"
            + (f" (and {len(dupes) - 5} more)" if len(dupes) > 5 else "")
        )
    return frame
