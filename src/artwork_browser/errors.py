"""Exception types shared across the artwork browser."""

from __future__ import annotations


class ArtworkBrowserError(Exception):
    """Base class for errors raised by artwork-browser."""


class ValidationError(ArtworkBrowserError, ValueError):
    """User or caller input was rejected before any state was touched."""


class FetchError(ArtworkBrowserError):
    """A page could not be retrieved or decoded from its row source."""
