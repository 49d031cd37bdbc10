"""ArticRowSource: pages of artworks from the Art Institute of Chicago API."""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter, Retry

from ..config import (
    BrowserConfig,
    DEFAULT_API_URL,
    DEFAULT_HTTP_RETRIES,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from ..core.records import API_FIELDS, Artwork, Page
from ..errors import FetchError
from .base import RowSource


def build_session(
    user_agent: str = DEFAULT_USER_AGENT,
    retries: int = DEFAULT_HTTP_RETRIES,
) -> requests.Session:
    s = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
    return s


def parse_page_payload(payload: Any, page_index: int) -> Page:
    """Decode one ``GET /artworks`` response body into a Page.

    Expects ``{"pagination": {"total": ...}, "data": [...]}``.
    """
    if not isinstance(payload, dict):
        raise FetchError(f"Expected a JSON object, got {type(payload).__name__}.")
    data = payload.get("data")
    if not isinstance(data, list):
        raise FetchError("Response has no 'data' list.")
    pagination = payload.get("pagination") or {}
    try:
        rows = tuple(Artwork.from_api(item) for item in data)
        total = int(pagination.get("total", len(rows)))
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise FetchError(f"Malformed artwork record: {exc!r}") from exc
    return Page(index=page_index, rows=rows, total=max(total, 0))


class ArticRowSource(RowSource):
    """Row source backed by ``https://api.artic.edu/api/v1/artworks``."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: requests.Session | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        retries: int = DEFAULT_HTTP_RETRIES,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._session = session if session is not None else build_session(user_agent, retries)

    @classmethod
    def from_config(cls, config: BrowserConfig) -> ArticRowSource:
        return cls(
            config.api_url,
            timeout=config.http_timeout,
            user_agent=config.user_agent,
            retries=config.http_retries,
        )

    def _load_page(self, page_index: int, page_size: int) -> Page:
        params = {
            "page": page_index,
            "limit": page_size,
            "fields": ",".join(API_FIELDS),
        }
        try:
            response = self._session.get(self.api_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Artworks API unavailable: {exc}") from exc

        if response.status_code >= 400:
            raise FetchError(f"Artworks API returned HTTP {response.status_code}.")

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(
                f"Artworks API returned invalid JSON ({response.status_code})."
            ) from exc

        return parse_page_payload(payload, page_index)

    def close(self) -> None:
        self._session.close()
