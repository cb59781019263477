"""Systembolaget catalog API client."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import urljoin, urlsplit

import requests

from .decoding import decode_articles, decode_stores
from .errors import ApiError, MalformedRequestError, TransportError
from .models import ArticleCatalog, StoreDirectory

logger = logging.getLogger(__name__)

LIBRARY_VERSION = "0.2"
DEFAULT_BASE_URL = "http://www.systembolaget.se/"
DEFAULT_USER_AGENT = f"systembolaget/{LIBRARY_VERSION}"

ARTICLES_PATH = "Assortment.aspx?Format=Xml"
STORES_PATH = "Assortment.aspx?butikerombud=1"

ACCEPTED_STATUS_CODES = frozenset({requests.codes.ok, requests.codes.not_modified})

CHUNK_SIZE = 64 * 1024

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

T = TypeVar("T")


def _parse_reference(reference: str) -> str:
    if _CONTROL_CHARS.search(reference):
        raise MalformedRequestError(reference, "contains control characters")
    if _BAD_ESCAPE.search(reference):
        raise MalformedRequestError(reference, "invalid percent-escape")
    if reference.startswith(":"):
        raise MalformedRequestError(reference, "missing protocol scheme")
    try:
        urlsplit(reference)
    except ValueError as exc:
        raise MalformedRequestError(reference, str(exc)) from exc
    return reference


class CatalogClient:
    """Client for the article catalog and store directory documents.

    ``session`` is the HTTP transport. When omitted the client creates its own
    ``requests.Session`` and closes it in :meth:`close`; a supplied session is
    left to the caller. ``base_url`` and ``user_agent`` may be reassigned after
    construction, e.g. to point the client at a test server. ``timeout`` is
    passed to the transport as-is; ``None`` leaves the exchange unbounded.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = None,
    ) -> None:
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout

    def __enter__(self) -> "CatalogClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def fetch_articles(self) -> ArticleCatalog:
        """Return every article. Note: downloads a large XML document."""
        return self._fetch(ARTICLES_PATH, decode_articles)

    def fetch_stores(self) -> StoreDirectory:
        """Return every store and agent. Note: downloads a large XML document."""
        return self._fetch(STORES_PATH, decode_stores)

    def _fetch(self, relative_path: str, decode: Callable[[Any], T]) -> T:
        with self._get(relative_path) as response:
            try:
                return decode(response.iter_content(chunk_size=CHUNK_SIZE))
            except requests.exceptions.RequestException as exc:
                raise TransportError(f"failed reading response body: {exc}") from exc

    def _get(self, relative_path: str) -> requests.Response:
        reference = _parse_reference(relative_path)
        url = urljoin(self.base_url, reference)
        logger.debug("GET %s", url)

        try:
            response = self.session.get(
                url,
                headers={"User-Agent": self.user_agent},
                stream=True,
                timeout=self.timeout,
            )
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ) as exc:
            raise MalformedRequestError(url, str(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc

        if response.status_code not in ACCEPTED_STATUS_CODES:
            response.close()
            raise ApiError(response.status_code)
        return response
