"""Query cursor: pagination state for one distinct query."""

import threading
from typing import Any, Callable, Optional
from urllib.parse import quote

from urturn.config.loader import ClientSettings
from urturn.query.errors import build_error
from urturn.query.models import QueryOptions
from urturn.query.resources import resolve
from urturn.retrieval.transport import Transport
from urturn.utils.logging import get_logger

logger = get_logger(__name__)

# Passed in place of the error callback to request widget tracking
WIDGET = "widget"

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50

# Characters encodeURIComponent leaves alone, beyond quote()'s defaults
_URI_COMPONENT_SAFE = "!~*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


class QueryCursor:
    """
    Walks one query through successive pages.

    The page counter advances when a URL is built, not when its response
    arrives, so overlapping next() calls each get their own page.
    """

    def __init__(self, options: QueryOptions, settings: ClientSettings, transport: Transport):
        self.query_type = options.query_type
        self.query_selector = options.query_selector
        self.query = options.query
        self.page: Any = DEFAULT_PAGE
        self.page_size: Any = DEFAULT_PAGE_SIZE
        self.settings = settings
        self.transport = transport
        self._lock = threading.Lock()

    def _base_url(self) -> str:
        endpoint = self.settings.endpoint_base
        if not endpoint.endswith("/"):
            endpoint += "/"
        return f"//{self.settings.host}{endpoint}"

    def build_url(self, track: bool = False) -> str:
        """Build the URL for the current page and advance the page counter."""
        collection, field = resolve(self.query_type, self.query_selector)
        with self._lock:
            page = self.page
            self.page = page + 1
            page_size = self.page_size

        url = f"{self._base_url()}{collection}.json?{field}={encode_component(self.query)}"
        url += f"&page={page}&per_page={page_size}"
        if track:
            url += "&track=1"
            if self.settings.page_url:
                url += "&href=" + encode_component(self.settings.page_url)
            else:
                logger.warning("Widget tracking requested without page_url; sending track=1 without href")
        return url

    def next(self, on_success: Optional[Callable[[Any], None]], on_error: Any = None) -> str:
        """
        Request the next page.

        Args:
            on_success: Called with the parsed JSON body
            on_error: Called with an ErrorRecord if no transport is available.
                Pass WIDGET instead to add widget tracking parameters.

        Returns:
            The URL that was requested
        """
        track = on_error == WIDGET
        url = self.build_url(track=track)
        logger.debug(f"Requesting {url}")

        status = self.transport.fetch_json(url, on_success, None if track else on_error)
        if status:
            record = build_error("get", status)
            logger.error(f"Transport unavailable for {url}: {status}")
            if callable(on_error):
                on_error(record)
        return url

    def set_page(self, page: Any) -> None:
        """Set the current page; values that truncate to <= 0 are ignored."""
        try:
            truncated = int(page)
        except (TypeError, ValueError, OverflowError):
            return
        if truncated > 0:
            with self._lock:
                self.page = truncated

    def set_page_size(self, page_size: Any) -> None:
        """Overwrite the page size. No validation is applied."""
        with self._lock:
            self.page_size = page_size
