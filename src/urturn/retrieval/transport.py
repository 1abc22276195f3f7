"""HTTP transport: fetch JSON for a URL and dispatch to callbacks."""

import threading
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

import requests

from urturn.config.loader import ClientSettings
from urturn.query.errors import ErrorCode
from urturn.utils.logging import get_logger

logger = get_logger(__name__)

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[Any], None]


class Transport(ABC):
    """Abstract capability to GET a URL and obtain parsed JSON."""

    @abstractmethod
    def fetch_json(
        self,
        url: str,
        on_success: Optional[SuccessCallback],
        on_error: Optional[ErrorCallback] = None,
    ) -> Optional[str]:
        """
        Start fetching a URL.

        Args:
            url: Request URL (may be protocol-relative)
            on_success: Called with the parsed JSON body
            on_error: Reserved for transport-level errors; not called for
                network failures

        Returns:
            A failure code if no transport is available, otherwise None
        """
        pass

    def close(self) -> None:
        """Release transport resources."""

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class RequestsTransport(Transport):
    """Transport backed by requests and a small worker pool."""

    def __init__(self, settings: Optional[ClientSettings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or ClientSettings()
        self.session = session or requests.Session()
        self.timeout = self.settings.timeout_seconds
        self._executor: Optional[ThreadPoolExecutor] = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="urturn-transport",
        )
        self._lock = threading.Lock()

    def _get_headers(self) -> Dict[str, str]:
        """Get HTTP headers for requests."""
        return {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }

    def absolute_url(self, url: str) -> str:
        """Resolve a protocol-relative URL against the configured scheme."""
        if url.startswith("//"):
            return f"{self.settings.scheme}:{url}"
        return url

    def fetch_json(
        self,
        url: str,
        on_success: Optional[SuccessCallback],
        on_error: Optional[ErrorCallback] = None,
    ) -> Optional[str]:
        with self._lock:
            if self._executor is None:
                return ErrorCode.NO_TRANSPORT.value
            try:
                self._executor.submit(self._run, self.absolute_url(url), on_success)
            except RuntimeError:
                # Executor shut down underneath us
                return ErrorCode.NO_TRANSPORT.value
        return None

    def _run(self, url: str, on_success: Optional[SuccessCallback]) -> None:
        try:
            response = self.session.get(url, headers=self._get_headers(), timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
        except requests.JSONDecodeError as e:
            logger.error(f"Response from {url} is not valid JSON: {e}")
            return
        except requests.RequestException as e:
            # HTTP errors and timeouts are not dispatched to callbacks
            logger.error(f"Request to {url} failed: {e}")
            return

        logger.debug(f"Fetched {len(response.content or b'')} bytes from {url}")
        if on_success is None:
            return
        try:
            on_success(result)
        except Exception as e:
            logger.error(f"Success callback for {url} raised: {e}", exc_info=True)

    def close(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self.session.close()

