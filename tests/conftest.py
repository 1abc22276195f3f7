"""Pytest configuration and fixtures."""

from typing import Any, List, Optional

import pytest

from urturn.client import UrturnClient
from urturn.config.loader import ClientSettings
from urturn.query.cache import QueryCache
from urturn.retrieval.transport import Transport


class FakeTransport(Transport):
    """In-memory transport that records URLs and answers synchronously."""

    def __init__(self, status: Optional[str] = None, respond: bool = True):
        self.status = status
        self.respond = respond
        self.urls: List[str] = []
        self.closed = False

    def fetch_json(self, url, on_success, on_error=None):
        if self.status:
            return self.status
        self.urls.append(url)
        if self.respond and on_success is not None:
            on_success({"url": url})
        return None

    def close(self) -> None:
        self.closed = True


class Recorder:
    """Collects callback invocations."""

    def __init__(self):
        self.calls: List[Any] = []

    def __call__(self, value: Any) -> None:
        self.calls.append(value)


@pytest.fixture
def settings():
    return ClientSettings()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(settings, transport):
    """Client wired to a fresh cache and the fake transport."""
    return UrturnClient(settings, transport=transport, cache=QueryCache(settings, transport))


@pytest.fixture
def on_success():
    return Recorder()


@pytest.fixture
def on_error():
    return Recorder()
