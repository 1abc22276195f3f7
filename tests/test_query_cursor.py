"""Tests for QueryCursor URL building and page state."""

import pytest

from conftest import FakeTransport, Recorder
from urturn.config.loader import ClientSettings
from urturn.query.cursor import WIDGET, QueryCursor
from urturn.query.models import QueryOptions


def _cursor(transport=None, settings=None, **overrides):
    values = {"queryType": "post", "querySelector": "query", "query": "hello"}
    values.update(overrides)
    return QueryCursor(QueryOptions(**values), settings or ClientSettings(), transport or FakeTransport())


def test_new_cursor_defaults():
    cursor = _cursor()

    assert cursor.page == 1
    assert cursor.page_size == 50


@pytest.mark.parametrize("page", [0, -3, 0.5, "abc", None])
def test_set_page_ignores_non_positive(page):
    cursor = _cursor()

    cursor.set_page(page)

    assert cursor.page == 1


def test_set_page_sets_exact_value():
    cursor = _cursor()

    cursor.set_page(4)

    assert cursor.page == 4


def test_set_page_size_is_unvalidated():
    cursor = _cursor()

    cursor.set_page_size("lots")

    assert cursor.build_url().endswith("&per_page=lots")


def test_page_advances_before_response():
    transport = FakeTransport(respond=False)
    cursor = _cursor(transport)

    cursor.next(None, None)
    cursor.next(None, None)

    assert transport.urls[0].endswith("page=1&per_page=50")
    assert transport.urls[1].endswith("page=2&per_page=50")
    assert cursor.page == 3


def test_query_term_is_uri_component_encoded():
    cursor = _cursor(query="rock & roll/it's (live)")

    url = cursor.build_url()

    assert "q=rock%20%26%20roll%2Fit's%20(live)&page=1" in url


def test_host_and_endpoint_come_from_settings():
    settings = ClientSettings(host="localhost:3000", endpointBase="/v2")
    cursor = _cursor(settings=settings)

    assert cursor.build_url().startswith("//localhost:3000/v2/posts.json?")


def test_widget_sentinel_adds_tracking():
    transport = FakeTransport()
    settings = ClientSettings(page_url="https://example.com/page?a=1")
    cursor = _cursor(transport, settings=settings)

    cursor.next(None, WIDGET)

    assert transport.urls[0].endswith(
        "page=1&per_page=50&track=1&href=https%3A%2F%2Fexample.com%2Fpage%3Fa%3D1"
    )


def test_widget_without_page_url_omits_href(caplog):
    transport = FakeTransport()
    cursor = _cursor(transport)

    cursor.next(None, WIDGET)

    assert transport.urls[0].endswith("page=1&per_page=50&track=1")
    assert "href" not in transport.urls[0]
    assert "without page_url" in caplog.text


def test_missing_transport_reports_error():
    on_error = Recorder()
    cursor = _cursor(FakeTransport(status="NO_TRANSPORT"))

    cursor.next(None, on_error)

    assert len(on_error.calls) == 1
    record = on_error.calls[0]
    assert record.code == "NO_TRANSPORT"
    assert record.api_method == "urturn.get"
    assert cursor.page == 2


def test_missing_transport_with_widget_sentinel_drops_error():
    cursor = _cursor(FakeTransport(status="NO_TRANSPORT"))

    cursor.next(None, WIDGET)

    assert cursor.page == 2
