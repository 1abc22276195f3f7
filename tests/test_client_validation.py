"""Tests for option validation in UrturnClient.get."""

import pytest

from urturn.query.errors import ErrorCode


@pytest.mark.parametrize(
    "options, code",
    [
        ({"queryType": "post", "querySelector": "query"}, ErrorCode.MISSING_QUERY),
        ({"query": "", "queryType": "post", "querySelector": "query"}, ErrorCode.MISSING_QUERY),
        ({"query": "hello", "querySelector": "query"}, ErrorCode.MISSING_QUERY_TYPE),
        ({"query": "hello", "queryType": "post"}, ErrorCode.MISSING_QUERY_SELECTOR),
    ],
)
def test_missing_fields_fail_without_transport(client, transport, on_success, on_error, options, code):
    failed = client.get(options, on_success, on_error)

    assert failed is True
    assert [e.code for e in on_error.calls] == [code.value]
    assert on_success.calls == []
    assert transport.urls == []
    assert len(client.cache) == 0


def test_missing_checks_run_in_order(client, on_error):
    client.get({}, None, on_error)

    assert on_error.calls[0].code == "MISSING_QUERY"


@pytest.mark.parametrize(
    "key, value, observed",
    [
        ("query", 42, "number"),
        ("queryType", ["post"], "object"),
        ("querySelector", True, "boolean"),
    ],
)
def test_non_string_fields_are_wrong_format(client, transport, on_error, key, value, observed):
    options = {"query": "hello", "queryType": "post", "querySelector": "query"}
    options[key] = value

    failed = client.get(options, None, on_error)

    assert failed is True
    error = on_error.calls[0]
    assert error.code == "WRONG_FORMAT"
    assert error.params["key"] == f"options.{key}"
    assert error.params["type"] == observed
    assert transport.urls == []


def test_per_page_string_is_wrong_format(client, transport, on_error):
    failed = client.get(
        {"query": "hello", "queryType": "post", "querySelector": "query", "perPage": "ten"},
        None,
        on_error,
    )

    assert failed is True
    error = on_error.calls[0]
    assert error.code == "WRONG_FORMAT"
    assert error.params["key"] == "options.perPage"
    assert error.params["type"] == "string"
    assert error.message == "options.perPage should be a Number, was a string instead!"
    assert transport.urls == []


def test_page_string_is_wrong_format(client, on_error):
    failed = client.get({"query": "hello", "queryType": "post", "querySelector": "query", "page": "2"}, None, on_error)

    assert failed is True
    assert on_error.calls[0].params["key"] == "options.page"


def test_unknown_query_type_is_rejected(client, transport, on_error):
    failed = client.get("comment", "query", "hello", None, on_error)

    assert failed is True
    assert on_error.calls[0].code == "UNKNOWN_QUERY_TYPE"
    assert transport.urls == []


def test_selector_must_belong_to_query_type(client, on_error):
    failed = client.get("expression", "expressionCreator", "bob", None, on_error)

    assert failed is True
    assert on_error.calls[0].code == "UNKNOWN_QUERY_SELECTOR"


def test_failure_without_error_callback_still_returns_true(client, transport):
    assert client.get({"queryType": "post"}) is True
    assert transport.urls == []


def test_valid_call_returns_false_and_dispatches_success(client, on_success, on_error):
    failed = client.get("hello", on_success, on_error)

    assert failed is False
    assert len(on_success.calls) == 1
    assert on_error.calls == []


def test_zero_page_is_treated_as_absent(client, transport):
    client.get({"query": "hello", "queryType": "post", "querySelector": "query", "page": 0, "perPage": 0})

    assert transport.urls[0].endswith("q=hello&page=1&per_page=50")
