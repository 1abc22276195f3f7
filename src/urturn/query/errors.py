"""Structured error records delivered to error callbacks."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

API_NAMESPACE = "urturn"
UNKNOWN_ERROR_MESSAGE = "An unknown error happened!"


class ErrorCode(str, Enum):
    """Error codes surfaced to callers."""

    MISSING_QUERY = "MISSING_QUERY"
    MISSING_QUERY_TYPE = "MISSING_QUERY_TYPE"
    MISSING_QUERY_SELECTOR = "MISSING_QUERY_SELECTOR"
    WRONG_FORMAT = "WRONG_FORMAT"
    UNKNOWN_QUERY_TYPE = "UNKNOWN_QUERY_TYPE"
    UNKNOWN_QUERY_SELECTOR = "UNKNOWN_QUERY_SELECTOR"
    NO_XHR = "NO_XHR"
    NO_TRANSPORT = "NO_TRANSPORT"
    XHR_IE_FAIL = "XHR_IE_FAIL"
    # Reserved: network failures are not dispatched to callbacks
    XHR_ERROR = "XHR_ERROR"
    XHR_TIMEOUT = "XHR_TIMEOUT"


MESSAGES: Dict[str, str] = {
    ErrorCode.MISSING_QUERY.value: "No query in options. We do not know what to search.",
    ErrorCode.MISSING_QUERY_TYPE.value: "No queryType in options. We do not know what to search.",
    ErrorCode.MISSING_QUERY_SELECTOR.value: "No querySelector in options. We do not know what to search.",
    ErrorCode.WRONG_FORMAT.value: "{key} should be a {expected}, was a {type} instead!",
    ErrorCode.UNKNOWN_QUERY_TYPE.value: "{value} is not a supported queryType.",
    ErrorCode.UNKNOWN_QUERY_SELECTOR.value: "{value} is not a supported querySelector for {queryType}.",
    ErrorCode.NO_XHR.value: "No HTTP transport is available.",
    ErrorCode.NO_TRANSPORT.value: "No HTTP transport is available.",
    ErrorCode.XHR_IE_FAIL.value: "The legacy HTTP transport could not be constructed.",
    ErrorCode.XHR_ERROR.value: "There was an error on urturn server.",
    ErrorCode.XHR_TIMEOUT.value: "Request to urturn server timed out.",
}


class ErrorRecord(BaseModel):
    """Error passed to the caller's error callback."""

    model_config = ConfigDict(frozen=True)

    api_method: str
    code: str
    message: str
    params: Dict[str, Any] = Field(default_factory=dict)


class _KeepMissing(dict):
    """format_map mapping that leaves unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def build_error(method: str, code: str, params: Optional[Dict[str, Any]] = None) -> ErrorRecord:
    """
    Build an ErrorRecord for an API method.

    Args:
        method: Public method name without namespace (e.g. "get")
        code: Error code; unknown codes get a generic message
        params: Values substituted into the message template

    Returns:
        Immutable ErrorRecord
    """
    code_value = code.value if isinstance(code, ErrorCode) else str(code)
    params = dict(params or {})
    template = MESSAGES.get(code_value)
    if template is None:
        message = UNKNOWN_ERROR_MESSAGE
    else:
        message = template.format_map(_KeepMissing({k: str(v) for k, v in params.items()}))

    return ErrorRecord(
        api_method=f"{API_NAMESPACE}.{method}",
        code=code_value,
        message=message,
        params=params,
    )


def type_name(value: Any) -> str:
    """Name the observed type of a value the way error messages report it."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if callable(value):
        return "function"
    return "object"
