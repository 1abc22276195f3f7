"""urturn client: the public query surface.

``UrturnClient.get`` accepts three call shapes:

1. ``get(options, on_success, on_error)`` with an options mapping
   (``queryType``, ``querySelector``, ``query``, optional ``id``, ``page``,
   ``perPage``).
2. ``get(query, on_success, on_error)`` searches posts by free text.
3. ``get(query_type, query_selector, query, [id,] on_success, on_error)``.

Every result is paginated: repeating an identical call returns the next
page. ``get`` returns True when the call was rejected before any request
was made, False otherwise. Results and errors arrive through callbacks.
"""

from concurrent.futures import Future, InvalidStateError
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from urturn.config.loader import ClientSettings
from urturn.query.cache import QueryCache
from urturn.query.errors import ErrorCode, ErrorRecord, build_error, type_name
from urturn.query.models import QueryOptions, QueryResult
from urturn.query.resources import is_known_selector, is_known_type
from urturn.retrieval.transport import RequestsTransport, Transport
from urturn.utils.logging import get_logger

logger = get_logger(__name__)

Callback = Optional[Callable[[Any], None]]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _with_default_id(options: Dict[str, Any]) -> Dict[str, Any]:
    if not options.get("id"):
        options["id"] = 0
    return options


def options_for_query(query: Any) -> Dict[str, Any]:
    """Options for a free-text post search."""
    return {"query": query, "queryType": "post", "querySelector": "query"}


def options_for_selector(query_type: Any, query_selector: Any, query: Any, id: Any = None) -> Dict[str, Any]:
    options = {"queryType": query_type, "querySelector": query_selector, "query": query}
    if id is not None:
        options["id"] = id
    return options


def normalize_call(*args: Any) -> Tuple[Dict[str, Any], Callback, Any]:
    """
    Collapse any accepted call shape into (options, on_success, on_error).

    The returned options always carry an ``id`` (0 when none was given).
    The caller's mapping is copied, never mutated.
    """
    if len(args) >= 4:
        options = options_for_selector(args[0], args[1], args[2])
        if _is_number(args[3]):
            options["id"] = args[3]
            rest = args[4:6]
        else:
            rest = args[3:5]
    else:
        first = args[0] if args else None
        if isinstance(first, str):
            options = options_for_query(first)
        elif isinstance(first, QueryOptions):
            options = first.model_dump(by_alias=True, exclude_none=True)
        elif isinstance(first, Mapping):
            options = dict(first)
        else:
            options = {}
        rest = args[1:3]

    on_success = rest[0] if len(rest) > 0 else None
    on_error = rest[1] if len(rest) > 1 else None
    return _with_default_id(options), on_success, on_error


def check_options(options: Mapping[str, Any]) -> Optional[ErrorRecord]:
    """
    Validate normalized options.

    Returns:
        The first ErrorRecord found, or None if the options are usable
    """
    if not options.get("query"):
        return build_error("get", ErrorCode.MISSING_QUERY)
    if not options.get("queryType"):
        return build_error("get", ErrorCode.MISSING_QUERY_TYPE)
    if not options.get("querySelector"):
        return build_error("get", ErrorCode.MISSING_QUERY_SELECTOR)

    for key in ("query", "queryType", "querySelector"):
        if not isinstance(options[key], str):
            return build_error("get", ErrorCode.WRONG_FORMAT, {
                "key": f"options.{key}",
                "type": type_name(options[key]),
                "expected": "String",
            })

    query_type = options["queryType"]
    if not is_known_type(query_type):
        return build_error("get", ErrorCode.UNKNOWN_QUERY_TYPE, {"value": query_type})
    if not is_known_selector(query_type, options["querySelector"]):
        return build_error("get", ErrorCode.UNKNOWN_QUERY_SELECTOR, {
            "value": options["querySelector"],
            "queryType": query_type,
        })

    # Falsy page/perPage count as absent
    for key in ("page", "perPage"):
        value = options.get(key)
        if value and not _is_number(value):
            return build_error("get", ErrorCode.WRONG_FORMAT, {
                "key": f"options.{key}",
                "type": type_name(value),
                "expected": "Number",
            })

    if not _is_number(options.get("id")):
        return build_error("get", ErrorCode.WRONG_FORMAT, {
            "key": "options.id",
            "type": type_name(options.get("id")),
            "expected": "Number",
        })
    return None


class UrturnClient:
    """Composition root holding settings, transport and the cursor cache."""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        transport: Optional[Transport] = None,
        cache: Optional[QueryCache] = None,
    ):
        self.settings = settings or ClientSettings()
        self.transport = transport or RequestsTransport(self.settings)
        self.cache = cache or QueryCache(self.settings, self.transport)

    def get_host(self) -> str:
        return self.settings.host

    def get(self, *args: Any) -> bool:
        """Request the next page for any accepted call shape. Returns True on failure."""
        options, on_success, on_error = normalize_call(*args)
        return self._get(options, on_success, on_error)

    def get_by_options(self, options: Mapping[str, Any], on_success: Callback = None, on_error: Any = None) -> bool:
        return self.get(options, on_success, on_error)

    def get_by_query(self, query: str, on_success: Callback = None, on_error: Any = None) -> bool:
        return self._get(_with_default_id(options_for_query(query)), on_success, on_error)

    def get_by_selector(
        self,
        query_type: str,
        query_selector: str,
        query: str,
        on_success: Callback = None,
        on_error: Any = None,
        id: Optional[int] = None,
    ) -> bool:
        options = options_for_selector(query_type, query_selector, query, id=id)
        return self._get(_with_default_id(options), on_success, on_error)

    def fetch(self, *args: Any) -> "Future[QueryResult]":
        """
        Request the next page and return a Future resolved with a QueryResult.

        Takes the same leading arguments as get() without the callbacks.
        The future stays pending if the request fails at the network level.
        """
        future: "Future[QueryResult]" = Future()

        def resolve(result: QueryResult) -> None:
            try:
                future.set_result(result)
            except InvalidStateError:
                logger.warning("Ignoring second result for an already resolved request")

        def on_success(data: Any) -> None:
            resolve(QueryResult(ok=True, data=data))

        def on_error(error: ErrorRecord) -> None:
            resolve(QueryResult(ok=False, error=error))

        if len(args) >= 3:
            self.get(*args, on_success, on_error)
        else:
            self.get(args[0] if args else None, on_success, on_error)
        return future

    def _get(self, options: Dict[str, Any], on_success: Callback, on_error: Any) -> bool:
        error = check_options(options)
        if error is not None:
            logger.warning(f"Rejected query: {error.code} {error.message}")
            _dispatch_error(on_error, error)
            return True

        query_options = QueryOptions(
            queryType=options["queryType"],
            querySelector=options["querySelector"],
            query=options["query"],
            id=options["id"],
            page=options.get("page") or None,
            perPage=options.get("perPage") or None,
        )
        cursor = self.cache.get(query_options)
        if query_options.page:
            cursor.set_page(query_options.page)
        if query_options.per_page:
            cursor.set_page_size(query_options.per_page)

        cursor.next(on_success, on_error)
        return False

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "UrturnClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _dispatch_error(on_error: Any, error: ErrorRecord) -> None:
    if callable(on_error):
        on_error(error)
    else:
        logger.warning(f"No error callback; dropping {error.code}")
