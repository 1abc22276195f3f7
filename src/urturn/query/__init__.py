from .cache import QueryCache
from .cursor import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, WIDGET, QueryCursor
from .models import QueryOptions, QueryResult

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "QueryCache",
    "QueryCursor",
    "QueryOptions",
    "QueryResult",
    "WIDGET",
]
