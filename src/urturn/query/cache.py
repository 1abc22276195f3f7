"""Query cache: one cursor per distinct query signature."""

import threading
from typing import Dict, Iterator

from urturn.config.loader import ClientSettings
from urturn.query.cursor import QueryCursor
from urturn.query.models import QueryOptions
from urturn.retrieval.transport import Transport
from urturn.utils.logging import get_logger

logger = get_logger(__name__)


class QueryCache:
    """
    Keeps every cursor ever created, keyed by query signature.

    Identical queries reuse the same cursor and so continue its pagination.
    Entries are never evicted.
    """

    def __init__(self, settings: ClientSettings, transport: Transport):
        self.settings = settings
        self.transport = transport
        self._cursors: Dict[str, QueryCursor] = {}
        self._lock = threading.Lock()

    def get(self, options: QueryOptions) -> QueryCursor:
        """Return the cursor for these options, creating it on first use."""
        signature = options.signature()
        with self._lock:
            cursor = self._cursors.get(signature)
            if cursor is None:
                cursor = QueryCursor(options, self.settings, self.transport)
                self._cursors[signature] = cursor
                logger.debug(f"Created cursor for {signature}")
        return cursor

    def __contains__(self, signature: object) -> bool:
        return signature in self._cursors

    def __len__(self) -> int:
        return len(self._cursors)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._cursors))
