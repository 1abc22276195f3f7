"""Client for the urturn posts and expressions query API."""

__version__ = "0.1.0"

from urturn.client import UrturnClient, normalize_call  # noqa: E402
from urturn.query.cursor import WIDGET  # noqa: E402
from urturn.query.errors import ErrorCode, ErrorRecord  # noqa: E402

__all__ = [
    "ErrorCode",
    "ErrorRecord",
    "UrturnClient",
    "WIDGET",
    "normalize_call",
    "__version__",
]
