"""
NAVI SDK - Async-first client for the NAVI lending protocol REST API.

This SDK provides:
- Async client with pluggable HTTP transports
- Memoized REST calls: in-flight request coalescing plus TTL caching
- Middleware hooks for request/response processing
- A small CLI for inspecting protocol data
"""

__version__ = "1.0.0"

from .cache import memoized  # noqa: E402
from .cache import with_cache  # noqa: E402
from .cache import with_singleton  # noqa: E402
from .client import NaviClient  # noqa: E402
from .client import get_default_client  # noqa: E402
from .config import NaviSettings  # noqa: E402
from .exceptions import NaviAPIError  # noqa: E402
from .exceptions import NaviNotFoundError  # noqa: E402
from .exceptions import NaviTransportError  # noqa: E402
from .middleware import Middleware  # noqa: E402

__all__ = [
    "NaviClient",
    "NaviSettings",
    "NaviAPIError",
    "NaviNotFoundError",
    "NaviTransportError",
    "Middleware",
    "get_default_client",
    "memoized",
    "with_cache",
    "with_singleton",
    "__version__",
]
