"""
Transport layer for NAVI SDK.

A unified async interface over different HTTP clients:

- httpx: Modern async HTTP client (default, recommended)
- aiohttp: Async HTTP client (optional extra)
- requests: Sync HTTP client run in an executor (optional extra)
"""

from .base import BaseTransport
from .base import UnifiedResponse
from .httpx import HttpxTransport


def get_transport(name: str, timeout: float = 30.0) -> BaseTransport:
    """
    Get transport instance by name.

    Raises:
        ValueError: If the name is not a known transport.
        ImportError: If the transport's optional dependency is not installed.
    """
    name = name.lower()
    if name == "httpx":
        return HttpxTransport(timeout)
    elif name == "aiohttp":
        try:
            from .aiohttp import AiohttpTransport
        except ImportError as err:
            raise ImportError(
                "aiohttp transport requires aiohttp package. Install with: pip install 'navi-sdk[aiohttp]'"
            ) from err
        return AiohttpTransport(timeout)
    elif name == "requests":
        try:
            from .requests import RequestsTransport
        except ImportError as err:
            raise ImportError(
                "requests transport requires requests package. Install with: pip install 'navi-sdk[requests]'"
            ) from err
        return RequestsTransport(timeout)
    else:
        raise ValueError(
            f"Unknown transport: {name}. Available: httpx, aiohttp, requests"
        )


__all__ = ["BaseTransport", "UnifiedResponse", "HttpxTransport", "get_transport"]
