"""Exchange clients."""

from bingx_scanner.clients.bingx_rest import BingXRestClient

__all__ = [
    "BingXRestClient",
]
