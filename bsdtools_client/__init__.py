"""
BSD Tools API Client Library

A Python client library that signs requests for the BSD Tools `/page/api/`
endpoints and resolves deferred (HTTP 202) results transparently.

Example usage:
    from bsdtools_client import BSDToolsClient

    client = BSDToolsClient("your-api-id", "your-secret", "https://example.bsd.net")
    response = client.get("list_forms")
"""

from .auth import BSDToolsAuth
from .client import BSDToolsClient
from .exceptions import (
    BSDToolsClientError,
    InvalidConfigurationError,
    TransportError,
    DeferredResolutionTimeout,
    DeferredResolutionCancelled
)
from .constants import (
    API_VERSION,
    AUTH_TYPE,
    DEFAULT_CONFIG,
    DEFERRED_RESULTS_PATH,
    DEFERRED_ID_PARAM
)
from .resolver import DeferredResultResolver, ResolutionState, RetryPolicy
from .signer import Credentials, RequestSigner
from .transport import RequestsTransport, Transport

__version__ = "1.0.0"
__all__ = [
    "BSDToolsClient",
    "BSDToolsAuth",
    "BSDToolsClientError",
    "InvalidConfigurationError",
    "TransportError",
    "DeferredResolutionTimeout",
    "DeferredResolutionCancelled",
    "API_VERSION",
    "AUTH_TYPE",
    "DEFAULT_CONFIG",
    "DEFERRED_RESULTS_PATH",
    "DEFERRED_ID_PARAM",
    "DeferredResultResolver",
    "ResolutionState",
    "RetryPolicy",
    "Credentials",
    "RequestSigner",
    "RequestsTransport",
    "Transport"
]
