"""
HTTP transport for the BSD Tools client.

The client only needs one operation from its transport, `send`. Anything
with a matching method can be injected, which is how tests replace the
network.
"""

from typing import Any, Optional, Protocol, Sequence, Tuple, Union

import requests
from requests.auth import AuthBase

from .exceptions import TransportError


class Transport(Protocol):
    """Anything that can send one HTTP request."""

    def send(self, method: str, url: str, params: Optional[Sequence[Tuple[str, Any]]] = None,
             data: Union[bytes, str, None] = None, auth: Optional[AuthBase] = None,
             **options) -> requests.Response:
        ...


class RequestsTransport:
    """
    Transport backed by a requests.Session.

    The auth hook runs during request preparation, so signing sees the final
    query string.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()

    def send(self, method: str, url: str, params=None, data=None, auth=None, **options) -> requests.Response:
        """
        Send an HTTP request.

        Args:
            method: HTTP method
            url: Absolute request URL
            params: Query parameters as (name, value) pairs
            data: Raw request body
            auth: requests auth hook applied before sending
            **options: Additional requests arguments (timeout, headers, ...)

        Returns:
            requests.Response object

        Raises:
            TransportError: If the request fails at the network layer
        """
        try:
            return self.session.request(method, url, params=params, data=data, auth=auth, **options)
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}") from e

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()
