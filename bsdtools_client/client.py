"""
BSD Tools API client.

This module provides the client for the BSD Tools `/page/api/` endpoints:
every request is signed with the api_ver=2 HMAC scheme and deferred (202)
results are polled until they are ready.
"""

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlsplit

import requests

from .auth import BSDToolsAuth
from .constants import (
    API_ROOT,
    DEFAULT_CONFIG,
    DEFERRED_ID_PARAM,
    DEFERRED_RESULTS_PATH
)
from .exceptions import InvalidConfigurationError
from .resolver import DeferredResultResolver, RetryPolicy, validate_non_negative_int
from .signer import Credentials, RequestSigner, check_reserved
from .transport import RequestsTransport, Transport

QueryInput = Union[Mapping[str, Any], Sequence[Tuple[str, Any]], None]


class BSDToolsClient:
    """
    Client for making signed requests to the BSD Tools API.

    Deferred results are resolved transparently: get() and post() return
    the final response, not the 202 placeholder.
    """

    def __init__(self, api_id: str, secret: str, base_url: str,
                 transport: Optional[Transport] = None, clock=None,
                 logger: Optional[logging.Logger] = None, **config):
        """
        Initialize client.

        Args:
            api_id: API identity
            secret: Shared API secret
            base_url: Absolute URL of the BSD Tools site
            transport: Object with a send() method; defaults to a requests session
            clock: Callable returning Unix time, used for api_ts
            logger: Logger for request diagnostics
            **config: Configuration options (deferred_result_max_attempts,
                deferred_result_interval, timeout)

        Raises:
            InvalidConfigurationError: If any argument is invalid
        """
        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_credentials(api_id, secret)
        self._validate_url(base_url)
        self._validate_config()

        self.base_url = base_url + API_ROOT
        self.auth = BSDToolsAuth(RequestSigner(Credentials(api_id, secret), clock))
        self.logger = logger or logging.getLogger(__name__)

        self._transport = transport if transport is not None else RequestsTransport()
        self._request_options: Dict[str, Any] = {}

    @staticmethod
    def _validate_credentials(api_id: str, secret: str):
        if not isinstance(api_id, str) or not isinstance(secret, str):
            raise InvalidConfigurationError("api_id and api_secret must be strings")
        if not api_id or not secret:
            raise InvalidConfigurationError("api_id and api_secret must both be provided")

    @staticmethod
    def _validate_url(url: str):
        """Require an absolute URL with scheme and host."""
        try:
            parts = urlsplit(url) if isinstance(url, str) else None
        except ValueError:
            parts = None

        if not parts or not parts.scheme or not parts.netloc or any(c.isspace() for c in url):
            raise InvalidConfigurationError(f"{url!r} is not a valid URL")

    def _validate_config(self):
        """Validate client configuration."""
        validate_non_negative_int('deferred_result_max_attempts', self.config['deferred_result_max_attempts'])
        validate_non_negative_int('deferred_result_interval', self.config['deferred_result_interval'])

    @property
    def transport(self) -> Transport:
        """Transport used to send requests."""
        return self._transport

    @property
    def api_id(self) -> str:
        return self.auth.signer.credentials.api_id

    @property
    def deferred_result_max_attempts(self) -> int:
        return self.config['deferred_result_max_attempts']

    @property
    def deferred_result_interval(self) -> int:
        return self.config['deferred_result_interval']

    def set_deferred_result_max_attempts(self, max_attempts: int):
        """Set how many times a deferred result is polled before giving up."""
        validate_non_negative_int('deferred_result_max_attempts', max_attempts)
        self.config['deferred_result_max_attempts'] = max_attempts

    def set_deferred_result_interval(self, interval: int):
        """Set the pause between deferred result polls, in seconds."""
        validate_non_negative_int('deferred_result_interval', interval)
        self.config['deferred_result_interval'] = interval

    def set_logger(self, logger: logging.Logger):
        self.logger = logger

    def get_request_option(self, key: Optional[str] = None):
        """
        Return a default request option, or all of them when key is None.

        Options are passed to the transport on every call (timeout, headers,
        verify, ...).
        """
        options = self._options()
        if key is None:
            return options
        return options.get(key)

    def set_request_option(self, key: str, value) -> 'BSDToolsClient':
        """Set a request option for future requests."""
        if key in ('params', 'data', 'auth'):
            raise InvalidConfigurationError(f"{key} is managed by the client and cannot be set")
        if key == 'timeout':
            self.config['timeout'] = value
        else:
            self._request_options[key] = value
        return self

    def _options(self) -> Dict[str, Any]:
        """Request options for the next call; timeout lives in config."""
        return {'timeout': self.config['timeout'], **self._request_options}

    def _prepare_query(self, query_params: QueryInput):
        """Normalize query parameters to an ordered list of pairs."""
        if not query_params:
            return []
        if isinstance(query_params, Mapping):
            pairs = list(query_params.items())
        else:
            pairs = list(query_params)

        check_reserved(name for name, _ in pairs)
        return pairs

    def _send(self, method: str, api_path: str, params, data=None) -> requests.Response:
        self.logger.debug("%s %s", method, api_path)
        response = self._transport.send(
            method,
            self.base_url + api_path,
            params=params,
            data=data,
            auth=self.auth,
            **self._options()
        )
        self.logger.debug("%s %s -> %s", method, api_path, response.status_code)
        return response

    def _request(self, method: str, api_path: str, query_params: QueryInput = None,
                 data: Optional[bytes] = None, cancel_event: Optional[threading.Event] = None) -> requests.Response:
        """
        Send a signed request and resolve a deferred result.

        Raises:
            InvalidConfigurationError: If query_params uses a reserved name
            TransportError: If a request fails at the network layer
            DeferredResolutionTimeout: If the deferred result never arrives
            DeferredResolutionCancelled: If cancel_event is set while polling
        """
        params = self._prepare_query(query_params)
        response = self._send(method, api_path, params, data)

        # Snapshot the policy so setter calls don't affect this resolution
        policy = RetryPolicy(
            max_attempts=self.config['deferred_result_max_attempts'],
            interval=self.config['deferred_result_interval']
        )
        resolver = DeferredResultResolver(policy, logger=self.logger)
        return resolver.resolve(response, self._poll, cancel_event)

    def _poll(self, deferred_id: bytes) -> requests.Response:
        """Fetch a deferred result once."""
        return self._send('GET', DEFERRED_RESULTS_PATH, [(DEFERRED_ID_PARAM, deferred_id)])

    def get(self, api_path: str, query_params: QueryInput = None,
            cancel_event: Optional[threading.Event] = None) -> requests.Response:
        """Make signed GET request."""
        return self._request('GET', api_path, query_params, cancel_event=cancel_event)

    def post(self, api_path: str, query_params: QueryInput = None, data: Union[str, bytes] = '',
             cancel_event: Optional[threading.Event] = None) -> requests.Response:
        """Make signed POST request with a raw body."""
        if isinstance(data, str):
            data = data.encode('utf-8')
        return self._request('POST', api_path, query_params, data, cancel_event=cancel_event)

    def close(self):
        """Close the transport if it holds resources."""
        close = getattr(self._transport, 'close', None)
        if close is not None:
            close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
