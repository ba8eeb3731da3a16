"""
Request signing for the BSD Tools API.

Every request carries its caller's identity, a Unix timestamp and the
protocol version in the query string, followed by an HMAC-SHA1 over those
values, the request path and the full query. The server recomputes the MAC
with the shared secret and rejects stale timestamps.
"""

import hashlib
import hmac
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.parse import parse_qsl, unquote_plus, urlencode, urlsplit, urlunsplit

from .constants import (
    API_VERSION,
    PARAM_API_ID,
    PARAM_API_MAC,
    PARAM_API_TS,
    PARAM_API_VER,
    RESERVED_PARAMS
)
from .exceptions import InvalidConfigurationError

QueryParams = List[Tuple[str, str]]


@dataclass(frozen=True)
class Credentials:
    """API identity and shared secret. The secret is kept out of repr()."""
    api_id: str
    secret: str = field(repr=False)


class RequestSigner:
    """
    Signs request URLs with the api_ver=2 HMAC scheme.

    Signing string (newline separated, no trailing newline):
        api_id
        api_ts
        path
        url-decoded query (key=value pairs joined by '&', in transmit order)
    """

    def __init__(self, credentials: Credentials, clock: Optional[Callable[[], float]] = None):
        """
        Initialize signer.

        Args:
            credentials: API identity and shared secret
            clock: Callable returning the current Unix time in seconds
        """
        self.credentials = credentials
        self._clock = clock or time.time

    def timestamp(self) -> str:
        """Current Unix time in whole seconds, as sent in api_ts."""
        return str(int(self._clock()))

    @staticmethod
    def normalize_path(path: str) -> str:
        """Collapse a doubled leading slash left over from URL joining."""
        if path.startswith('//'):
            return path[1:]
        return path

    @staticmethod
    def build_signing_string(api_id: str, api_ts: str, path: str, query: str) -> str:
        """
        Build the string the MAC is computed over.

        Args:
            query: Encoded query string as transmitted, minus api_mac

        Bytes that are not valid UTF-8 survive decoding as surrogate escapes,
        so the MAC covers exactly the bytes on the wire.
        """
        return "\n".join([
            api_id,
            api_ts,
            path,
            unquote_plus(query, errors='surrogateescape')
        ])

    def generate_mac(self, signing_string: str) -> str:
        """
        Generate HMAC-SHA1 of the signing string.

        Returns:
            Lower-case hex digest
        """
        mac = hmac.new(
            self.credentials.secret.encode('utf-8'),
            signing_string.encode('utf-8', 'surrogateescape'),
            hashlib.sha1
        )
        return mac.hexdigest()

    def sign_query(self, path: str, query: str) -> str:
        """
        Append identity, timestamp, version and MAC to an encoded query string.

        The caller's part of the query is kept byte for byte.

        Args:
            path: Request path as it will be sent
            query: Encoded caller query string (may be empty)

        Returns:
            Encoded query: caller parameters, api_id, api_ts, api_ver, api_mac

        Raises:
            InvalidConfigurationError: If a caller parameter uses a reserved name
        """
        check_reserved(name for name, _ in parse_qsl(query, keep_blank_values=True))

        api_ts = self.timestamp()
        signed = join_query(query, urlencode([
            (PARAM_API_ID, self.credentials.api_id),
            (PARAM_API_TS, api_ts),
            (PARAM_API_VER, str(API_VERSION)),
        ]))

        signing_string = self.build_signing_string(
            self.credentials.api_id,
            api_ts,
            self.normalize_path(path),
            signed
        )
        return join_query(signed, urlencode([(PARAM_API_MAC, self.generate_mac(signing_string))]))

    def sign(self, path: str, params: Sequence[Tuple[str, str]]) -> QueryParams:
        """
        Sign query parameters given as pairs.

        Returns:
            New parameter list: caller parameters, api_id, api_ts, api_ver, api_mac
        """
        return parse_qsl(self.sign_query(path, urlencode(list(params))), keep_blank_values=True)

    def sign_url(self, url: str) -> str:
        """Return url with signing fields appended to its existing query."""
        parts = urlsplit(url)
        return urlunsplit(parts._replace(query=self.sign_query(parts.path, parts.query)))


def join_query(query: str, extra: str) -> str:
    return f"{query}&{extra}" if query else extra


def check_reserved(names) -> None:
    """Reject caller parameters that collide with the signer's own."""
    clashes = sorted(set(names) & RESERVED_PARAMS)
    if clashes:
        raise InvalidConfigurationError(
            f"Reserved query parameters cannot be passed directly: {', '.join(clashes)}"
        )
