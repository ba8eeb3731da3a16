"""
Custom exceptions for the BSD Tools API client.
"""


class BSDToolsClientError(Exception):
    """Base exception for BSD Tools client errors."""
    pass


class InvalidConfigurationError(BSDToolsClientError):
    """Raised when client configuration or request parameters are invalid."""
    pass


class TransportError(BSDToolsClientError):
    """Raised when an HTTP request cannot be sent or its response received."""
    pass


class DeferredResolutionTimeout(BSDToolsClientError):
    """Raised when a deferred result is still pending after all attempts."""

    def __init__(self, max_attempts: int):
        super().__init__(
            f"Could not load deferred response after {max_attempts} attempts"
        )
        self.max_attempts = max_attempts


class DeferredResolutionCancelled(BSDToolsClientError):
    """Raised when deferred result polling is cancelled by the caller."""

    def __init__(self, deferred_id: bytes):
        super().__init__(f"Polling for deferred result {deferred_id!r} was cancelled")
        self.deferred_id = deferred_id
