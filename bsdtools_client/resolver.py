"""
Deferred result resolution.

The API answers long-running calls with HTTP 202 and a deferral token as the
whole body. The result is then fetched from get_deferred_results until the
server stops answering 202.
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .constants import DEFAULT_INTERVAL, DEFAULT_MAX_ATTEMPTS, HTTP_ACCEPTED
from .exceptions import (
    DeferredResolutionCancelled,
    DeferredResolutionTimeout,
    InvalidConfigurationError
)


class ResolutionState(Enum):
    IMMEDIATE = "immediate"
    PENDING = "pending"
    RESOLVED = "resolved"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class RetryPolicy:
    """Poll budget for one deferred result."""
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    interval: int = DEFAULT_INTERVAL

    def __post_init__(self):
        validate_non_negative_int('deferred_result_max_attempts', self.max_attempts)
        validate_non_negative_int('deferred_result_interval', self.interval)


def validate_non_negative_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfigurationError(f"{name} must be a non-negative integer")


class DeferredResultResolver:
    """
    Turns a possibly-deferred response into its final response.

    One resolver serves one call; `state` holds where the last resolution
    ended up.
    """

    def __init__(self, policy: RetryPolicy, sleep: Callable[[float], None] = time.sleep,
                 logger: Optional[logging.Logger] = None):
        self.policy = policy
        self.state: Optional[ResolutionState] = None
        self._sleep = sleep
        self._logger = logger or logging.getLogger(__name__)

    def resolve(self, response, poll: Callable[[bytes], object],
                cancel_event: Optional[threading.Event] = None):
        """
        Resolve a deferred response.

        Args:
            response: Immediate response to the original request
            poll: Callable sending one signed get_deferred_results request
            cancel_event: Optional event that aborts polling when set

        Returns:
            The response itself when it is not a 202, otherwise the first
            non-202 poll response (any status, 4xx/5xx included)

        Raises:
            DeferredResolutionTimeout: If every poll answered 202
            DeferredResolutionCancelled: If cancel_event was set while pending
        """
        if response.status_code != HTTP_ACCEPTED:
            self._enter(ResolutionState.IMMEDIATE)
            return response

        # Opaque token, sent back verbatim
        deferred_id = response.content
        self._enter(ResolutionState.PENDING, deferred_id=deferred_id)

        attempts = self.policy.max_attempts
        while attempts > 0:
            self._wait(deferred_id, cancel_event)

            deferred_response = poll(deferred_id)
            if deferred_response.status_code != HTTP_ACCEPTED:
                self._enter(ResolutionState.RESOLVED, deferred_id=deferred_id,
                            status=deferred_response.status_code)
                return deferred_response

            attempts -= 1
            self._enter(ResolutionState.PENDING, deferred_id=deferred_id, remaining=attempts)

        self._enter(ResolutionState.TIMED_OUT, deferred_id=deferred_id)
        raise DeferredResolutionTimeout(self.policy.max_attempts)

    def _wait(self, deferred_id: bytes, cancel_event: Optional[threading.Event]):
        """Pause between polls; Event.wait doubles as the cancellation check."""
        if cancel_event is not None:
            if cancel_event.wait(self.policy.interval):
                self._enter(ResolutionState.CANCELLED, deferred_id=deferred_id)
                raise DeferredResolutionCancelled(deferred_id)
        elif self.policy.interval > 0:
            self._sleep(self.policy.interval)

    def _enter(self, state: ResolutionState, **details):
        self.state = state
        if state is not ResolutionState.IMMEDIATE:
            self._logger.debug("Deferred result %s %s", state.value, details)
