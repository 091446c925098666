"""Bounded retry with exponential backoff for generation calls."""

import logging
import time
from typing import Callable, Optional, TypeVar

from backend.config.settings import get_settings
from backend.models.content import RetryState
from backend.services.errors import TransientEngineFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_MARKERS = ("429", "Too Many Requests")
OVERLOAD_MARKERS = ("503", "Overloaded")


def is_transient_error(error: BaseException) -> bool:
    """Check whether an error signals rate limiting or service overload."""
    if isinstance(error, TransientEngineFailure):
        return True
    message = str(error)
    return any(marker in message for marker in RATE_LIMIT_MARKERS + OVERLOAD_MARKERS)


def invoke_with_retry(
    thunk: Callable[[], T],
    retries: Optional[int] = None,
    base_delay_ms: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``thunk``, retrying on rate-limit and overload errors.

    The delay doubles after every retry (2s, 4s, 8s with the defaults).
    Any other error, or a transient one once the retries run out, is
    re-raised exactly as the thunk raised it.

    Args:
        thunk: Zero-argument callable performing the generation call
        retries: Maximum number of retries (settings default: 3)
        base_delay_ms: Delay before the first retry (settings default: 2000)
        sleep: Wait function taking seconds

    Returns:
        Whatever ``thunk`` returns
    """
    settings = get_settings()
    state = RetryState(
        attempts_remaining=settings.retry_attempts if retries is None else retries,
        next_delay_ms=settings.retry_base_delay_ms if base_delay_ms is None else base_delay_ms,
    )

    while True:
        try:
            return thunk()
        except Exception as e:
            if not is_transient_error(e) or state.exhausted:
                raise

            delay_ms = state.consume()
            logger.warning(
                f"Transient generation error ({e}); retrying in {delay_ms}ms "
                f"({state.attempts_remaining} retries left)"
            )
            sleep(delay_ms / 1000)
