import time
from collections.abc import Callable
from typing import Any, TypeVar

from attio.errors import RateLimitError
from attio.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

MAX_RETRY_DELAY = 30.0


def _handle_rate_limit_error(
    e: RateLimitError, attempt: int, max_retries: int, base_delay: float, func_name: str
) -> float:
    """Handle a rate limit error - calculate delay, log, or give up."""
    if attempt >= max_retries:
        logger.error("Max retries reached", function=func_name, attempts=attempt + 1)
        raise e

    # Determine delay: use server-provided retry_after or exponential backoff
    delay = e.retry_after if e.retry_after else base_delay * (2**attempt)
    delay = min(delay, MAX_RETRY_DELAY)
    delay_source = "server says" if e.retry_after else "calculated delay"

    logger.warning(
        f"Rate limited, {delay_source} wait {delay} seconds before retry {attempt + 1}/{max_retries}",
        function=func_name,
    )

    return delay


def call_with_rate_limit_retry(
    func: Callable[..., T],
    *args: Any,
    max_retries: int = 3,
    base_delay: float = 0.5,
    sleep: Callable[[float], None] | None = None,
    **kwargs: Any,
) -> T:
    """Call func, retrying with exponential backoff while it raises RateLimitError.

    max_retries counts retries, so func runs at most max_retries + 1 times.
    """
    attempt = 0
    while True:
        try:
            return func(*args, **kwargs)
        except RateLimitError as e:
            delay = _handle_rate_limit_error(e, attempt, max_retries, base_delay, func.__name__)
            (sleep or time.sleep)(delay)
            attempt += 1
