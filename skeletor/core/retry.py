"""Retry decorator with exponential backoff for flaky external commands."""
import functools
import time
from typing import Tuple, Type

from skeletor.core.logger import get_logger

logger = get_logger(__name__)


def retry(
    max_attempts: int = 2,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
):
    """Retry the wrapped call when it raises one of *exceptions*.

    The last failure is re-raised unchanged once ``max_attempts`` calls
    have failed; other exceptions propagate immediately.

    Example:
        clone = retry(max_attempts=3, exceptions=(subprocess.CalledProcessError,))(run_clone)
    """
    max_attempts = max(1, max_attempts)

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            current_delay = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        logger.error(f"{func.__name__} failed after {max_attempts} attempts")
                        raise
                    logger.warning(f"{func.__name__} failed (attempt {attempt}/{max_attempts}): {e}")
                    logger.info(f"Retrying in {current_delay:.1f}s...")
                    time.sleep(current_delay)
                    current_delay *= backoff

        return wrapper

    return decorator
