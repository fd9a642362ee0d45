"""
Performance monitoring utilities.

Times dataset loading, exports and uploads and logs the slow ones.
"""

import inspect
import functools
import logging
import time
from typing import Callable, Any, Optional

import config

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Logs operation durations in seconds.

    Attributes:
        threshold: Durations above this are logged as warnings
    """

    def __init__(self, threshold: Optional[float] = None):
        self.threshold = config.SLOW_OPERATION_SECONDS if threshold is None else threshold

    def record(self, operation: str, duration: float):
        if duration > self.threshold:
            logger.warning(
                f"Operation '{operation}' took {duration:.2f}s "
                f"(threshold: {self.threshold}s)"
            )
        else:
            logger.debug(f"Operation '{operation}' took {duration:.3f}s")


# Global performance monitor instance
performance_monitor = PerformanceMonitor()


def monitor_performance(operation_name: str = None):
    """
    Decorator to time a function and log slow calls.

    Works for plain functions and coroutine functions.

    Example:
        @monitor_performance("dataset_load")
        def load(path):
            ...
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or func.__name__

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs) -> Any:
                start_time = time.perf_counter()
                try:
                    return await func(*args, **kwargs)
                finally:
                    performance_monitor.record(op_name, time.perf_counter() - start_time)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                performance_monitor.record(op_name, time.perf_counter() - start_time)

        return wrapper
    return decorator
