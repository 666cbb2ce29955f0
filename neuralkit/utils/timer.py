# neuralkit/utils/timer.py
"""Performance timing utilities for neuralkit package.

Provides a decorator and a context manager that time analyses, a
thread-safe tracker aggregating the timings.
"""

import time
import functools
from typing import Callable, TypeVar, Any, Optional, Dict
from contextlib import contextmanager
from collections import defaultdict
import threading

from .logger import get_logger
from .exceptions import PerformanceError

logger = get_logger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def _empty_stats() -> Dict[str, Any]:
    return {
        'total_time': 0.0,
        'call_count': 0,
        'min_time': float('inf'),
        'max_time': 0.0,
        'avg_time': 0.0
    }


class PerformanceTracker:
    """Thread-safe aggregation of execution times per operation name."""

    def __init__(self) -> None:
        self._stats: Dict[str, Dict[str, Any]] = defaultdict(_empty_stats)
        self._lock = threading.Lock()

    def record_execution(self, name: str, duration: float) -> None:
        """Record an execution time for a named operation.

        Args:
            name: Operation name
            duration: Execution duration in seconds
        """
        with self._lock:
            stats = self._stats[name]
            stats['total_time'] += duration
            stats['call_count'] += 1
            stats['min_time'] = min(stats['min_time'], duration)
            stats['max_time'] = max(stats['max_time'], duration)
            stats['avg_time'] = stats['total_time'] / stats['call_count']

    def get_stats(self, name: Optional[str] = None) -> Dict[str, Any]:
        """Get statistics for one operation, or for all of them."""
        with self._lock:
            if name:
                return dict(self._stats[name]) if name in self._stats else {}
            return {k: dict(v) for k, v in self._stats.items()}

    def reset_stats(self, name: Optional[str] = None) -> None:
        """Reset statistics for one operation, or for all of them."""
        with self._lock:
            if name:
                self._stats.pop(name, None)
            else:
                self._stats.clear()

    def get_summary(self) -> str:
        """Get a formatted summary of performance statistics."""
        stats = self.get_stats()
        if not stats:
            return "No performance data recorded"

        lines = ["Performance Summary:", "=" * 50]
        for name, data in sorted(stats.items()):
            lines.append(f"\n{name}:")
            lines.append(f"  Calls: {data['call_count']:,}")
            lines.append(f"  Total: {data['total_time']:.3f}s")
            lines.append(f"  Average: {data['avg_time']:.3f}s")
            lines.append(f"  Min: {data['min_time']:.3f}s")
            lines.append(f"  Max: {data['max_time']:.3f}s")

        return "\n".join(lines)


_performance_tracker = PerformanceTracker()


def _finish(
    name: str,
    duration: float,
    log_result: bool,
    track_performance: bool,
    timeout: Optional[float]
) -> None:
    if timeout and duration > timeout:
        raise PerformanceError(
            f"Operation '{name}' exceeded timeout of {timeout}s",
            error_code="OPERATION_TIMEOUT",
            context={'operation': name, 'duration': duration, 'timeout': timeout}
        )

    if log_result:
        logger.info(f"Operation '{name}' completed in {duration:.3f}s")

    if track_performance:
        _performance_tracker.record_execution(name, duration)


def timer(
    name: Optional[str] = None,
    log_result: bool = True,
    track_performance: bool = True,
    timeout: Optional[float] = None
) -> Callable[[F], F]:
    """Decorator to time function execution.

    Args:
        name: Optional custom name for the operation
        log_result: Whether to log the execution time
        track_performance: Whether to record in global performance tracker
        timeout: Optional timeout in seconds (raises PerformanceError if exceeded)

    Returns:
        Decorated function

    Example:
        >>> @timer(name="roc_analysis")
        ... def perform_roc_analysis(targets, outputs):
        ...     pass
    """
    def decorator(func: F) -> F:
        operation_name = name or f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if log_result:
                    duration = time.perf_counter() - start_time
                    logger.error(f"Operation '{operation_name}' failed after {duration:.3f}s: {e}")
                raise

            _finish(operation_name, time.perf_counter() - start_time,
                    log_result, track_performance, timeout)
            return result

        return wrapper

    return decorator


@contextmanager
def timed_operation(
    name: str,
    log_result: bool = True,
    track_performance: bool = True,
    timeout: Optional[float] = None
):
    """Context manager for timing code blocks.

    Yields:
        Dictionary with ``start_time`` and, on exit, ``duration``

    Example:
        >>> with timed_operation("report_generation") as timing:
        ...     pass
        >>> print(f"Report took {timing['duration']:.3f}s")
    """
    start_time = time.perf_counter()
    timing_info = {'duration': 0.0, 'start_time': start_time}

    try:
        yield timing_info
    except Exception as e:
        timing_info['duration'] = time.perf_counter() - start_time
        if log_result:
            logger.error(f"Operation '{name}' failed after {timing_info['duration']:.3f}s: {e}")
        raise

    timing_info['duration'] = time.perf_counter() - start_time
    _finish(name, timing_info['duration'], log_result, track_performance, timeout)


def get_performance_stats(name: Optional[str] = None) -> Dict[str, Any]:
    """Get performance statistics from the global tracker."""
    return _performance_tracker.get_stats(name)


def reset_performance_stats(name: Optional[str] = None) -> None:
    """Reset performance statistics in the global tracker."""
    _performance_tracker.reset_stats(name)


def get_performance_summary() -> str:
    """Get the formatted summary of the global tracker."""
    return _performance_tracker.get_summary()
