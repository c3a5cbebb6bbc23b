"""
Calculator metrics: operation counters, request timings and engine failures
"""

import time
from functools import wraps
from typing import Callable, Dict, Any
from datetime import datetime, timezone
import structlog

from app.core.exceptions import InvalidTaxInputError

logger = structlog.get_logger()

OPERATION_COUNTERS = (
    "tax_computations",
    "tax_reports",
    "treaty_lookups",
    "election_updates",
)


class MetricsCollector:
    """In-process counters for the calculator endpoints"""

    def __init__(self):
        self.reset()

    def reset(self):
        self.counters = {name: 0 for name in OPERATION_COUNTERS}
        self.counters["rejected_inputs"] = 0
        self.counters["errors"] = 0
        self.timings: Dict[str, Dict[str, float]] = {}
        self.error_counts: Dict[str, int] = {}

    def increment_counter(self, name: str):
        self.counters[name] = self.counters.get(name, 0) + 1

    def record_timing(self, operation: str, duration_ms: float):
        """Fold one duration into the running stats for an operation"""
        stats = self.timings.get(operation)
        if stats is None:
            self.timings[operation] = {
                "count": 1,
                "total_ms": duration_ms,
                "min_ms": duration_ms,
                "max_ms": duration_ms
            }
            return

        stats["count"] += 1
        stats["total_ms"] += duration_ms
        stats["min_ms"] = min(stats["min_ms"], duration_ms)
        stats["max_ms"] = max(stats["max_ms"], duration_ms)

    def record_error(self, error_type: str, error_message: str):
        """Count an engine failure by exception type"""
        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1
        self.counters["errors"] += 1

        logger.warning("Error recorded",
                       error_type=error_type,
                       error_message=error_message,
                       count=self.error_counts[error_type])

    def get_metrics_summary(self) -> Dict[str, Any]:
        timing_stats = {
            operation: {
                "count": stats["count"],
                "avg_ms": stats["total_ms"] / stats["count"],
                "min_ms": stats["min_ms"],
                "max_ms": stats["max_ms"]
            }
            for operation, stats in self.timings.items()
        }

        return {
            "counters": dict(self.counters),
            "timing_stats": timing_stats,
            "error_counts": dict(self.error_counts),
            "collected_at": datetime.now(timezone.utc).isoformat()
        }


# Global metrics collector
metrics_collector = MetricsCollector()


def track_timing(operation_name: str):
    """Time successful calls of an async endpoint"""
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            result = await func(*args, **kwargs)
            metrics_collector.record_timing(operation_name, (time.perf_counter() - start_time) * 1000)
            return result
        return wrapper
    return decorator


def track_counter(metric_name: str):
    """
    Count successful calls of an async endpoint

    Rejected input is counted under rejected_inputs. Engine failures are
    recorded by the application's error handler.
    """
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                result = await func(*args, **kwargs)
            except InvalidTaxInputError:
                metrics_collector.increment_counter("rejected_inputs")
                raise
            metrics_collector.increment_counter(metric_name)
            return result
        return wrapper
    return decorator
