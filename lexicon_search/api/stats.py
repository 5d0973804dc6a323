"""Query counters kept by the HTTP layer."""

import threading
from typing import Dict


class QueryMetrics:
    """Counters for searches served by the HTTP layer."""
    
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stats = {
            "total_queries": 0,
            "empty_results": 0,
            "failed_queries": 0,
            "total_execution_time": 0.0,
        }
    
    def record(self, execution_time_ms: float, result_count: int) -> None:
        with self._lock:
            self._stats["total_queries"] += 1
            self._stats["total_execution_time"] += execution_time_ms
            if result_count == 0:
                self._stats["empty_results"] += 1
    
    def record_failure(self) -> None:
        with self._lock:
            self._stats["total_queries"] += 1
            self._stats["failed_queries"] += 1
    
    def get_stats(self) -> Dict[str, float]:
        """Get a snapshot of the counters with the derived average."""
        with self._lock:
            stats = dict(self._stats)
        
        succeeded = stats["total_queries"] - stats["failed_queries"]
        stats["average_execution_time_ms"] = (
            stats["total_execution_time"] / succeeded if succeeded > 0 else 0.0
        )
        return stats
