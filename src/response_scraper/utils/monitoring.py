import time
from collections import deque
from datetime import datetime
from typing import Any, Deque, Dict, Optional
import logging

import psutil # type: ignore

from ..constants import HEALTH_THRESHOLDS


class ParseMetrics:
    """Tracks request outcomes and page load performance for the running service."""

    def __init__(self, history_size: int = 100):
        self.logger = logging.getLogger(__name__)
        self.started_at = time.time()
        self.requests = 0
        self.succeeded = 0
        self.failed = 0
        self.errors_by_type: Dict[str, int] = {}
        self.questions_parsed = 0
        self.unresolved_answers = 0
        self.peak_memory_mb = 0.0
        self.page_load_times: Deque[float] = deque(maxlen=history_size)
        self.last_error: Optional[Dict[str, str]] = None

    def record_request(self) -> None:
        self.requests += 1

    def record_success(self, parsed: Dict[str, Optional[str]], load_time: float = 0) -> None:
        """Record a completed parse and its page load time in seconds."""
        self.succeeded += 1
        self.questions_parsed += len(parsed)
        self.unresolved_answers += sum(1 for value in parsed.values() if value is None)
        if load_time > 0:
            self.page_load_times.append(load_time)
        self._update_memory()

    def record_failure(self, error_type: str, error_message: str) -> None:
        """Record a failed request."""
        self.failed += 1
        self.errors_by_type[error_type] = self.errors_by_type.get(error_type, 0) + 1
        self.last_error = {
            'timestamp': datetime.now().isoformat(),
            'type': error_type,
            'message': error_message
        }

    def _update_memory(self) -> None:
        try:
            memory_mb = psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.debug(f"Unable to read process memory: {e}")
            return
        self.peak_memory_mb = max(self.peak_memory_mb, memory_mb)

    def get_current_stats(self) -> Dict[str, Any]:
        """Get current session statistics."""
        avg_load = sum(self.page_load_times) / len(self.page_load_times) if self.page_load_times else 0
        return {
            'uptime_seconds': round(time.time() - self.started_at, 1),
            'requests': self.requests,
            'succeeded': self.succeeded,
            'failed': self.failed,
            'errors_by_type': dict(self.errors_by_type),
            'last_error': self.last_error,
            'questions_parsed': self.questions_parsed,
            'unresolved_answers': self.unresolved_answers,
            'avg_page_load_time': round(avg_load, 3),
            'peak_memory_mb': round(self.peak_memory_mb, 1)
        }


def _grade(value: float, warning: float, critical: float) -> str:
    if value < warning:
        return 'ok'
    return 'warning' if value < critical else 'critical'


class HealthMonitor:
    """Monitors system resources available to the browser sessions."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def check_system_health(self) -> Dict[str, Any]:
        """Perform a memory and CPU health check."""
        health_status = {
            'timestamp': datetime.now().isoformat(),
            'overall_status': 'healthy',
            'checks': {}
        }

        try:
            memory = psutil.virtual_memory()
            health_status['checks']['memory'] = {
                'available_gb': round(memory.available / (1024 ** 3), 2),
                'used_percent': memory.percent,
                'status': _grade(memory.percent, HEALTH_THRESHOLDS['memory_warning'],
                                 HEALTH_THRESHOLDS['memory_critical'])
            }
        except psutil.Error as e:
            self.logger.warning(f"Memory check failed: {e}")
            health_status['checks']['memory'] = {'status': 'unknown', 'error': 'Unable to check memory'}

        try:
            # Non-blocking: compares against the previous call
            cpu_percent = psutil.cpu_percent(interval=None)
            health_status['checks']['cpu'] = {
                'usage_percent': cpu_percent,
                'status': _grade(cpu_percent, HEALTH_THRESHOLDS['cpu_warning'],
                                 HEALTH_THRESHOLDS['cpu_critical'])
            }
        except psutil.Error as e:
            self.logger.warning(f"CPU check failed: {e}")
            health_status['checks']['cpu'] = {'status': 'unknown', 'error': 'Unable to check CPU'}

        statuses = [check.get('status', 'unknown') for check in health_status['checks'].values()]
        if 'critical' in statuses:
            health_status['overall_status'] = 'critical'
        elif 'warning' in statuses:
            health_status['overall_status'] = 'warning'

        return health_status
