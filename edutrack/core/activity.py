"""
Recent activity feed for the admin dashboard.

Entries live only in process memory: the log is created once on import,
holds the newest ``ACTIVITY_LOG_SIZE`` events and is lost on
restart.
"""
from collections import deque
from datetime import datetime
from threading import Lock
from typing import Callable, Deque, Dict, List, Optional
from zoneinfo import ZoneInfo
from .config import settings
import logging

logger = logging.getLogger(__name__)

ACTIVITY_LOG_SIZE = 10


def format_timestamp(moment: datetime) -> str:
    """Render like ``10/19/2026, 3:04:05 PM``"""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (f"{moment.month}/{moment.day}/{moment.year}, "
            f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}")


class ActivityLog:
    """Bounded, most-recent-first list of admin-relevant events"""

    def __init__(self, capacity: int = ACTIVITY_LOG_SIZE, timezone: str = "UTC",
                 clock: Optional[Callable[[], datetime]] = None):
        if not 1 <= capacity <= ACTIVITY_LOG_SIZE:
            raise ValueError(f"capacity must be between 1 and {ACTIVITY_LOG_SIZE}")
        self.capacity = capacity
        self._tz = ZoneInfo(timezone)
        self._clock = clock or (lambda: datetime.now(self._tz))
        self._entries: Deque[Dict[str, str]] = deque(maxlen=capacity)
        self._lock = Lock()

    def record(self, description: str) -> Dict[str, str]:
        entry = {
            "timestamp": format_timestamp(self._clock()),
            "description": description,
        }
        # appendleft on a bounded deque drops the oldest entry from the right
        with self._lock:
            self._entries.appendleft(entry)
        logger.info(f"Activity: {description}")
        return entry

    def entries(self) -> List[Dict[str, str]]:
        with self._lock:
            return [dict(entry) for entry in self._entries]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


activity_log = ActivityLog(
    capacity=ACTIVITY_LOG_SIZE,
    timezone=settings.activity_timezone,
)
