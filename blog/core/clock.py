import threading
from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    # Naive UTC: SQLite drops tzinfo on the way back out
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_stored(value: datetime) -> datetime:
    """Convert a datetime to the naive UTC form timestamps are stored in. Naive values are taken as UTC already."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class Clock:
    """
    Timestamp source for created_at/updated_at.

    Never hands out the same instant twice, so an update is always stamped
    strictly later than the write before it even on coarse system clocks.
    """

    def __init__(self, now=utcnow):
        self._now = now
        self._last = None
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            current = self._now()
            if self._last is not None and current <= self._last:
                current = self._last + timedelta(microseconds=1)
            self._last = current
            return current


clock = Clock()
