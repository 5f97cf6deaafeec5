"""
Telemetry Snapshot

Latest height and heading of the vehicle, written by a telemetry feed and
read concurrently by the navigators.
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from ..utils.angles import normalize_heading


class ReadWriteLock:
    """
    Readers-writer lock

    Any number of readers may hold the lock together; a writer holds it
    alone. Waiting writers block new readers so a busy reader set cannot
    starve the feed.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


@dataclass
class TelemetryReading:
    """One consistent read of the snapshot"""
    height_dm: int = 0       # decimetres, positive = up
    heading_deg: int = 0     # degrees, [-180, 180)
    timestamp: float = 0.0   # time.time() of the last update, 0 if never updated


class TelemetrySnapshot:
    """
    Thread-safe live flight data

    One external writer (the telemetry feed) refreshes it asynchronously;
    navigators and status queries only read.
    """

    def __init__(self, height_dm: int = 0, heading_deg: int = 0):
        self._lock = ReadWriteLock()
        self._height_dm = int(height_dm)
        self._heading_deg = normalize_heading(heading_deg)
        self._timestamp = 0.0

    def update(self, height_dm: Optional[int] = None,
               heading_deg: Optional[int] = None):
        """
        Store new readings

        Args:
            height_dm: Height in decimetres (None keeps the current value)
            heading_deg: Heading in degrees, any range (None keeps the current value)
        """
        with self._lock.write_locked():
            if height_dm is not None:
                self._height_dm = int(height_dm)
            if heading_deg is not None:
                self._heading_deg = normalize_heading(heading_deg)
            self._timestamp = time.time()

    @property
    def height_dm(self) -> int:
        with self._lock.read_locked():
            return self._height_dm

    @property
    def heading_deg(self) -> int:
        with self._lock.read_locked():
            return self._heading_deg

    @property
    def age(self) -> float:
        """Seconds since the last update (infinite if never updated)"""
        with self._lock.read_locked():
            timestamp = self._timestamp
        if timestamp == 0.0:
            return float('inf')
        return time.time() - timestamp

    def read(self) -> TelemetryReading:
        with self._lock.read_locked():
            return TelemetryReading(
                height_dm=self._height_dm,
                heading_deg=self._heading_deg,
                timestamp=self._timestamp
            )

    def is_stale(self, max_age_s: float) -> bool:
        return self.age > max_age_s
