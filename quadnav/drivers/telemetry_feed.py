"""
Telemetry feed

Polls height and heading from the flight controller and keeps the
TelemetrySnapshot current.
"""

import time
import threading
from typing import Optional
import logging

from .msp import MSPError
from ..config import get_config

logger = logging.getLogger(__name__)


class MSPTelemetryFeed:
    """Background MSP poller writing into a TelemetrySnapshot"""

    def __init__(self, msp, telemetry, poll_hz: Optional[float] = None):
        """
        Args:
            msp: MSPClient (or anything with get_altitude/get_attitude)
            telemetry: TelemetrySnapshot to update
            poll_hz: Polling rate (default from config)
        """
        self.msp = msp
        self.telemetry = telemetry
        self.poll_hz = get_config().telemetry.poll_hz if poll_hz is None else poll_hz

        self.error_count = 0
        self._running = False
        self._thread: Optional[threading.Thread] = None

    def poll_once(self) -> bool:
        """
        Read altitude and attitude once

        Returns:
            True if the snapshot was updated
        """
        try:
            altitude = self.msp.get_altitude()
            attitude = self.msp.get_attitude()
        except MSPError as e:
            self.error_count += 1
            logger.warning(f"MSP read error: {e}")
            return False

        # Yaw arrives as 0..360, the snapshot stores [-180, 180)
        self.telemetry.update(
            height_dm=altitude.altitude_dm,
            heading_deg=int(round(attitude.yaw))
        )
        return True

    def start(self):
        if self._running:
            return

        self._running = True
        self._thread = threading.Thread(target=self._poll_loop, name="telemetry-feed", daemon=True)
        self._thread.start()
        logger.info(f"Telemetry feed started at {self.poll_hz:.0f} Hz")

    def stop(self):
        self._running = False
        if self._thread:
            self._thread.join(timeout=1.0)
            self._thread = None
        logger.info("Telemetry feed stopped")

    def _poll_loop(self):
        dt = 1.0 / self.poll_hz

        while self._running:
            loop_start = time.time()

            try:
                self.poll_once()
            except Exception as e:
                self.error_count += 1
                logger.error(f"Telemetry feed error: {e}")

            # Maintain poll rate
            sleep_time = dt - (time.time() - loop_start)
            if sleep_time > 0:
                time.sleep(sleep_time)
