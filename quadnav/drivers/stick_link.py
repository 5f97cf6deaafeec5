"""
Stick link

Transmits the shared stick output to the flight controller as MSP RC
channels. Navigators call flush() every tick; an optional keepalive thread
keeps resending so the receiver never reports signal loss.
"""

import time
import threading
from typing import List, Optional
import logging

from .msp import MSPError
from ..config import get_config

logger = logging.getLogger(__name__)

RC_CENTER = 1500
RC_HALF_RANGE = 500
AXIS_FULL = 32767


def axis_to_rc(value: int) -> int:
    """Stick axis (-32768..32767) to RC pulse (1000..2000, centre 1500)"""
    pulse = RC_CENTER + round(value * RC_HALF_RANGE / AXIS_FULL)
    return max(RC_CENTER - RC_HALF_RANGE, min(RC_CENTER + RC_HALF_RANGE, pulse))


def rc_to_axis(pulse: int) -> int:
    """RC pulse back to a stick axis value"""
    value = round((pulse - RC_CENTER) * AXIS_FULL / RC_HALF_RANGE)
    return max(-AXIS_FULL - 1, min(AXIS_FULL, value))


class MSPStickLink:
    """
    Sends ControlOutput to the flight controller

    Channel order is Betaflight AETR:
    [Roll, Pitch, Throttle, Yaw, AUX1, AUX2, AUX3, AUX4]
    """

    def __init__(self, msp, sticks,
                 aux_channels: Optional[List[int]] = None,
                 keepalive_hz: Optional[float] = None):
        """
        Initialize stick link

        Args:
            msp: MSPClient (or anything with set_raw_rc)
            sticks: ControlOutput to transmit
            aux_channels: AUX1..AUX4 values (default from config)
            keepalive_hz: Resend rate of the keepalive thread (default from config)
        """
        config = get_config().link

        self.msp = msp
        self.sticks = sticks
        self.aux_channels = list(config.aux_channels if aux_channels is None else aux_channels)
        self.keepalive_hz = config.keepalive_hz if keepalive_hz is None else keepalive_hz

        # Navigator threads and the keepalive thread all flush
        self._stats_lock = threading.Lock()
        self.flush_count = 0
        self.error_count = 0
        self.last_channels: List[int] = []

        self._running = False
        self._thread: Optional[threading.Thread] = None

    def channels(self) -> List[int]:
        """Current stick output as RC channels"""
        lx, ly, rx, ry = self.sticks.snapshot()
        return [axis_to_rc(rx), axis_to_rc(ry), axis_to_rc(ly), axis_to_rc(lx)] + self.aux_channels

    def flush(self):
        """Send the current stick output; failures are logged, never raised"""
        channels = self.channels()
        try:
            self.msp.set_raw_rc(channels)
        except MSPError as e:
            with self._stats_lock:
                self.error_count += 1
            logger.warning(f"Failed to send RC: {e}")
            return

        with self._stats_lock:
            self.flush_count += 1
            self.last_channels = channels

    def start(self):
        """Start the keepalive thread"""
        if self._running or self.keepalive_hz <= 0:
            return

        self._running = True
        self._thread = threading.Thread(target=self._keepalive_loop, name="stick-keepalive", daemon=True)
        self._thread.start()
        logger.info(f"Stick keepalive started at {self.keepalive_hz:.0f} Hz")

    def stop(self):
        """Stop the keepalive thread"""
        self._running = False
        if self._thread:
            self._thread.join(timeout=1.0)
            self._thread = None

    def _keepalive_loop(self):
        period = 1.0 / self.keepalive_hz
        while self._running:
            try:
                self.flush()
            except Exception as e:
                logger.error(f"Stick keepalive error: {e}")
            time.sleep(period)
