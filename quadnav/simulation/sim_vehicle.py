"""
Simulated Vehicle

Stands in for the MSP client when no flight controller is attached.
Height and heading follow the last RC sticks received, so the stick link
and telemetry feed run unchanged against it.
"""

import time
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional
import logging

from ..drivers.msp import Attitude, Altitude
from ..drivers.stick_link import rc_to_axis, AXIS_FULL
from ..config import get_config

logger = logging.getLogger(__name__)


@dataclass
class SimulatedState:
    """Vehicle state integrated from the sticks"""
    height_dm: float = 0.0
    heading_deg: float = 0.0    # 0..360
    climb_dms: float = 0.0      # dm/s, positive = up
    yaw_rate_dps: float = 0.0   # deg/s, positive = clockwise


class SimulatedVehicle:
    """
    Simulated MSP flight controller

    Provides the subset of the MSPClient interface the autopilot uses.
    State is integrated lazily on every call from the wall-clock time since
    the previous one.
    """

    def __init__(self,
                 climb_rate_dms: Optional[float] = None,
                 yaw_rate_dps: Optional[float] = None,
                 initial_height_dm: Optional[float] = None,
                 initial_heading_deg: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            climb_rate_dms: Vertical speed at full stick (dm/s)
            yaw_rate_dps: Rotation speed at full stick (deg/s)
            initial_height_dm: Starting height
            initial_heading_deg: Starting heading, any range
            clock: Monotonic time source in seconds
        """
        config = get_config().simulation

        self.climb_rate_dms = config.climb_rate_dms if climb_rate_dms is None else climb_rate_dms
        self.yaw_rate_dps = config.yaw_rate_dps if yaw_rate_dps is None else yaw_rate_dps

        self.state = SimulatedState(
            height_dm=float(config.initial_height_dm if initial_height_dm is None else initial_height_dm),
            heading_deg=float(config.initial_heading_deg if initial_heading_deg is None else initial_heading_deg) % 360
        )
        self._state_lock = threading.Lock()
        self._clock = clock
        self._last_time = clock()

        # [Roll, Pitch, Throttle, Yaw, AUX1..AUX4]
        self._rc_channels = [1500, 1500, 1500, 1500, 1000, 1500, 1500, 1500]
        self.connected = False

    def connect(self) -> bool:
        self.connected = True
        logger.info("Simulated vehicle connected")
        return True

    @property
    def is_connected(self) -> bool:
        return self.connected

    def close(self):
        self.connected = False

    def _advance(self):
        """Integrate state up to now (state lock held)"""
        now = self._clock()
        dt = now - self._last_time
        self._last_time = now

        self.state.height_dm += self.state.climb_dms * dt
        self.state.heading_deg = (self.state.heading_deg + self.state.yaw_rate_dps * dt) % 360

    # === MSP-compatible interface ===

    def get_altitude(self) -> Altitude:
        with self._state_lock:
            self._advance()
            return Altitude(
                altitude_cm=int(round(self.state.height_dm * 10)),
                vario_cms=int(round(self.state.climb_dms * 10))
            )

    def get_attitude(self) -> Attitude:
        with self._state_lock:
            self._advance()
            return Attitude(roll=0.0, pitch=0.0, yaw=self.state.heading_deg)

    def get_rc_channels(self) -> List[int]:
        with self._state_lock:
            return self._rc_channels.copy()

    def set_raw_rc(self, channels: List[int]):
        """Apply new sticks; rates change from this instant"""
        channels = list(channels[:8]) + [1500] * max(0, 8 - len(channels))

        with self._state_lock:
            self._advance()
            self._rc_channels = channels
            throttle = rc_to_axis(channels[2]) / AXIS_FULL
            yaw = rc_to_axis(channels[3]) / AXIS_FULL
            self.state.climb_dms = throttle * self.climb_rate_dms
            self.state.yaw_rate_dps = yaw * self.yaw_rate_dps
