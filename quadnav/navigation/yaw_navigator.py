"""
Yaw Navigator

Rotates to an absolute heading, or by a relative amount, with the yaw stick.
Headings are circular, so the error is always taken along the short arc:
from 170 to -170 is a 20 degree clockwise turn, not 340 the other way.
"""

from typing import Optional
import logging

from .axis_navigator import AxisNavigator
from .nav_state import CompletionSignal, NavigationRangeError, AlreadyNavigatingError
from ..flight.sticks import StickAxis
from ..utils.angles import heading_error, wrap_heading
from ..config import get_config

logger = logging.getLogger(__name__)


class YawNavigator(AxisNavigator):
    """Rotational navigation"""

    axis_name = 'yaw'
    stick_axis = StickAxis.YAW

    def __init__(self, telemetry, sticks, link,
                 band_deg: Optional[int] = None,
                 **kwargs):
        super().__init__(telemetry, sticks, link, **kwargs)

        config = get_config().autopilot
        self.band = config.yaw_band_deg if band_deg is None else band_deg

    def start(self, target_deg: int) -> CompletionSignal:
        """
        Start rotating to an absolute heading

        Args:
            target_deg: Target heading in [-180, 180]

        Returns:
            CompletionSignal sent when the navigation stops

        Raises:
            NavigationRangeError: heading outside [-180, 180]
            AlreadyNavigatingError: a yaw navigation is already running
        """
        target_deg = int(target_deg)
        if target_deg < -180 or target_deg > 180:
            raise NavigationRangeError(
                f"Target yaw must be between -180 and +180, got {target_deg}"
            )

        signal = self._launch(target_deg)
        logger.info(f"Yaw navigation started: target {target_deg} deg")
        return signal

    def turn_by(self, delta_deg: int) -> CompletionSignal:
        """
        Start rotating by a relative amount

        Negative values turn anticlockwise. The absolute target is taken
        from the current heading, then `start()` claims the axis.

        Args:
            delta_deg: Turn amount in [-180, 180]

        Raises:
            NavigationRangeError: amount outside [-180, 180]
            AlreadyNavigatingError: a yaw navigation is already running
        """
        delta_deg = int(delta_deg)
        if delta_deg < -180 or delta_deg > 180:
            raise NavigationRangeError(
                f"Turn amount must be between -180 and +180, got {delta_deg}"
            )

        if self.is_active:
            raise AlreadyNavigatingError("Already navigating yaw")

        current = self.telemetry.heading_deg
        target = wrap_heading(current + delta_deg)
        logger.debug(f"Turn by {delta_deg} deg from {current} -> target {target}")

        return self.start(target)

    def error_to(self, target: int) -> int:
        return heading_error(target, self.telemetry.heading_deg)
