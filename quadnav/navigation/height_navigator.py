"""
Height Navigator

Climbs or descends to a target height with the vertical stick.
"""

from typing import Optional
import logging

from .axis_navigator import AxisNavigator
from .nav_state import CompletionSignal, NavigationRangeError
from ..flight.sticks import StickAxis
from ..config import get_config

logger = logging.getLogger(__name__)


class HeightNavigator(AxisNavigator):
    """
    Vertical navigation

    Full stick while more than `band` decimetres off target, half stick
    inside the band, stop when the reported height equals the target.
    """

    axis_name = 'height'
    stick_axis = StickAxis.VERTICAL

    def __init__(self, telemetry, sticks, link,
                 limit_dm: Optional[int] = None,
                 band_dm: Optional[int] = None,
                 **kwargs):
        super().__init__(telemetry, sticks, link, **kwargs)

        config = get_config().autopilot
        self.limit_dm = config.height_limit_dm if limit_dm is None else limit_dm
        self.band = config.height_band_dm if band_dm is None else band_dm

    def start(self, target_dm: int) -> CompletionSignal:
        """
        Start vertical movement to a height in decimetres (10 means 1 m)

        Returns immediately; a background thread navigates until the target
        is reached or `cancel()` is called.

        Args:
            target_dm: Target height, within +/- limit_dm

        Returns:
            CompletionSignal sent when the navigation stops

        Raises:
            NavigationRangeError: target beyond the vertical limit
            AlreadyNavigatingError: a height navigation is already running
        """
        target_dm = int(target_dm)
        if target_dm > self.limit_dm or target_dm < -self.limit_dm:
            raise NavigationRangeError(
                f"Vertical navigation limit exceeded: {target_dm} dm (limit {self.limit_dm} dm)"
            )

        signal = self._launch(target_dm)
        logger.info(f"Height navigation started: target {target_dm} dm")
        return signal

    def error_to(self, target: int) -> int:
        # Positive when the vehicle is too low
        return target - self.telemetry.height_dm
