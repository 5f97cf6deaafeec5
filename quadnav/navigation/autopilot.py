"""
Autopilot

Caller-facing entry points for height and yaw navigation.
"""

from typing import Optional
import logging

from .height_navigator import HeightNavigator
from .yaw_navigator import YawNavigator
from .nav_state import CompletionSignal

logger = logging.getLogger(__name__)


class Autopilot:
    """
    Height and yaw navigation on one vehicle

    The two navigators share the telemetry snapshot and the stick output but
    nothing else, so a height change and a turn can run at the same time.

    Example:
        autopilot = Autopilot(telemetry, sticks, link)
        climb = autopilot.start_height_nav(15)
        turn = autopilot.turn_by_deg(90)
        climb.wait()
        turn.wait()
    """

    def __init__(self, telemetry, sticks, link, **navigator_kwargs):
        """
        Initialize autopilot

        Args:
            telemetry: TelemetrySnapshot kept current by a telemetry feed
            sticks: ControlOutput shared with manual stick input
            link: Stick transmitter with a flush() method
            navigator_kwargs: Overrides passed to both navigators (e.g. period_s)
        """
        self.telemetry = telemetry
        self.sticks = sticks
        self.link = link

        self.height = HeightNavigator(telemetry, sticks, link, **navigator_kwargs)
        self.yaw = YawNavigator(telemetry, sticks, link, **navigator_kwargs)

    # ==================== Height ====================

    def start_height_nav(self, target_dm: int) -> CompletionSignal:
        """Fly to a height in decimetres; see HeightNavigator.start()"""
        return self.height.start(target_dm)

    def cancel_height_nav(self):
        """Stop any height navigation; the drone stops moving vertically"""
        self.height.cancel()

    # ==================== Yaw ====================

    def start_yaw_nav(self, target_deg: int) -> CompletionSignal:
        """Turn to an absolute heading; see YawNavigator.start()"""
        return self.yaw.start(target_deg)

    def turn_by_deg(self, delta_deg: int) -> CompletionSignal:
        """Turn by a relative amount; see YawNavigator.turn_by()"""
        return self.yaw.turn_by(delta_deg)

    def cancel_yaw_nav(self):
        """Stop any yaw navigation; the drone stops rotating"""
        self.yaw.cancel()

    # ==================== Both ====================

    @property
    def is_navigating(self) -> bool:
        return self.height.is_active or self.yaw.is_active

    def cancel_all(self):
        self.cancel_height_nav()
        self.cancel_yaw_nav()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for both navigation threads to exit"""
        height_done = self.height.join(timeout)
        yaw_done = self.yaw.join(timeout)
        return height_done and yaw_done

    def get_status(self) -> dict:
        """Get telemetry, sticks and navigation status"""
        reading = self.telemetry.read()
        return {
            'telemetry': {
                'height_dm': reading.height_dm,
                'heading_deg': reading.heading_deg,
                'age_s': self.telemetry.age,
            },
            'sticks': self.sticks.as_dict(),
            'navigation': {
                'height': self.height.get_status(),
                'yaw': self.yaw.get_status(),
            }
        }
