"""
Height and yaw navigation for quadnav
"""

from .nav_state import (
    NavigationError,
    NavigationRangeError,
    AlreadyNavigatingError,
    NavigationOutcome,
    CompletionSignal,
    NavigationState,
)
from .axis_navigator import AxisNavigator, stick_command
from .height_navigator import HeightNavigator
from .yaw_navigator import YawNavigator
from .autopilot import Autopilot

__all__ = [
    'NavigationError',
    'NavigationRangeError',
    'AlreadyNavigatingError',
    'NavigationOutcome',
    'CompletionSignal',
    'NavigationState',
    'AxisNavigator',
    'stick_command',
    'HeightNavigator',
    'YawNavigator',
    'Autopilot',
]
