"""
Stick Control Output

Four-axis stick state shared by the navigators, manual stick input and the
link that transmits it.
"""

import threading
from enum import Enum
from typing import Dict, Tuple

AXIS_MIN = -32768
AXIS_MAX = 32767


class StickAxis(Enum):
    """Stick axes, named after the stick they live on"""
    YAW = 'lx'          # Left stick, horizontal
    VERTICAL = 'ly'     # Left stick, vertical (climb/descend)
    ROLL = 'rx'         # Right stick, horizontal
    PITCH = 'ry'        # Right stick, vertical


def clamp_axis(value: int) -> int:
    """Clamp to the signed 16-bit axis range"""
    return max(AXIS_MIN, min(AXIS_MAX, int(value)))


class ControlOutput:
    """
    Current stick deflections

    A single lock covers the whole structure. Each writer touches only its
    own axis, so navigators and manual input never disturb each other.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._axes: Dict[StickAxis, int] = {axis: 0 for axis in StickAxis}

    def set_axis(self, axis: StickAxis, value: int):
        with self._lock:
            self._axes[axis] = clamp_axis(value)

    def get_axis(self, axis: StickAxis) -> int:
        with self._lock:
            return self._axes[axis]

    def update(self, **axes: int):
        """
        Set several axes at once by stick name

        Example:
            sticks.update(rx=1000, ry=-2000)
        """
        values = {StickAxis(name): clamp_axis(value) for name, value in axes.items()}
        with self._lock:
            self._axes.update(values)

    def center(self):
        """Return every stick to neutral"""
        with self._lock:
            for axis in self._axes:
                self._axes[axis] = 0

    def snapshot(self) -> Tuple[int, int, int, int]:
        """Consistent (lx, ly, rx, ry) copy"""
        with self._lock:
            return (
                self._axes[StickAxis.YAW],
                self._axes[StickAxis.VERTICAL],
                self._axes[StickAxis.ROLL],
                self._axes[StickAxis.PITCH]
            )

    def as_dict(self) -> Dict[str, int]:
        lx, ly, rx, ry = self.snapshot()
        return {'lx': lx, 'ly': ly, 'rx': rx, 'ry': ry}
