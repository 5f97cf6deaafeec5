"""
Heading utilities

Integer-degree helpers for a circular heading that is discontinuous at +/-180.
"""


def to_compass(deg: int) -> int:
    """
    Map a signed heading to [0, 360)

    -90 becomes 270, 0 stays 0, 180 stays 180.
    """
    return int(deg) % 360


def normalize_heading(deg: int) -> int:
    """Map any heading to the telemetry range [-180, 180)"""
    return (int(deg) + 180) % 360 - 180


def wrap_heading(deg: int) -> int:
    """
    Map any heading to the target range (-180, 180]

    Used for relative turns: 170 + 30 = 200 wraps to -160, 360 wraps to 0.
    """
    deg = int(deg) % 360
    if deg > 180:
        deg -= 360
    return deg


def heading_error(target: int, current: int) -> int:
    """
    Signed shortest-path error from current to target heading

    Both headings are taken onto the compass circle before subtracting, then
    a difference of more than half a turn is folded onto the short arc.

    Args:
        target: Target heading in degrees
        current: Current heading in degrees

    Returns:
        Error in (-180, 180]; positive means turn clockwise
    """
    delta = to_compass(target) - to_compass(current)
    if delta > 180:
        delta -= 360
    elif delta <= -180:
        delta += 360
    return delta
