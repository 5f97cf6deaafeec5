"""
Flight controller drivers for quadnav
"""

from .msp import MSPClient, MSPError, Attitude, Altitude
from .stick_link import MSPStickLink, axis_to_rc, rc_to_axis
from .telemetry_feed import MSPTelemetryFeed

__all__ = [
    'MSPClient', 'MSPError', 'Attitude', 'Altitude',
    'MSPStickLink', 'axis_to_rc', 'rc_to_axis',
    'MSPTelemetryFeed',
]
