"""
Shared flight state: live telemetry and stick output
"""

from .telemetry import TelemetrySnapshot, TelemetryReading, ReadWriteLock
from .sticks import ControlOutput, StickAxis

__all__ = ['TelemetrySnapshot', 'TelemetryReading', 'ReadWriteLock', 'ControlOutput', 'StickAxis']
