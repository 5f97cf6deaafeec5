"""
Pytest configuration and fixtures
"""

import pytest
import sys
from pathlib import Path

# Add project root and the tests directory (for fakes.py) to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture
def telemetry():
    """Fixture for a telemetry snapshot at height 0, heading 0"""
    from quadnav.flight.telemetry import TelemetrySnapshot
    return TelemetrySnapshot(height_dm=0, heading_deg=0)


@pytest.fixture
def sticks():
    """Fixture for centred sticks"""
    from quadnav.flight.sticks import ControlOutput
    return ControlOutput()


@pytest.fixture
def recording_link(sticks):
    """Fixture for a link that records every flush"""
    from fakes import RecordingLink
    return RecordingLink(sticks)


@pytest.fixture
def autopilot(telemetry, sticks, recording_link):
    """Fixture for an autopilot ticking every millisecond"""
    from quadnav.navigation import Autopilot

    pilot = Autopilot(telemetry, sticks, recording_link, period_s=0.001)
    yield pilot
    pilot.cancel_all()
    pilot.join(timeout=1.0)
