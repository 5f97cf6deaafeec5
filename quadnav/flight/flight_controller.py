"""
Flight Controller

Wires the autopilot to a vehicle: MSP client (real or simulated), telemetry
feed and stick link.
"""

from typing import Optional
import logging

from .telemetry import TelemetrySnapshot
from .sticks import ControlOutput
from ..drivers.msp import MSPClient, MSPError
from ..drivers.stick_link import MSPStickLink
from ..drivers.telemetry_feed import MSPTelemetryFeed
from ..navigation import Autopilot
from ..simulation import SimulatedVehicle
from ..config import get_config

logger = logging.getLogger(__name__)


class FlightController:
    """
    Owns the shared flight state and the collaborators around the autopilot

    Coordinates:
    - MSP client (serial flight controller or simulated vehicle)
    - Telemetry feed (height, heading)
    - Stick link (RC output with keepalive)
    - Autopilot (height and yaw navigation)
    """

    def __init__(self, simulation: bool = False):
        """
        Initialize flight controller

        Args:
            simulation: If True, fly a SimulatedVehicle instead of a serial FC
        """
        self.config = get_config()
        self.simulation = simulation

        self.telemetry = TelemetrySnapshot()
        self.sticks = ControlOutput()

        self.msp = None
        self.feed: Optional[MSPTelemetryFeed] = None
        self.link: Optional[MSPStickLink] = None
        self.autopilot: Optional[Autopilot] = None
        self._shut_down = False

    def initialize(self) -> bool:
        """
        Connect to the vehicle and build the autopilot

        Returns:
            True if initialization successful
        """
        logger.info("Initializing flight controller...")

        if self.simulation:
            logger.info("Running in simulation mode")
            self.msp = SimulatedVehicle()
        else:
            serial_config = self.config.serial
            try:
                self.msp = MSPClient.open(
                    serial_config.port,
                    baudrate=serial_config.baudrate,
                    timeout=serial_config.timeout
                )
            except MSPError as e:
                logger.error(f"Failed to open flight controller port: {e}")
                return False

        if not self.msp.connect():
            logger.error("MSP connection failed")
            return False

        self.feed = MSPTelemetryFeed(self.msp, self.telemetry)
        self.link = MSPStickLink(self.msp, self.sticks)

        # Seed the snapshot before anyone navigates on it
        if not self.feed.poll_once():
            logger.warning("Initial telemetry read failed")

        self.autopilot = Autopilot(self.telemetry, self.sticks, self.link)

        logger.info("Flight controller initialized successfully")
        return True

    def start(self):
        """Start telemetry polling and stick keepalive"""
        self.feed.start()
        self.link.start()

    def is_telemetry_stale(self) -> bool:
        return self.telemetry.is_stale(self.config.telemetry.stale_after_ms / 1000.0)

    def get_telemetry(self) -> dict:
        status = self.autopilot.get_status() if self.autopilot else {}
        status['simulation'] = self.simulation
        status['telemetry_stale'] = self.is_telemetry_stale()
        if self.link:
            status['link'] = {
                'flush_count': self.link.flush_count,
                'error_count': self.link.error_count,
            }
        return status

    def shutdown(self):
        """
        Stop navigation, centre the sticks and close the vehicle link

        Safe to call more than once: the signal handler and the exit path of
        main() both call it.
        """
        if self._shut_down:
            return
        self._shut_down = True

        logger.info("Shutting down flight controller...")

        if self.autopilot:
            self.autopilot.cancel_all()
            self.autopilot.join(timeout=1.0)

        if self.feed:
            self.feed.stop()

        if self.link:
            self.link.stop()
            self.sticks.center()
            self.link.flush()

        if self.msp:
            self.msp.close()
