"""
MSP V1 client for the autopilot

Only the messages quadnav needs: API version for the connection check,
altitude and attitude for telemetry, raw RC for the sticks.

Request frame:  '$' 'M' '<' size command payload checksum
Response frame: '$' 'M' '>' size command payload checksum  ('!' instead of '>' on error)

The checksum is the XOR of size, command and payload bytes.
"""

import struct
import time
import threading
from enum import IntEnum
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

PREAMBLE = b'$M'
TO_FC = b'<'
FROM_FC = b'>'
FC_ERROR = b'!'

RC_CHANNELS = 8
RC_MIN = 1000
RC_MAX = 2000

# Payload layouts (little endian)
ATTITUDE_LAYOUT = struct.Struct('<hhH')    # roll, pitch (decidegrees), yaw (degrees)
ALTITUDE_LAYOUT = struct.Struct('<ih')     # estimated altitude (cm), vario (cm/s)


class MSPError(Exception):
    """Failed or malformed exchange with the flight controller"""
    pass


class MSPCommand(IntEnum):
    """Message identifiers used by quadnav"""
    API_VERSION = 1
    ATTITUDE = 108
    ALTITUDE = 109
    SET_RAW_RC = 200


@dataclass
class Attitude:
    roll: float      # degrees
    pitch: float     # degrees
    yaw: float       # degrees, compass 0..360


@dataclass
class Altitude:
    altitude_cm: int
    vario_cms: int

    @property
    def altitude_dm(self) -> int:
        """Height in the autopilot's unit (decimetres, rounded)"""
        return int(round(self.altitude_cm / 10.0))


def frame_checksum(body: bytes) -> int:
    value = 0
    for byte in body:
        value ^= byte
    return value


def encode_request(command: int, payload: bytes = b'') -> bytes:
    """Build a host -> flight controller frame"""
    if len(payload) > 255:
        raise MSPError(f"Payload too large for MSP V1: {len(payload)} bytes")
    body = bytes([len(payload), int(command)]) + payload
    return PREAMBLE + TO_FC + body + bytes([frame_checksum(body)])


class MSPClient:
    """
    Request/response MSP over a serial port

    The telemetry feed and the stick link share one client from different
    threads; a lock keeps each request paired with its response.
    """

    def __init__(self, serial_port, timeout: float = 0.1):
        """
        Args:
            serial_port: Open pyserial port (or any object with read/write)
            timeout: Seconds to wait for a complete response
        """
        self.serial = serial_port
        self.timeout = timeout
        self._lock = threading.Lock()
        self._connected = False

    @classmethod
    def open(cls, port: str, baudrate: int = 115200, timeout: float = 0.1) -> "MSPClient":
        """Open `port` with pyserial and wrap it"""
        import serial

        try:
            serial_port = serial.Serial(port=port, baudrate=baudrate, timeout=timeout)
        except serial.SerialException as e:
            raise MSPError(f"Cannot open {port}: {e}") from e
        return cls(serial_port, timeout=timeout)

    def connect(self) -> bool:
        """Check that the flight controller answers; True if it does"""
        version = self.get_api_version()
        self._connected = version is not None
        if self._connected:
            logger.info(f"Flight controller answered, MSP API {version}")
        else:
            logger.error("No answer to MSP API version request")
        return self._connected

    @property
    def is_connected(self) -> bool:
        return self._connected

    def close(self):
        self._connected = False
        if self.serial:
            self.serial.close()

    # === Exchange ===

    def request(self, command: MSPCommand, payload: bytes = b'') -> bytes:
        """
        Send one request and return the payload of its response

        Raises:
            MSPError: timeout, error frame, bad checksum, wrong command echoed,
                or a port error (pyserial's SerialException is an OSError)
        """
        with self._lock:
            try:
                self.serial.reset_input_buffer()
                self.serial.write(encode_request(command, payload))
                self.serial.flush()

                echoed, response = self._receive(time.monotonic() + self.timeout)
            except OSError as e:
                raise MSPError(f"Serial port error: {e}") from e

        if echoed != command:
            raise MSPError(f"Expected reply to {int(command)}, got {echoed}")
        return response

    def _receive(self, deadline: float) -> Tuple[int, bytes]:
        """Read one response frame (lock held)"""
        header = self._read_exact(3, deadline)
        if header[:2] != PREAMBLE:
            raise MSPError(f"Bad preamble {header!r}")
        if header[2:] == FC_ERROR:
            raise MSPError("Flight controller rejected the request")
        if header[2:] != FROM_FC:
            raise MSPError(f"Unexpected direction byte {header[2:]!r}")

        size, command = self._read_exact(2, deadline)
        payload = self._read_exact(size, deadline)
        checksum = self._read_exact(1, deadline)[0]

        expected = frame_checksum(bytes([size, command]) + payload)
        if checksum != expected:
            raise MSPError(f"Checksum {checksum} does not match {expected}")
        return command, payload

    def _read_exact(self, count: int, deadline: float) -> bytes:
        buffer = bytearray()
        while len(buffer) < count:
            if time.monotonic() > deadline:
                raise MSPError(f"Timed out after {len(buffer)}/{count} bytes")
            buffer += self.serial.read(count - len(buffer)) or b''
        return bytes(buffer)

    # === Messages ===

    def get_api_version(self) -> Optional[str]:
        """'major.minor' of the MSP API, None when there is no usable answer"""
        try:
            payload = self.request(MSPCommand.API_VERSION)
        except MSPError as e:
            logger.debug(f"API version request failed: {e}")
            return None
        if len(payload) < 3:
            return None
        return f"{payload[1]}.{payload[2]}"

    def get_attitude(self) -> Attitude:
        payload = self.request(MSPCommand.ATTITUDE)
        if len(payload) < ATTITUDE_LAYOUT.size:
            raise MSPError(f"Attitude payload too short: {len(payload)} bytes")

        roll, pitch, yaw = ATTITUDE_LAYOUT.unpack_from(payload)
        return Attitude(roll=roll / 10.0, pitch=pitch / 10.0, yaw=float(yaw))

    def get_altitude(self) -> Altitude:
        payload = self.request(MSPCommand.ALTITUDE)
        if len(payload) < ALTITUDE_LAYOUT.size:
            raise MSPError(f"Altitude payload too short: {len(payload)} bytes")

        altitude_cm, vario_cms = ALTITUDE_LAYOUT.unpack_from(payload)
        return Altitude(altitude_cm=altitude_cm, vario_cms=vario_cms)

    def set_raw_rc(self, channels: List[int]):
        """
        Send RC pulses in AETR order

        Fewer than eight channels are padded with centre pulses; every value
        is clamped to 1000..2000. The receiver must be set to MSP
        (serialrx_provider = MSP) for Betaflight to use them.
        """
        pulses = list(channels) + [1500] * (RC_CHANNELS - len(channels))
        pulses = [min(RC_MAX, max(RC_MIN, int(p))) for p in pulses]
        self.request(MSPCommand.SET_RAW_RC, struct.pack(f'<{len(pulses)}H', *pulses))
