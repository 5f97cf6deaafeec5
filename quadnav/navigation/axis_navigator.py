"""
Axis Navigator

Background tick loop shared by the height and yaw navigators.

Each navigation runs in its own thread:

    claim axis -> [check flag -> read error -> set stick -> flush -> sleep]* -> zero, flush, signal

The loop never holds a lock across the sleep and never holds one lock while
taking another: the axis flag, the telemetry snapshot and the stick output
are each locked only for the single read or write that needs them.
"""

import time
import threading
from typing import Optional
import logging

from .nav_state import NavigationState, CompletionSignal, NavigationOutcome
from ..flight.sticks import StickAxis
from ..config import get_config

logger = logging.getLogger(__name__)


def stick_command(error: int, band: int, full_scale: int, half_scale: int) -> int:
    """
    Two-speed control law

    Args:
        error: Signed distance to target (target - current)
        band: Errors up to this magnitude get half scale
        full_scale: Stick value beyond the band
        half_scale: Stick value inside the band

    Returns:
        Stick value with the sign of the error, 0 on target
    """
    if error > band:
        return full_scale
    if error > 0:
        return half_scale
    if error < -band:
        return -full_scale
    if error < 0:
        return -half_scale
    return 0


class AxisNavigator:
    """
    Drives one stick axis until a telemetry value reaches its target

    Subclasses set `axis_name`, `stick_axis` and `band`, and implement
    `error_to()`. The link is any object with a `flush()` method that sends
    the current stick output to the vehicle.
    """

    axis_name = 'axis'
    stick_axis: StickAxis = StickAxis.VERTICAL
    band = 0

    def __init__(self, telemetry, sticks, link,
                 period_s: Optional[float] = None,
                 full_scale: Optional[int] = None,
                 half_scale: Optional[int] = None):
        """
        Initialize navigator

        Args:
            telemetry: TelemetrySnapshot to read
            sticks: ControlOutput to write
            link: Stick transmitter with a flush() method
            period_s: Tick period (default from config)
            full_scale: Stick value far from target (default from config)
            half_scale: Stick value near target (default from config)
        """
        config = get_config().autopilot

        self.telemetry = telemetry
        self.sticks = sticks
        self.link = link

        self.period_s = config.period_s if period_s is None else period_s
        self.full_scale = config.full_scale if full_scale is None else full_scale
        self.half_scale = config.half_scale if half_scale is None else half_scale

        self._state = NavigationState(self.axis_name)
        self._thread: Optional[threading.Thread] = None
        self._target: Optional[int] = None

    @property
    def is_active(self) -> bool:
        """True while a navigation task owns the axis"""
        return self._state.active

    @property
    def target(self) -> Optional[int]:
        """Target of the most recent navigation"""
        return self._target

    def error_to(self, target: int) -> int:
        """Signed distance from the current telemetry value to `target`"""
        raise NotImplementedError

    def cancel(self):
        """
        Request the running navigation to stop

        Returns immediately; the task zeroes the axis and sends its completion
        signal on its next tick. Cancelling an idle axis does nothing.
        """
        logger.debug(f"Cancel requested for {self.axis_name} navigation")
        self._state.cancel()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the most recent navigation thread to exit

        Returns:
            True if no navigation thread is running
        """
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _launch(self, target: int) -> CompletionSignal:
        """Claim the axis and start the tick loop in a background thread"""
        token = self._state.claim()
        signal = CompletionSignal(self.axis_name)
        self._target = target

        self._thread = threading.Thread(
            target=self._run,
            args=(target, token, signal),
            name=f"{self.axis_name}-nav-{token}",
            daemon=True
        )
        self._thread.start()
        return signal

    def _run(self, target: int, token: int, signal: CompletionSignal):
        """Tick loop"""
        while True:
            try:
                outcome = self._tick(target, token)
            except Exception as e:
                # Keep navigating; a failed tick only delays the manoeuvre
                logger.error(f"{self.axis_name} navigation tick error: {e}")
                outcome = None

            if outcome is not None:
                self._finish(token, signal, outcome)
                return

            time.sleep(self.period_s)

    def _tick(self, target: int, token: int) -> Optional[NavigationOutcome]:
        """
        One control iteration

        Returns:
            Outcome if the task should stop, None to keep going
        """
        if not self._state.owns(token):
            logger.info(f"{self.axis_name.capitalize()} navigation cancelled")
            return NavigationOutcome.CANCELLED

        error = self.error_to(target)
        logger.debug(f"{self.axis_name} target: {target}, error: {error}")

        if error == 0:
            logger.info(f"{self.axis_name.capitalize()} target {target} reached")
            return NavigationOutcome.REACHED

        self.sticks.set_axis(
            self.stick_axis,
            stick_command(error, self.band, self.full_scale, self.half_scale)
        )
        self._flush()
        return None

    def _finish(self, token: int, signal: CompletionSignal, outcome: NavigationOutcome):
        """Stop the axis, give it back and notify the caller"""
        # A newer navigation already owns the stick after a cancel + restart
        if not self._state.superseded(token):
            self.sticks.set_axis(self.stick_axis, 0)
            self._flush()

        self._state.release(token)
        signal.send(outcome)

    def _flush(self):
        try:
            self.link.flush()
        except Exception as e:
            logger.warning(f"Stick flush failed: {e}")

    def get_status(self) -> dict:
        return {
            'active': self.is_active,
            'target': self._target,
            'stick': self.sticks.get_axis(self.stick_axis),
        }
