"""
Navigation state and completion signalling

Per-axis ownership flag and the one-shot notification a navigation task
sends when it stops.
"""

import threading
from enum import Enum, auto
from typing import Optional


class NavigationError(Exception):
    """Navigation request rejected"""
    pass


class NavigationRangeError(NavigationError, ValueError):
    """Target outside the range allowed for the axis"""
    pass


class AlreadyNavigatingError(NavigationError):
    """The axis is already owned by a running navigation task"""
    pass


class NavigationOutcome(Enum):
    """Why a navigation task stopped"""
    REACHED = auto()      # Target reached
    CANCELLED = auto()    # Stopped by cancel()


class CompletionSignal:
    """
    One-shot completion notification

    Sent exactly once by the navigation task that created it, either when the
    target is reached or when the task notices a cancellation. Sending never
    blocks, so callers are free to ignore the signal.

    Example:
        done = autopilot.start_height_nav(15)
        if done.wait(timeout=10.0) is None:
            autopilot.cancel_height_nav()
    """

    def __init__(self, axis: str):
        self.axis = axis
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._outcome: Optional[NavigationOutcome] = None

    def send(self, outcome: NavigationOutcome) -> bool:
        """
        Deliver the signal

        Returns:
            False if the signal had already been sent (the outcome is kept)
        """
        with self._lock:
            if self._outcome is not None:
                return False
            self._outcome = outcome
        self._event.set()
        return True

    def wait(self, timeout: Optional[float] = None) -> Optional[NavigationOutcome]:
        """
        Block until the task stops

        Args:
            timeout: Seconds to wait (None waits forever)

        Returns:
            The outcome, or None on timeout
        """
        if self._event.wait(timeout):
            return self._outcome
        return None

    @property
    def done(self) -> bool:
        return self._event.is_set()

    @property
    def outcome(self) -> Optional[NavigationOutcome]:
        return self._outcome

    def __repr__(self) -> str:
        state = self._outcome.name if self._outcome else 'PENDING'
        return f"CompletionSignal({self.axis}, {state})"


class NavigationState:
    """
    Ownership of one stick axis

    `claim()` checks and sets the active flag in one critical section and
    hands back a token identifying the new task. A task keeps running only
    while the flag is set and its token is the latest one, so a cancel
    followed by a quick restart never leaves two tasks driving the axis.
    """

    def __init__(self, axis: str):
        self.axis = axis
        self._lock = threading.Lock()
        self._active = False
        self._token = 0

    @property
    def active(self) -> bool:
        with self._lock:
            return self._active

    def claim(self) -> int:
        """
        Mark the axis active for a new task

        Returns:
            Token of the new task

        Raises:
            AlreadyNavigatingError: if the axis is already active
        """
        with self._lock:
            if self._active:
                raise AlreadyNavigatingError(f"Already navigating {self.axis}")
            self._active = True
            self._token += 1
            return self._token

    def cancel(self):
        """Clear the active flag (no-op when idle)"""
        with self._lock:
            self._active = False

    def owns(self, token: int) -> bool:
        """True while the task holding `token` should keep running"""
        with self._lock:
            return self._active and self._token == token

    def superseded(self, token: int) -> bool:
        """True once a newer task has claimed the axis"""
        with self._lock:
            return self._token != token

    def release(self, token: int):
        """Clear the active flag if `token` still owns the axis"""
        with self._lock:
            if self._token == token:
                self._active = False
