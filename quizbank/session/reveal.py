"""Cancellable delay between revealing an answer and advancing."""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_REVEAL_DELAY = 1.5


class RevealTimer:
    """
    Delays an action (normally QuizSession.advance) after a reveal.

    The timer is owned by whoever drives the session. Only one action can
    be pending at a time, which keeps a second advance from being queued
    while the first is still waiting. Cancelling drops the action so it
    never runs against a session that has been discarded.
    """

    def __init__(
        self,
        delay: float = DEFAULT_REVEAL_DELAY,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")
        self.delay = delay
        self._clock = clock
        self._sleep = sleep
        self._action: Callable[[], object] | None = None
        self._deadline = 0.0

    @property
    def pending(self) -> bool:
        return self._action is not None

    @property
    def remaining(self) -> float:
        """Seconds left before the pending action may run (0 if none)."""
        if self._action is None:
            return 0.0
        return max(0.0, self._deadline - self._clock())

    def schedule(self, action: Callable[[], object]) -> None:
        """
        Arm the timer.

        Raises:
            RuntimeError: If an action is already pending
        """
        if self._action is not None:
            raise RuntimeError("An action is already scheduled")
        self._action = action
        self._deadline = self._clock() + self.delay

    def cancel(self) -> bool:
        """
        Drop the pending action.

        Returns:
            True if an action was pending
        """
        was_pending = self._action is not None
        if was_pending:
            logger.debug("Reveal delay cancelled with %.2fs left", self.remaining)
        self._action = None
        return was_pending

    def poll(self) -> bool:
        """
        Run the pending action if its delay has elapsed.

        Returns:
            True if the action ran
        """
        if self._action is None or self.remaining > 0:
            return False

        action, self._action = self._action, None
        action()
        return True

    def wait(self) -> bool:
        """
        Block until the delay has elapsed, then run the action.

        Returns:
            True if the action ran, False if nothing was pending
        """
        if self._action is None:
            return False

        remaining = self.remaining
        if remaining > 0:
            self._sleep(remaining)
        # the sleep may be interrupted, so check the deadline again
        while not self.poll():
            if self._action is None:
                return False
            self._sleep(self.remaining)
        return True
