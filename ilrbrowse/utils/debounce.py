"""
Debouncing for search input.
"""
import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_QUIET_PERIOD = 0.3  # seconds


class Debouncer:
    """
    Runs a callback once input has been quiet for a fixed period.

    Every call to ``schedule`` cancels the pending run and starts the quiet
    period over, so a burst of keystrokes collapses into a single call.
    """
    def __init__(
        self,
        callback: Callable[[], None],
        wait: float = DEFAULT_QUIET_PERIOD,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.callback = callback
        self.wait = wait
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        """Cancel any pending run and schedule a new one after the quiet period."""
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.wait, self._fire)

    def cancel(self) -> None:
        """Drop the pending run, if any."""
        # Swap before cancelling so a late callback never sees a stale handle
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def flush(self) -> bool:
        """
        Run the pending callback now instead of waiting.

        Returns:
            True if a run was pending
        """
        if self._handle is None:
            return False
        self.cancel()
        self.callback()
        return True

    def _fire(self) -> None:
        self._handle = None
        try:
            self.callback()
        except Exception:
            logger.exception("Debounced callback failed")
