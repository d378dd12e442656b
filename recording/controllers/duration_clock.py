"""
Duration Clock

Cancellable once-per-second ticker for a recording session.
The clock itself never pauses; the session decides whether a tick
counts. No drift correction: the count is of ticks observed, not of
wall-clock seconds.
"""

import logging
import threading
from typing import Callable, Optional

from config.settings import CLOCK_TICK_INTERVAL


class DurationClock:
    """
    Periodic ticker backed by a daemon thread.

    With auto_tick=False no thread is started and tick() must be called
    by hand (deterministic tests, external event loops).

    Usage:
        clock = DurationClock(on_tick=session_tick)
        clock.start()
        ...
        clock.stop()
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        interval: float = CLOCK_TICK_INTERVAL,
        auto_tick: bool = True,
    ):
        self.logger = logging.getLogger(__name__)
        self.on_tick = on_tick
        self.interval = interval
        self.auto_tick = auto_tick

        self._running = False
        self._tick_count = 0
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        """Ticks delivered since the last start()"""
        return self._tick_count

    def start(self) -> bool:
        """
        Start ticking.

        Returns:
            True if started, False if already running (one timer per clock)
        """
        if self._running:
            self.logger.debug("Clock already running")
            return False

        # A cancelled worker keeps its own event, so it cannot be revived here
        self.join()
        self._stop_event = threading.Event()

        self._running = True
        self._tick_count = 0

        if self.auto_tick:
            self._thread = threading.Thread(
                target=self._tick_worker,
                args=(self._stop_event,),
                daemon=True,
                name="DurationClock",
            )
            self._thread.start()

        self.logger.debug(f"Clock started (interval: {self.interval}s)")
        return True

    def cancel(self) -> None:
        """
        Stop ticking without waiting for the worker thread.

        Safe to call while holding a lock the tick callback needs.
        """
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        self.logger.debug(f"Clock cancelled after {self._tick_count} ticks")

    def join(self, timeout: float = 2.0) -> None:
        """Wait for the worker thread to exit after cancel()"""
        thread = self._thread
        if thread is None:
            return
        if thread is not threading.current_thread() and thread.is_alive():
            thread.join(timeout=timeout)
        self._thread = None

    def stop(self) -> None:
        """Cancel and wait for the worker thread"""
        self.cancel()
        self.join()

    def tick(self) -> bool:
        """
        Deliver one tick.

        Returns:
            True if delivered, False if the clock is not running
        """
        if not self._running:
            return False
        self._tick_count += 1
        try:
            self.on_tick()
        except Exception as e:
            self.logger.error(f"Error in tick callback: {e}")
        return True

    def _tick_worker(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            self.tick()
