"""Periodic background execution of sync passes.

The scheduler runs at most one pass at a time: a single daemon thread waits
on the stop event for ``interval`` seconds between passes, so a slow pass
delays the next one instead of overlapping it.
"""

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_STOP_TIMEOUT = 10.0


class SyncScheduler:
    """Runs a sync callable once at startup, then every ``interval`` seconds.

    Example:
        >>> scheduler = SyncScheduler(service.run_sync, interval=300)
        >>> scheduler.start()
        >>> ...
        >>> scheduler.stop()
    """

    def __init__(
        self,
        sync_fn: Callable[[], Any],
        interval: float,
        stop_event: Optional[threading.Event] = None,
    ):
        """Initialize the scheduler.

        Args:
            sync_fn: Callable running one pass; its return value is ignored
            interval: Seconds to wait between the end of one pass and the next
            stop_event: Shared shutdown signal (a new one is created if omitted)

        Raises:
            ValueError: If interval is not positive
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.sync_fn = sync_fn
        self.interval = interval
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run_safely(self) -> None:
        try:
            self.sync_fn()
        except Exception:
            logger.exception("Unexpected error during scheduled sync")

    def _loop(self) -> None:
        while not self.stop_event.wait(self.interval):
            self._run_safely()
        logger.debug("Scheduler loop exited")

    def start(self) -> None:
        """Run the initial pass synchronously, then start the background thread.

        Raises:
            RuntimeError: If the scheduler is already running
        """
        if self.is_running:
            raise RuntimeError("Scheduler is already running")

        logger.info("Running initial sync")
        self._run_safely()

        if self.stop_event.is_set():
            logger.info("Stop requested during initial sync; not scheduling")
            return

        self._thread = threading.Thread(
            target=self._loop,
            name="markdown-mirror-sync",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"Scheduled sync every {self.interval} second(s)")

    def stop(self, timeout: float = DEFAULT_STOP_TIMEOUT) -> None:
        """Signal shutdown and wait for an in-flight pass to finish.

        Args:
            timeout: Seconds to wait for the thread to exit
        """
        self.stop_event.set()
        if self._thread is None:
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning(f"Sync thread did not stop within {timeout} second(s)")
        else:
            self._thread = None

    def run_forever(self) -> None:
        """Start and block until the stop event is set."""
        self.start()
        self.stop_event.wait()
        self.stop()
