"""Utilities for running preference storage coroutines beside tkinter's main thread."""

import asyncio
import threading
from typing import Any, Coroutine, Optional
from concurrent.futures import Future, wait
import logging

logger = logging.getLogger(__name__)

STOP_TIMEOUT = 5  # seconds


class AsyncBridge:
    """Runs an asyncio event loop in a background thread.

    Storage reads and writes are coroutines; the GUI thread hands them to
    this loop so file access never blocks the window.
    """

    def __init__(self):
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._pending: set[Future] = set()
        self._pending_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """Check if the async bridge is running."""
        return self._running and self._loop is not None

    def start(self) -> None:
        """Start the async event loop in a background thread."""
        if self._running:
            return

        self._loop = asyncio.new_event_loop()
        self._running = True
        self._thread = threading.Thread(target=self._run_loop, daemon=True, name="AsyncBridge")
        self._thread.start()
        logger.info("AsyncBridge started")

    def _run_loop(self) -> None:
        """Run the event loop (called in background thread)."""
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()
            logger.info("AsyncBridge event loop closed")

    def run_async(self, coro: Coroutine[Any, Any, Any]) -> Optional[Future]:
        """Schedule a coroutine without waiting for it.

        Failures are logged when the coroutine finishes.

        Args:
            coro: The coroutine to run

        Returns:
            A Future for the result, or None if the bridge is not running
        """
        if not self.is_running:
            logger.warning("AsyncBridge not running, cannot schedule coroutine")
            coro.close()
            return None

        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        with self._pending_lock:
            self._pending.add(future)

        def log_failure(f: Future) -> None:
            with self._pending_lock:
                self._pending.discard(f)
            if f.cancelled():
                return
            error = f.exception()
            if error is not None:
                logger.error(f"Error in async operation: {error}")

        future.add_done_callback(log_failure)
        return future

    def run_sync(self, coro: Coroutine[Any, Any, Any], timeout: Optional[float] = None) -> Any:
        """Run a coroutine on the loop and block until it finishes.

        Args:
            coro: The coroutine to run
            timeout: Seconds to wait (None waits forever)

        Returns:
            The coroutine's result

        Raises:
            RuntimeError: If the bridge is not running
        """
        if not self.is_running:
            coro.close()
            raise RuntimeError("AsyncBridge is not running")

        return asyncio.run_coroutine_threadsafe(coro, self._loop).result(timeout)

    def stop(self) -> None:
        """Finish scheduled coroutines, then stop the async event loop."""
        if not self._running:
            return

        self._running = False

        with self._pending_lock:
            pending = list(self._pending)
        if pending:
            _, not_done = wait(pending, timeout=STOP_TIMEOUT)
            if not_done:
                logger.warning(f"{len(not_done)} async operation(s) still running at shutdown")

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=STOP_TIMEOUT)

        logger.info("AsyncBridge stopped")

    def __enter__(self) -> "AsyncBridge":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
