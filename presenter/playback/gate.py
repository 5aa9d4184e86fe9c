"""
Single-slot rendezvous for manual waits.
"""

from __future__ import annotations
import asyncio
import logging
import threading
from typing import Optional

logger = logging.getLogger(__name__)


class ManualWaitGate:
    """
    Suspends playback until ``resume()`` is called.

    Only one wait is tracked at a time: registering a new wait replaces the
    previous one, which then never resolves. ``resume()`` may be called from
    any thread, e.g. a key listener.

    Usage:
        gate = ManualWaitGate()

        # In the playback coroutine
        await gate.wait()

        # From anywhere else
        gate.resume()
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._waiter: Optional[asyncio.Future] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._closed = False

    @property
    def waiting(self) -> bool:
        """Whether a wait is registered and not yet resumed."""
        with self._lock:
            return self._waiter is not None

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def wait(self) -> asyncio.Future:
        """Register a wait on the running loop and return its future."""
        loop = asyncio.get_running_loop()
        future = loop.create_future()
        with self._lock:
            if self._closed:
                future.set_result(None)
                return future
            if self._waiter is not None:
                logger.warning("Replacing a pending manual wait")
            self._waiter = future
            self._loop = loop
        logger.debug("Waiting for manual resume")
        return future

    def resume(self) -> bool:
        """
        Resolve the registered wait.

        Returns:
            True if a wait was resumed, False if none was registered
        """
        with self._lock:
            future, loop = self._waiter, self._loop
            self._waiter = None
            self._loop = None

        if future is None:
            return False

        loop.call_soon_threadsafe(self._release, future)
        logger.debug("Manual wait resumed")
        return True

    def close(self) -> None:
        """
        Stop waiting for resumes altogether.

        The pending wait, if any, is resumed and every later wait completes
        immediately. Used when the source of resumes has gone away.
        """
        with self._lock:
            self._closed = True
        self.resume()
        logger.info("Manual waits disabled")

    @staticmethod
    def _release(future: asyncio.Future) -> None:
        if not future.done():
            future.set_result(None)
