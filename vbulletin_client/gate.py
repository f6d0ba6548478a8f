"""
One-shot readiness gate for the session handshake.

Any number of coroutines can wait on the gate. It settles exactly once,
either open (all waiters resume) or failed (all waiters raise the same
error), and every later wait returns or raises immediately.
"""

import asyncio
from typing import List, Optional

from .exceptions import InitializationTimeoutError


class InitializationGate:
    """Fan-out notification of handshake completion with per-waiter timeouts."""

    def __init__(self):
        self._waiters: List[asyncio.Future] = []
        self._ready = False
        self._error: Optional[BaseException] = None
        self._error_tb = None

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def settled(self) -> bool:
        return self._ready or self._error is not None

    @property
    def waiting(self) -> int:
        """Number of callers currently suspended on the gate."""
        return sum(1 for fut in self._waiters if not fut.done())

    async def wait(self, timeout: Optional[float] = None) -> None:
        """
        Wait until the gate settles.

        Args:
            timeout: Seconds this caller is willing to wait, None for no limit

        Raises:
            InitializationTimeoutError: If the timeout elapses first
            BaseException: The stored error, if the gate failed
        """
        if self._ready:
            return
        if self._error is not None:
            raise self._error.with_traceback(self._error_tb)

        fut = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        try:
            await asyncio.wait_for(fut, timeout)
        except asyncio.TimeoutError:
            raise InitializationTimeoutError(
                f"Connection could not be established within {timeout} seconds"
            ) from None
        finally:
            if fut in self._waiters:
                self._waiters.remove(fut)

    def open(self) -> None:
        """Settle the gate successfully and release every waiter."""
        self._settle()
        self._ready = True
        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            if not fut.done():
                fut.set_result(None)

    def fail(self, error: BaseException) -> None:
        """Settle the gate with a terminal error and release every waiter."""
        self._settle()
        self._error = error
        self._error_tb = error.__traceback__
        waiters, self._waiters = self._waiters, []
        for fut in waiters:
            if not fut.done():
                fut.set_exception(error)

    def _settle(self) -> None:
        if self.settled:
            raise RuntimeError("InitializationGate can only be settled once")
