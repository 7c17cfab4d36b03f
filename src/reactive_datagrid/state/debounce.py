"""Debouncing for keystroke-driven filter updates.

Scheduling is pluggable so hosts can use their own event loop and tests
can drive time by hand. Within one scheduler everything runs on the
calling thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, fn: Callable[[], Any]) -> TimerHandle: ...


class _Done:
    def cancel(self) -> None:
        pass


class ImmediateScheduler:
    """Runs callbacks synchronously; debouncing degenerates to a pass-through."""

    def call_later(self, delay: float, fn: Callable[[], Any]) -> TimerHandle:
        fn()
        return _Done()


class AsyncioScheduler:
    """Schedules on the running asyncio loop.

    Outside a running loop there is nothing to wait on, so the callback
    runs immediately and no debouncing happens. Synchronous hosts should
    supply a scheduler backed by their own timer.
    """

    def call_later(self, delay: float, fn: Callable[[], Any]) -> TimerHandle:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; running debounced call immediately")
            fn()
            return _Done()
        return loop.call_later(delay, fn)


class Debouncer:
    """Delay *callback* until calls stop for *delay* seconds; last call wins."""

    def __init__(
        self,
        delay: float,
        callback: Callable[..., Any],
        scheduler: Scheduler | None = None,
    ) -> None:
        self.delay = delay
        self._callback = callback
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._handle: TimerHandle | None = None
        self._pending = False
        self._args: tuple = ()

    @property
    def pending(self) -> bool:
        return self._pending

    def __call__(self, *args: Any) -> None:
        self.cancel()
        self._args = args
        self._pending = True
        handle = self._scheduler.call_later(self.delay, self._fire)
        # a synchronous scheduler has already fired by now
        if self._pending:
            self._handle = handle

    def _fire(self) -> None:
        if not self._pending:
            return
        self._pending = False
        self._handle = None
        args, self._args = self._args, ()
        self._callback(*args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = False
        self._args = ()

    def flush(self) -> None:
        """Run the pending call now, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._fire()
