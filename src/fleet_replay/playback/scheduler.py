"""Single-shot timer schedulers for the playback clock.

A scheduler exposes ``call_later(delay_s, callback) -> handle`` where
``handle.cancel()`` guarantees the callback will not run.

* :class:`AsyncioScheduler` runs callbacks on the asyncio event loop.
* :class:`ManualScheduler` is a virtual clock for tests; nothing fires until
  :meth:`ManualScheduler.advance` or :meth:`ManualScheduler.fire_next`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field


class AsyncioScheduler:
    """Schedules callbacks with :meth:`asyncio.AbstractEventLoop.call_later`.

    Parameters
    ----------
    loop:
        Event loop to use. If None, the running loop is looked up on each
        call, so ``call_later`` must be invoked from a coroutine or callback
        on that loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_s, callback)


@dataclass
class ManualTimer:
    """A pending callback on a :class:`ManualScheduler`."""

    due_s: float
    callback: Callable[[], None]
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler driven by explicit time advancement."""

    def __init__(self) -> None:
        self.now_s = 0.0
        self._timers: list[ManualTimer] = []
        self.calls: list[float] = []

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(due_s=self.now_s + delay_s, callback=callback)
        self._timers.append(timer)
        self.calls.append(delay_s)
        return timer

    @property
    def pending(self) -> int:
        """Number of armed, uncancelled timers."""
        return sum(1 for t in self._timers if not t.cancelled)

    def fire_next(self) -> bool:
        """Jump to the earliest pending timer and run it.

        Returns False if nothing was pending.
        """
        live = [t for t in self._timers if not t.cancelled]
        if not live:
            self._timers.clear()
            return False
        timer = min(live, key=lambda t: t.due_s)
        self._timers.remove(timer)
        self.now_s = max(self.now_s, timer.due_s)
        timer.callback()
        return True

    def advance(self, ms: float) -> int:
        """Move the clock forward by *ms* milliseconds, firing due timers in order.

        Returns the number of callbacks run.
        """
        target = self.now_s + ms / 1000.0
        fired = 0
        while True:
            due = [t for t in self._timers if not t.cancelled and t.due_s <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: t.due_s)
            self._timers.remove(timer)
            self.now_s = timer.due_s
            timer.callback()
            fired += 1
        self._timers = [t for t in self._timers if not t.cancelled]
        self.now_s = target
        return fired
