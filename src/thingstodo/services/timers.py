"""Cancellable timers for the discovery engine.

The engine only depends on the ``Scheduler`` protocol. ``AsyncioScheduler``
runs on a plain event loop and ``TextualScheduler`` on a Textual widget's
timers, so the same engine code drives both the UI and the tests.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class AsyncioScheduler:
    """Schedule callbacks with ``loop.call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class _TextualTimerHandle:
    def __init__(self, timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


# Textual timers reject a zero interval
MIN_TEXTUAL_DELAY = 0.001


class TextualScheduler:
    """Schedule callbacks with ``Widget.set_timer`` on the given widget."""

    def __init__(self, widget):
        self._widget = widget

    def call_later(self, delay: float, callback: Callable[[], None]) -> _TextualTimerHandle:
        return _TextualTimerHandle(self._widget.set_timer(max(delay, MIN_TEXTUAL_DELAY), callback))


class TimerSlot:
    """Holds at most one pending timer.

    Scheduling through the slot cancels the previous handle first, so a
    superseded callback can never fire after its replacement was scheduled.
    """

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._handle: Cancellable | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def replace(self, delay: float, callback: Callable[[], None]) -> None:
        self.cancel()
        generation = self._generation

        def fire() -> None:
            # A cancelled timer that still fires is discarded here
            if generation != self._generation:
                return
            self._handle = None
            self._generation += 1
            callback()

        self._handle = self._scheduler.call_later(delay, fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1
