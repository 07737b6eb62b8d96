"""
Deferred callback scheduling for display pacing.

WHAT: Run a callback after a cosmetic delay (typing pause, page transition)
WHY: Pacing is presentation policy; decisions are made before anything is scheduled
HOW: Scheduler protocol with an immediate and an asyncio implementation
"""

import asyncio
from typing import Callable, Protocol


class Scheduler(Protocol):
    """Anything that can run a callback after a delay."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        ...


class ImmediateScheduler:
    """Runs callbacks at once, ignoring the delay."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        callback()


class AsyncioScheduler:
    """
    Defers callbacks on an asyncio event loop.

    Single-threaded: callbacks run on the loop thread, so they never race
    with message handling on the same loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self.loop.call_later(max(delay_seconds, 0.0), callback)
