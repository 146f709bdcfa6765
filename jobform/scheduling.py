"""Cancellable scheduled tasks.

Every timer in the form (skill pulses, the simulated submission delay, the
toast auto-dismiss) goes through a Scheduler so the core never touches an
event loop directly and tests can drive time by hand.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol

__all__ = [
    "ScheduledTask",
    "Scheduler",
    "TaskSlot",
    "AsyncioScheduler",
]


class ScheduledTask(Protocol):
    """Handle for one pending callback."""

    @property
    def done(self) -> bool:
        """True once the callback has run or the task was cancelled."""
        ...

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...


class Scheduler(Protocol):
    """Runs callbacks after a delay on the form's single thread."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        ...


class TaskSlot:
    """Holds at most one outstanding task.

    Putting a new task in the slot cancels the previous one first, so a
    late callback from a replaced task can never fire.
    """

    def __init__(self) -> None:
        self._task: Optional[ScheduledTask] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done

    def replace(self, task: ScheduledTask) -> None:
        self.cancel()
        self._task = task

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def clear(self) -> None:
        """Forget the held task without cancelling it (used once it has fired)."""
        self._task = None


class _AsyncioTask:
    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def _run(self) -> None:
        if self._done:
            return
        self._done = True
        self._callback()

    def cancel(self) -> None:
        self._done = True
        if self._handle is not None:
            self._handle.cancel()


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    prompt_toolkit applications run on asyncio, so callbacks scheduled here
    run between key presses on the same thread as the input handlers.

    Args:
        loop: Loop to schedule on. Defaults to the running loop at the time
            of each call_later().
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        loop = self._loop or asyncio.get_running_loop()
        task = _AsyncioTask(callback)
        task._handle = loop.call_later(delay_ms / 1000, task._run)
        return task
