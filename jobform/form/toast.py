"""Transient notification with a debounced auto-dismiss."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from jobform.constants import DEFAULT_TOAST_DURATION_MS
from jobform.logging import get_form_logger
from jobform.scheduling import Scheduler, TaskSlot

logger = get_form_logger(__name__)


@dataclass
class ToastState:
    message: str = ""
    is_visible: bool = False


class ToastScheduler:
    """Shows one toast at a time.

    Every show() restarts the dismissal countdown: a pending timer from an
    earlier show() is cancelled before the new one is scheduled, so at most
    one timer is outstanding.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        default_duration_ms: int = DEFAULT_TOAST_DURATION_MS,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self.default_duration_ms = default_duration_ms
        self.on_change = on_change
        self._state = ToastState()
        self._timer = TaskSlot()

    @property
    def message(self) -> str:
        return self._state.message

    @property
    def is_visible(self) -> bool:
        return self._state.is_visible

    @property
    def dismiss_pending(self) -> bool:
        return self._timer.pending

    def show(self, message: str, duration_ms: int | None = None) -> None:
        duration = self.default_duration_ms if duration_ms is None else duration_ms
        self._state.message = message
        self._state.is_visible = True
        if self._timer.pending:
            logger.debug("Toast re-shown, dismissal restarted")
        self._timer.replace(self._scheduler.call_later(duration, self._expire))
        self._notify()

    def hide(self) -> None:
        """Hide now and cancel the pending dismissal (close control)."""
        self._state.is_visible = False
        self._timer.cancel()
        self._notify()

    def _expire(self) -> None:
        self._timer.clear()
        self._state.is_visible = False
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
