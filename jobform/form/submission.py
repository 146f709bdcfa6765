"""Submit lifecycle: gate check, simulated round-trip, success feedback."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from jobform.constants import DEFAULT_SUBMIT_DELAY_MS, MSG_SUBMIT_SUCCESS, MSG_SUBMIT_TOAST
from jobform.form.gate import ReadinessGate
from jobform.form.modal import ModalController
from jobform.form.toast import ToastScheduler
from jobform.logging import get_form_logger
from jobform.scheduling import Scheduler, TaskSlot

logger = get_form_logger(__name__)


class SubmissionState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class SubmissionController:
    """Runs a submit attempt.

    Idle -> Submitting only while the gate is open; Submitting -> Idle
    after the simulated delay. The simulated backend always succeeds, so
    completion sets the success message, resets the form, opens the modal
    and shows the confirmation toast.

    Args:
        gate: Re-read at submit time to reject stale attempts
        scheduler: Runs the simulated delay
        modal: Opened on completion
        toast: Shows the confirmation on completion
        reset_form: Clears fields and attachment on completion
        snapshot: Captures what is being submitted
        delay_ms: Simulated round-trip
    """

    def __init__(
        self,
        gate: ReadinessGate,
        scheduler: Scheduler,
        modal: ModalController,
        toast: ToastScheduler,
        *,
        reset_form: Callable[[], None],
        snapshot: Callable[[], dict[str, Any]] | None = None,
        delay_ms: int = DEFAULT_SUBMIT_DELAY_MS,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._gate = gate
        self._scheduler = scheduler
        self._modal = modal
        self._toast = toast
        self._reset_form = reset_form
        self._snapshot = snapshot
        self.delay_ms = delay_ms
        self.on_change = on_change

        self.state = SubmissionState.IDLE
        self.message: str | None = None
        self.last_payload: dict[str, Any] | None = None
        self._pending = TaskSlot()

    @property
    def in_progress(self) -> bool:
        return self.state is SubmissionState.SUBMITTING

    @property
    def action_enabled(self) -> bool:
        """Whether the submit control should accept activation."""
        return not self.in_progress and self._gate.is_open

    def submit(self) -> bool:
        """Attempt a submission.

        Returns:
            True if the attempt started, False if it was rejected because a
            submission is already running or the gate is closed.
        """
        if self.in_progress:
            logger.debug("Submit ignored: already submitting")
            return False
        if not self._gate.recompute():
            logger.debug("Submit ignored: gate closed")
            return False

        self.state = SubmissionState.SUBMITTING
        self.last_payload = self._snapshot() if self._snapshot is not None else None
        logger.info("Submission started", extra={"payload": self.last_payload})
        self._pending.replace(self._scheduler.call_later(self.delay_ms, self._complete))
        self._notify()
        return True

    def _complete(self) -> None:
        self._pending.clear()
        self.state = SubmissionState.IDLE
        self.message = MSG_SUBMIT_SUCCESS
        self._reset_form()
        logger.info("Submission completed")
        self._notify()

        self._modal.open()
        self._toast.show(MSG_SUBMIT_TOAST)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
