"""Application form controller.

Owns one of each form component and is the only entry point the
presentation surface calls. Every mutation runs synchronously and
recomputes the submission gate before returning.
"""

from __future__ import annotations

import uuid
from typing import Any, Callable

from jobform.constants import FIELD_SPECS
from jobform.form.attachment import AttachmentValidator
from jobform.form.fields import FieldValidationEngine
from jobform.form.gate import ReadinessGate
from jobform.form.modal import FocusHost, ModalController, NullFocusHost
from jobform.form.skills import AddResult, SkillCollection
from jobform.form.submission import SubmissionController
from jobform.form.toast import ToastScheduler
from jobform.logging import bind_session, get_form_logger
from jobform.models.attachment import SelectedFile
from jobform.models.element import UIElement
from jobform.scheduling import AsyncioScheduler, Scheduler
from jobform.settings import FormSettings

logger = get_form_logger(__name__)


class ApplicationForm:
    """Job application form state.

    Args:
        settings: Timings, limits and preset skills. Defaults to FormSettings().
        scheduler: Timer source. Defaults to the running asyncio loop.
        focus_host: Focus capability for the modal.
        clear_file_selection: Makes the file-selection surface drop a
            rejected file.
        on_change: Called after any state change so the surface can redraw.
    """

    def __init__(
        self,
        settings: FormSettings | None = None,
        *,
        scheduler: Scheduler | None = None,
        focus_host: FocusHost | None = None,
        clear_file_selection: Callable[[], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.settings = settings or FormSettings()
        self.scheduler = scheduler or AsyncioScheduler()
        self.on_change = on_change
        self.session_id = uuid.uuid4().hex[:8]
        bind_session(session=self.session_id)

        self.fields = FieldValidationEngine(FIELD_SPECS, on_change=self._inputs_changed)
        self.attachment = AttachmentValidator(
            max_bytes=self.settings.max_resume_bytes,
            clear_selection=clear_file_selection,
            on_change=self._inputs_changed,
        )
        self.skills = SkillCollection(
            self.scheduler,
            added_pulse_ms=self.settings.skill_added_pulse_ms,
            duplicate_pulse_ms=self.settings.skill_duplicate_pulse_ms,
        )
        self.skills.seed(self.settings.preset_skills)
        self.skills.on_change = self._changed

        self.gate = ReadinessGate(self.fields, self.attachment)
        self.modal = ModalController(focus_host or NullFocusHost(), on_change=self._changed)
        self.toast = ToastScheduler(
            self.scheduler,
            default_duration_ms=self.settings.toast_duration_ms,
            on_change=self._changed,
        )
        self.submission = SubmissionController(
            self.gate,
            self.scheduler,
            self.modal,
            self.toast,
            reset_form=self.reset,
            snapshot=self.snapshot,
            delay_ms=self.settings.submit_delay_ms,
            on_change=self._changed,
        )
        self.gate.recompute()
        logger.debug("Form session started")

    # ------------------------------------------------------------------
    # Derived state for the presentation surface
    # ------------------------------------------------------------------

    @property
    def submit_enabled(self) -> bool:
        return self.submission.action_enabled

    @property
    def resume_summary(self) -> str:
        return self.attachment.state.summary

    @property
    def cover_count_text(self) -> str:
        """Live counter for the cover letter, e.g. "120 / 1000"."""
        cover = self.fields.value("cover") or ""
        return f"{len(cover)} / {self.settings.cover_max_length}"

    def snapshot(self) -> dict[str, Any]:
        """What a submission carries."""
        return {
            "fields": self.fields.values(),
            "skills": [skill.display_text for skill in self.skills.selected()],
            "resume": self.attachment.state.file_name or None,
        }

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def set_value(self, field_id: str, value: Any) -> None:
        if field_id == "cover" and isinstance(value, str):
            value = value[: self.settings.cover_max_length]
        self.fields.set_value(field_id, value)

    def blur(self, field_id: str) -> bool:
        return self.fields.validate_on_blur(field_id)

    def select_file(self, file: SelectedFile | None) -> bool:
        return self.attachment.evaluate(file).is_valid

    def set_skill_draft(self, text: str) -> None:
        self.skills.set_draft(text)

    def add_skill(self, raw_text: str | None = None) -> AddResult:
        return self.skills.add(raw_text)

    def remove_skill(self, skill_id: str) -> None:
        self.skills.remove(skill_id)

    def toggle_skill(self, skill_id: str) -> bool:
        return self.skills.toggle_selection(skill_id)

    def skill_key(self, skill_id: str, key: str) -> bool:
        return self.skills.handle_key(skill_id, key)

    def submit(self) -> bool:
        return self.submission.submit()

    def handle_key(self, key: str) -> bool:
        """Document-level key press; only the open modal reacts."""
        return self.modal.handle_key(key)

    def click(self, target: UIElement) -> bool:
        return self.modal.handle_click(target)

    def close_modal(self) -> None:
        self.modal.close()

    def close_toast(self) -> None:
        self.toast.hide()

    def reset(self) -> None:
        """Blank every field and the attachment; restore skill selections."""
        self.fields.reset()
        self.attachment.reset()
        self.skills.reset_selection()

    def _inputs_changed(self) -> None:
        self.gate.recompute()
        self._changed()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
