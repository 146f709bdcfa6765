"""Tests for the submit lifecycle and the assembled ApplicationForm."""

from __future__ import annotations

import pytest

from jobform.constants import MSG_SUBMIT_SUCCESS, MSG_SUBMIT_TOAST
from jobform.form import ApplicationForm, SubmissionState
from jobform.models import SelectedFile, UIElement
from jobform.settings import FormSettings


class TestSubmit:
    def test_rejected_when_gate_closed(self, form: ApplicationForm, scheduler) -> None:
        assert form.submit() is False
        assert form.submission.state is SubmissionState.IDLE
        assert scheduler.pending == []

    def test_starts_submitting(self, ready_form: ApplicationForm) -> None:
        assert ready_form.submit() is True
        assert ready_form.submission.in_progress is True
        assert ready_form.submit_enabled is False

    def test_second_submit_ignored(self, ready_form: ApplicationForm, scheduler) -> None:
        """Only one simulated round-trip may be outstanding."""
        ready_form.submit()

        assert ready_form.submit() is False
        assert len(scheduler.pending) == 1

    def test_completes_after_delay(self, ready_form: ApplicationForm, scheduler) -> None:
        ready_form.submit()

        scheduler.advance(899)
        assert ready_form.submission.in_progress is True

        scheduler.advance(1)
        assert ready_form.submission.state is SubmissionState.IDLE
        assert ready_form.submission.message == MSG_SUBMIT_SUCCESS

    def test_payload_captured_at_submit(self, ready_form: ApplicationForm) -> None:
        ready_form.add_skill("Python")
        ready_form.add_skill("Go")
        ready_form.toggle_skill("go")

        ready_form.submit()
        payload = ready_form.submission.last_payload

        assert payload is not None
        assert payload["fields"]["full_name"] == "Ada Lovelace"
        assert payload["skills"] == ["Python"]
        assert payload["resume"] == "resume.pdf"

    def test_emptied_field_blocks_submit(self, ready_form: ApplicationForm) -> None:
        ready_form.set_value("email", "")

        assert ready_form.submit() is False


class TestEndToEnd:
    def test_successful_application(self, ready_form: ApplicationForm, scheduler, focus_host, modal_elements) -> None:
        """Fill, submit, wait: reset form, success message, modal and toast."""
        ready_form.add_skill("Python")
        assert ready_form.resume_summary == "resume.pdf — 2.00 MB"

        ready_form.submit()
        scheduler.advance(900)

        assert ready_form.fields.value("full_name") == ""
        assert ready_form.fields.value("consent") is False
        assert ready_form.attachment.is_valid is False
        assert ready_form.submit_enabled is False
        assert ready_form.submission.message == MSG_SUBMIT_SUCCESS
        assert ready_form.modal.is_visible is True
        assert focus_host.current is modal_elements[0]
        assert ready_form.toast.is_visible is True
        assert ready_form.toast.message == MSG_SUBMIT_TOAST

        scheduler.advance(3500)
        assert ready_form.toast.is_visible is False

    def test_skills_survive_reset_with_default_selection(self, ready_form: ApplicationForm, scheduler) -> None:
        ready_form.add_skill("Python")
        ready_form.toggle_skill("python")

        ready_form.submit()
        scheduler.advance(900)

        assert ready_form.skills.get("python").is_selected is True

    def test_escape_then_close_toast(self, ready_form: ApplicationForm, scheduler) -> None:
        ready_form.submit()
        scheduler.advance(900)

        assert ready_form.handle_key("escape") is True
        ready_form.close_toast()

        assert ready_form.modal.is_visible is False
        assert ready_form.toast.is_visible is False
        assert scheduler.pending == []

    def test_resubmit_after_refill(self, ready_form: ApplicationForm, scheduler, pdf_resume) -> None:
        ready_form.submit()
        scheduler.advance(900)
        ready_form.close_modal()

        for field_id, value in [
            ("full_name", "Grace Hopper"),
            ("email", "grace@example.com"),
            ("phone", "5551234"),
            ("position", "Engineer"),
            ("consent", True),
        ]:
            ready_form.set_value(field_id, value)
        ready_form.select_file(pdf_resume)

        assert ready_form.submit() is True


class TestFormDetails:
    def test_cover_truncated_and_counted(self, scheduler) -> None:
        form = ApplicationForm(FormSettings(cover_max_length=10), scheduler=scheduler)

        form.set_value("cover", "x" * 25)

        assert form.fields.value("cover") == "x" * 10
        assert form.cover_count_text == "10 / 10"

    def test_preset_skills_seeded(self, scheduler) -> None:
        settings = FormSettings(preset_skills=[("Python", True), ("SQL", False)])
        form = ApplicationForm(settings, scheduler=scheduler)

        assert form.skills.ids() == ["python", "sql"]
        assert [s.display_text for s in form.skills.selected()] == ["Python"]

    def test_on_change_notified(self, scheduler) -> None:
        calls: list[int] = []
        form = ApplicationForm(scheduler=scheduler, on_change=lambda: calls.append(1))

        form.set_value("email", "a@b.c")
        form.add_skill("Go")
        scheduler.advance(250)

        assert len(calls) >= 3

    def test_rejected_file_clears_surface(self, scheduler) -> None:
        cleared: list[int] = []
        form = ApplicationForm(scheduler=scheduler, clear_file_selection=lambda: cleared.append(1))

        assert form.select_file(SelectedFile("cv.exe", 10, "application/x-msdownload")) is False
        assert cleared == [1]

    def test_click_overlay_closes_modal(self, ready_form: ApplicationForm, scheduler) -> None:
        ready_form.submit()
        scheduler.advance(900)

        assert ready_form.click(UIElement("overlay", overlay=True)) is True
        assert ready_form.modal.is_visible is False

    @pytest.mark.parametrize("key", ["enter", "space"])
    def test_skill_key(self, form: ApplicationForm, key: str) -> None:
        form.add_skill("Python")

        assert form.skill_key("python", key) is True
        assert form.skills.get("python").is_selected is False
