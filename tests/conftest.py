"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Generator

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from jobform.form import ApplicationForm  # noqa: E402
from jobform.models import SelectedFile, UIElement  # noqa: E402
from jobform.settings import FormSettings  # noqa: E402

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class FakeTask:
    """Scheduled callback driven by FakeScheduler."""

    def __init__(self, due: int, seq: int, callback: Callable[[], None]) -> None:
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def done(self) -> bool:
        return self.cancelled or self.fired

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock: callbacks run only inside advance()."""

    def __init__(self) -> None:
        self.now = 0
        self.tasks: list[FakeTask] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> FakeTask:
        task = FakeTask(self.now + delay_ms, len(self.tasks), callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[FakeTask]:
        return [task for task in self.tasks if not task.done]

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing due callbacks in order."""
        target = self.now + ms
        while True:
            due = [task for task in self.pending if task.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.due, t.seq))
            self.now = task.due
            task.fired = True
            task.callback()
        self.now = target


class FakeFocusHost:
    """Focus host over plain UIElements."""

    def __init__(self, modal: list[UIElement] | None = None) -> None:
        self.modal = list(modal or [])
        self.detached: set[int] = set()
        self.current: UIElement | None = None

    def modal_elements(self) -> list[UIElement]:
        return list(self.modal)

    def focused(self) -> UIElement | None:
        return self.current

    def focus(self, element: UIElement) -> None:
        self.current = element

    def can_focus(self, element: UIElement) -> bool:
        return id(element) not in self.detached and not element.disabled

    def detach(self, element: UIElement) -> None:
        self.detached.add(id(element))


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def modal_elements() -> list[UIElement]:
    """Close button, a text link and a Done button, in document order."""
    return [
        UIElement("modal-close", close_target=True),
        UIElement("modal-link"),
        UIElement("modal-done", close_target=True),
    ]


@pytest.fixture
def focus_host(modal_elements: list[UIElement]) -> FakeFocusHost:
    return FakeFocusHost(modal_elements)


@pytest.fixture
def pdf_resume() -> SelectedFile:
    return SelectedFile("resume.pdf", 2 * 1024 * 1024, PDF)


@pytest.fixture
def form(scheduler: FakeScheduler, focus_host: FakeFocusHost) -> ApplicationForm:
    return ApplicationForm(FormSettings(), scheduler=scheduler, focus_host=focus_host)


@pytest.fixture
def ready_form(form: ApplicationForm, pdf_resume: SelectedFile) -> ApplicationForm:
    """Form with every required field filled and a valid resume."""
    form.set_value("full_name", "Ada Lovelace")
    form.set_value("email", "ada@example.com")
    form.set_value("phone", "+44 20 7946 0958")
    form.set_value("position", "Analyst")
    form.set_value("consent", True)
    form.select_file(pdf_resume)
    return form


@pytest.fixture
def clean_logging() -> Generator[None, None, None]:
    """Drop the handlers setup_logging() installs once the test is done."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)
