"""Shared fixtures for TUI tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from prompt_toolkit.data_structures import Point
from prompt_toolkit.mouse_events import MouseButton, MouseEvent, MouseEventType

from jobform.settings import FormSettings
from jobform.tui.app import FormApp


def click(x: int = 0, y: int = 0, event_type: MouseEventType = MouseEventType.MOUSE_UP) -> MouseEvent:
    return MouseEvent(
        position=Point(x=x, y=y),
        event_type=event_type,
        button=MouseButton.LEFT,
        modifiers=frozenset(),
    )


@pytest.fixture
def mouse_up():
    """Factory for a left-button release at (x, y)."""
    return click


@pytest.fixture
def resume_dir(tmp_path: Path) -> Path:
    """Directory with a PDF, a PNG, a hidden file and a sub-folder."""
    (tmp_path / "cv.pdf").write_bytes(b"%PDF" + b"0" * 1020)
    (tmp_path / "photo.png").write_bytes(b"png")
    (tmp_path / ".hidden").write_text("x", encoding="utf-8")
    (tmp_path / "old").mkdir()
    return tmp_path


@pytest.fixture
def form_app(scheduler, resume_dir: Path) -> FormApp:
    """Application with layout built but not running."""
    return FormApp(FormSettings(resume_dir=str(resume_dir)), scheduler=scheduler)
