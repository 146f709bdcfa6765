"""prompt_toolkit TUI for the job application form.

Usage:
    python -m jobform                  # Run the form
    python -m jobform --log-file x.log # Run with logging to a file
"""

from __future__ import annotations

__all__ = [
    "FormApp",
    "run_form",
]


def __getattr__(name: str):
    """Lazy import of TUI components."""
    if name == "FormApp":
        from jobform.tui.app import FormApp
        return FormApp
    if name == "run_form":
        from jobform.tui.app import run_form
        return run_form
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
