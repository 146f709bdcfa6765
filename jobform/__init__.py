"""Interactive job application form.

The form core (validation, skills, submission, modal focus trap, toast)
lives in jobform.form and does not depend on any UI toolkit. jobform.tui
renders it full-screen with prompt_toolkit.
"""

from jobform.form import ApplicationForm
from jobform.settings import FormSettings

__version__ = "0.1.0"

__all__ = [
    "ApplicationForm",
    "FormSettings",
]
