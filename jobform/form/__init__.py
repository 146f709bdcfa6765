"""Form coordination core.

Each component owns its own state and is mutated only through its methods;
ApplicationForm wires them together.
"""

from jobform.form.attachment import AttachmentValidator
from jobform.form.controller import ApplicationForm
from jobform.form.fields import FieldValidationEngine, FormatCheck
from jobform.form.gate import ReadinessGate
from jobform.form.modal import FocusHost, ModalController, NullFocusHost
from jobform.form.skills import AddResult, SkillCollection
from jobform.form.submission import SubmissionController, SubmissionState
from jobform.form.toast import ToastScheduler

__all__ = [
    "AddResult",
    "ApplicationForm",
    "AttachmentValidator",
    "FieldValidationEngine",
    "FormatCheck",
    "FocusHost",
    "ModalController",
    "NullFocusHost",
    "ReadinessGate",
    "SkillCollection",
    "SubmissionController",
    "SubmissionState",
    "ToastScheduler",
]
