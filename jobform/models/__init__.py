"""UI-agnostic state for the application form.

This package provides plain dataclasses that can be used and tested
without prompt_toolkit.
"""

from jobform.models.attachment import AttachmentState, SelectedFile
from jobform.models.element import UIElement
from jobform.models.field_state import FieldSpec, FieldState
from jobform.models.skill import Skill, SkillPulse, normalize_skill_id

__all__ = [
    "AttachmentState",
    "FieldSpec",
    "FieldState",
    "SelectedFile",
    "Skill",
    "SkillPulse",
    "UIElement",
    "normalize_skill_id",
]
