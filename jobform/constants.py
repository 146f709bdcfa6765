"""Shared constants for the application form.

Centralizes field definitions, attachment policy and user-facing messages
used across the form core and the TUI.
"""

from __future__ import annotations

import re

from jobform.models.field_state import FieldSpec

# Form fields in display order
FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec("full_name", "Full name", required=True),
    FieldSpec("email", "Email", required=True),
    FieldSpec("phone", "Phone", required=True),
    FieldSpec("position", "Position", required=True),
    FieldSpec("cover", "Cover letter", multiline=True),
    FieldSpec("consent", "I agree to the processing of my data", required=True, kind="checkbox"),
)

# Fields that gate submission
REQUIRED_FIELDS = frozenset(spec.name for spec in FIELD_SPECS if spec.required)

# Optional leading +, then 7-25 of digits, hyphen, whitespace, parentheses
PHONE_PATTERN = re.compile(r"^\+?[0-9\-\s()]{7,25}$")

# =============================================================================
# Attachment policy
# =============================================================================

ALLOWED_RESUME_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

MAX_RESUME_BYTES = 5 * 1024 * 1024

# =============================================================================
# Messages
# =============================================================================

MSG_REQUIRED = "This field is required"
MSG_INVALID_PHONE = "Enter a valid phone number"
MSG_BAD_RESUME_TYPE = "Please upload a PDF or Word document."
MSG_RESUME_TOO_LARGE = "File is too large (max 5MB)."
MSG_SUBMIT_SUCCESS = "Thanks! Your application has been received. We will be in touch."
MSG_SUBMIT_TOAST = "Application submitted — we will be in touch."

# =============================================================================
# Timing defaults (milliseconds)
# =============================================================================

DEFAULT_TOAST_DURATION_MS = 3500
DEFAULT_SUBMIT_DELAY_MS = 900
SKILL_ADDED_PULSE_MS = 250
SKILL_DUPLICATE_PULSE_MS = 220

DEFAULT_COVER_MAX_LENGTH = 1000
