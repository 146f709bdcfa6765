"""Derived submit-enabled flag."""

from __future__ import annotations

from jobform.form.attachment import AttachmentValidator
from jobform.form.fields import FieldValidationEngine
from jobform.logging import get_form_logger

logger = get_form_logger(__name__)


class ReadinessGate:
    """Open iff every required field has a value and the resume is valid.

    Format errors (e.g. a malformed phone number) are advisory and do not
    close the gate; only emptiness does.
    """

    def __init__(self, fields: FieldValidationEngine, attachment: AttachmentValidator) -> None:
        self._fields = fields
        self._attachment = attachment
        self._is_open = False

    @property
    def is_open(self) -> bool:
        """Result of the last recompute()."""
        return self._is_open

    def recompute(self) -> bool:
        is_open = self._fields.required_present() and self._attachment.is_valid
        if is_open != self._is_open:
            logger.debug("Gate %s", "opened" if is_open else "closed")
        self._is_open = is_open
        return is_open
