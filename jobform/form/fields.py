"""Required-field presence and format validation."""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Mapping, NamedTuple

from jobform.constants import FIELD_SPECS, MSG_INVALID_PHONE, MSG_REQUIRED, PHONE_PATTERN
from jobform.errors import UnknownFieldError
from jobform.logging import get_form_logger
from jobform.models.field_state import FieldSpec, FieldState

logger = get_form_logger(__name__)

class FormatCheck(NamedTuple):
    """Pattern a non-empty value must match when the field is blurred.

    With ``silent_when_empty`` an empty value clears the field's error on
    blur instead of reporting it as required; emptiness still closes the
    submission gate.
    """

    pattern: re.Pattern[str]
    message: str
    silent_when_empty: bool = False


DEFAULT_FORMAT_CHECKS: dict[str, FormatCheck] = {
    "phone": FormatCheck(PHONE_PATTERN, MSG_INVALID_PHONE, silent_when_empty=True),
}


class FieldValidationEngine:
    """Tracks every field's value and advisory error.

    Values are pushed in with set_value() on each keystroke; error messages
    are only recomputed by validate_on_blur(). Both notify ``on_change`` so
    the owner can recompute the submission gate.
    """

    def __init__(
        self,
        specs: Iterable[FieldSpec] = FIELD_SPECS,
        *,
        format_checks: Mapping[str, FormatCheck] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._specs: dict[str, FieldSpec] = {spec.name: spec for spec in specs}
        self._fields: dict[str, FieldState] = {
            name: FieldState.blank(spec) for name, spec in self._specs.items()
        }
        self._format_checks = dict(
            DEFAULT_FORMAT_CHECKS if format_checks is None else format_checks
        )
        self.on_change = on_change

    @property
    def specs(self) -> list[FieldSpec]:
        return list(self._specs.values())

    @property
    def required_fields(self) -> list[str]:
        return [name for name, spec in self._specs.items() if spec.required]

    def field(self, field_id: str) -> FieldState:
        """Get the state of one field."""
        try:
            return self._fields[field_id]
        except KeyError:
            raise UnknownFieldError(field_id, list(self._specs)) from None

    def value(self, field_id: str) -> Any:
        return self.field(field_id).value

    def values(self) -> dict[str, Any]:
        return {name: state.value for name, state in self._fields.items()}

    def errors(self) -> dict[str, str]:
        """Current advisory errors keyed by field."""
        return {
            name: state.error_message
            for name, state in self._fields.items()
            if state.error_message
        }

    def set_value(self, field_id: str, value: Any) -> None:
        """Record a new value without touching the field's error."""
        state = self.field(field_id)
        state.value = value
        self._notify()

    def validate_on_blur(self, field_id: str) -> bool:
        """Validate a field when it loses focus.

        An empty required field gets the required message, unless its format
        check is silent when empty (phone). A non-empty value that fails its
        format check gets that check's message. Otherwise the error is
        cleared.

        Returns:
            True if the field has no error afterwards.
        """
        state = self.field(field_id)
        state.set_error(self._check(field_id, state))
        if state.error_message:
            logger.debug("Field %s invalid: %s", field_id, state.error_message)
        self._notify()
        return state.is_valid

    def is_field_valid(self, field_id: str) -> bool:
        """A field is valid when present (if required) and its last blur passed."""
        state = self.field(field_id)
        if state.is_required and state.is_empty():
            return False
        return state.is_valid

    def required_present(self) -> bool:
        """Check that every required field holds a value."""
        return all(
            not self._fields[name].is_empty() for name in self.required_fields
        )

    def reset(self) -> None:
        """Return every field to its initial blank state."""
        for name, state in self._fields.items():
            state.reset(self._specs[name])
        self._notify()

    def _check(self, field_id: str, state: FieldState) -> str | None:
        check = self._format_checks.get(field_id)
        if state.is_empty():
            if not state.is_required or (check is not None and check.silent_when_empty):
                return None
            return MSG_REQUIRED

        if check is not None and not check.pattern.match(str(state.value).strip()):
            return check.message
        return None

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
