"""Field definition and per-field validation state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class FieldSpec:
    """Static definition of one form field.

    Attributes:
        name: Field identifier (e.g., "full_name", "consent")
        label: Display label
        required: Whether an empty value closes the submission gate
        kind: "text" for free text, "checkbox" for a boolean toggle
        multiline: Whether the text input spans several lines
    """

    name: str
    label: str
    required: bool = False
    kind: Literal["text", "checkbox"] = "text"
    multiline: bool = False

    def blank_value(self) -> Any:
        return False if self.kind == "checkbox" else ""


@dataclass
class FieldState:
    """Current value and validation result of a single field.

    Attributes:
        name: The field identifier
        value: Current value (str for text fields, bool for checkboxes)
        is_required: Whether this field must be non-empty
        is_valid: Result of the last blur validation
        error_message: Advisory error shown next to the field, if any
    """

    name: str
    value: Any = ""
    is_required: bool = False
    is_valid: bool = True
    error_message: str | None = None

    @classmethod
    def blank(cls, spec: FieldSpec) -> "FieldState":
        return cls(name=spec.name, value=spec.blank_value(), is_required=spec.required)

    def is_empty(self) -> bool:
        """Check whether the field holds no value.

        Text is compared raw, so whitespace counts as a value.
        """
        if isinstance(self.value, bool):
            return not self.value
        return self.value is None or self.value == ""

    def set_error(self, message: str | None) -> None:
        self.error_message = message or None
        self.is_valid = self.error_message is None

    def reset(self, spec: FieldSpec) -> None:
        """Return to the initial blank state."""
        self.value = spec.blank_value()
        self.is_valid = True
        self.error_message = None

    def __str__(self) -> str:
        marker = f" ! {self.error_message}" if self.error_message else ""
        return f"{self.name}={self.value!r}{marker}"
