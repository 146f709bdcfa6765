"""Structured exception hierarchy for the application form.

Advisory validation problems (empty required fields, a malformed phone
number, a rejected attachment, a duplicate skill) are form state, never
exceptions. The types here cover programming and configuration mistakes.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "FormError",
    "UnknownFieldError",
    "UnknownSkillError",
    "ConfigurationError",
]


class FormError(Exception):
    """Base exception for all form errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.field = field
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if field:
            parts.insert(0, f"[{field}]")

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "field": self.field,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class UnknownFieldError(FormError):
    """A field identifier the form does not define."""

    def __init__(self, field_id: str, known: Optional[list[str]] = None) -> None:
        super().__init__(
            f"Unknown form field '{field_id}'",
            field=field_id,
            details={"known_fields": ", ".join(known)} if known else None,
        )


class UnknownSkillError(FormError):
    """A skill id that is not in the collection."""

    def __init__(self, skill_id: str) -> None:
        super().__init__(
            f"No skill with id '{skill_id}'",
            details={"skill_id": skill_id},
            suggestion="Skill ids are normalized; use normalize_skill_id() on display text",
        )


class ConfigurationError(FormError):
    """Invalid form settings.

    Raised when the settings file cannot be parsed or holds invalid values.
    """

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.config_path = config_path
        self.key = key

        details = kwargs.pop("details", {})
        if config_path:
            details["config_path"] = config_path
        if key:
            details["key"] = key

        super().__init__(message, details=details, **kwargs)
