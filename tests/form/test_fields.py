"""Tests for FieldValidationEngine."""

from __future__ import annotations

import pytest

from jobform.constants import MSG_INVALID_PHONE, MSG_REQUIRED, PHONE_PATTERN
from jobform.errors import UnknownFieldError
from jobform.form import FieldValidationEngine, FormatCheck


@pytest.fixture
def engine() -> FieldValidationEngine:
    return FieldValidationEngine()


class TestBlurValidation:
    """Errors appear only when a field loses focus."""

    def test_typing_does_not_set_error(self, engine: FieldValidationEngine) -> None:
        """set_value never produces an error message."""
        engine.set_value("phone", "abc")

        assert engine.field("phone").error_message is None
        assert engine.errors() == {}

    def test_empty_required_field_on_blur(self, engine: FieldValidationEngine) -> None:
        """Blurring an empty required field shows the required message."""
        assert engine.validate_on_blur("full_name") is False
        assert engine.field("full_name").error_message == MSG_REQUIRED

    def test_blank_phone_on_blur_shows_no_error(self, engine: FieldValidationEngine) -> None:
        """A blank phone is not an error, but it still counts as missing."""
        assert engine.validate_on_blur("phone") is True

        assert engine.field("phone").error_message is None
        assert engine.required_present() is False
        assert engine.is_field_valid("phone") is False

    def test_clearing_phone_removes_format_error(self, engine: FieldValidationEngine) -> None:
        engine.set_value("phone", "abc")
        engine.validate_on_blur("phone")
        engine.set_value("phone", "")

        engine.validate_on_blur("phone")

        assert engine.field("phone").error_message is None

    def test_format_check_without_silent_flag(self) -> None:
        """A required field with a plain format check still reports emptiness."""
        engine = FieldValidationEngine(
            format_checks={"phone": FormatCheck(PHONE_PATTERN, MSG_INVALID_PHONE)}
        )

        engine.validate_on_blur("phone")

        assert engine.field("phone").error_message == MSG_REQUIRED

    @pytest.mark.parametrize("phone", ["abc", "12", "+1 (555) abc-1234", "1" * 30])
    def test_malformed_phone(self, engine: FieldValidationEngine, phone: str) -> None:
        """A malformed phone gets the format message."""
        engine.set_value("phone", phone)

        assert engine.validate_on_blur("phone") is False
        assert engine.field("phone").error_message == MSG_INVALID_PHONE

    @pytest.mark.parametrize("phone", ["+1 (555) 123-4567", "5551234", "  020 7946 0958  "])
    def test_valid_phone(self, engine: FieldValidationEngine, phone: str) -> None:
        """Valid numbers pass, surrounding whitespace is ignored."""
        engine.set_value("phone", phone)

        assert engine.validate_on_blur("phone") is True
        assert engine.field("phone").error_message is None

    def test_blur_clears_previous_error(self, engine: FieldValidationEngine) -> None:
        """Fixing a value and blurring again clears the message."""
        engine.validate_on_blur("email")
        engine.set_value("email", "ada@example.com")

        assert engine.validate_on_blur("email") is True
        assert "email" not in engine.errors()

    def test_optional_field_never_required(self, engine: FieldValidationEngine) -> None:
        """The cover letter may stay empty."""
        assert engine.validate_on_blur("cover") is True

    def test_unchecked_consent_on_blur(self, engine: FieldValidationEngine) -> None:
        """An unchecked required checkbox counts as empty."""
        engine.validate_on_blur("consent")

        assert engine.field("consent").error_message == MSG_REQUIRED


class TestPresence:
    """required_present() looks at emptiness only."""

    def fill(self, engine: FieldValidationEngine) -> None:
        engine.set_value("full_name", "Ada")
        engine.set_value("email", "ada@example.com")
        engine.set_value("phone", "5551234")
        engine.set_value("position", "Analyst")
        engine.set_value("consent", True)

    def test_all_present(self, engine: FieldValidationEngine) -> None:
        self.fill(engine)

        assert engine.required_present() is True

    def test_missing_one(self, engine: FieldValidationEngine) -> None:
        self.fill(engine)
        engine.set_value("position", "")

        assert engine.required_present() is False

    def test_format_error_does_not_affect_presence(self, engine: FieldValidationEngine) -> None:
        """A malformed phone is still present."""
        self.fill(engine)
        engine.set_value("phone", "abc")
        engine.validate_on_blur("phone")

        assert engine.required_present() is True
        assert engine.is_field_valid("phone") is False

    def test_whitespace_counts_as_value(self, engine: FieldValidationEngine) -> None:
        """Emptiness is checked on the raw value."""
        engine.set_value("full_name", "   ")

        assert engine.field("full_name").is_empty() is False

    def test_required_fields(self, engine: FieldValidationEngine) -> None:
        assert engine.required_fields == ["full_name", "email", "phone", "position", "consent"]


class TestEngineHousekeeping:
    def test_unknown_field(self, engine: FieldValidationEngine) -> None:
        """Unknown ids raise with the known fields listed."""
        with pytest.raises(UnknownFieldError) as exc_info:
            engine.set_value("salary", "lots")

        assert exc_info.value.field == "salary"
        assert "full_name" in exc_info.value.details["known_fields"]

    def test_reset(self, engine: FieldValidationEngine) -> None:
        """Reset blanks values and errors."""
        engine.set_value("consent", True)
        engine.set_value("phone", "abc")
        engine.validate_on_blur("phone")

        engine.reset()

        assert engine.value("consent") is False
        assert engine.value("phone") == ""
        assert engine.errors() == {}

    def test_on_change_called(self) -> None:
        calls: list[int] = []
        engine = FieldValidationEngine(on_change=lambda: calls.append(1))

        engine.set_value("email", "x")
        engine.validate_on_blur("email")
        engine.reset()

        assert len(calls) == 3
