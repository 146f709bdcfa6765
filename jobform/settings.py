"""Form settings loader.

Reads project-specific form configuration from .jobform.yaml in the
project root. This lets a deployment tune timings, the attachment size
limit and the predefined skills without touching code.

Example .jobform.yaml:
    form:
      toast_duration_ms: 3500
      submit_delay_ms: 900
      max_resume_bytes: 5242880
      cover_max_length: 1000
      resume_dir: ./resumes
      preset_skills:
        - Python
        - name: SQL
          selected: false
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from jobform.constants import (
    DEFAULT_COVER_MAX_LENGTH,
    DEFAULT_SUBMIT_DELAY_MS,
    DEFAULT_TOAST_DURATION_MS,
    MAX_RESUME_BYTES,
    SKILL_ADDED_PULSE_MS,
    SKILL_DUPLICATE_PULSE_MS,
)
from jobform.errors import ConfigurationError

SETTINGS_FILE = ".jobform.yaml"

_INT_KEYS = (
    "toast_duration_ms",
    "submit_delay_ms",
    "skill_added_pulse_ms",
    "skill_duplicate_pulse_ms",
    "max_resume_bytes",
    "cover_max_length",
)


@dataclass
class FormSettings:
    """Form configuration settings."""

    # Auto-dismiss delay for the confirmation toast
    toast_duration_ms: int = DEFAULT_TOAST_DURATION_MS

    # Simulated network round-trip for a submission
    submit_delay_ms: int = DEFAULT_SUBMIT_DELAY_MS

    # Visual acknowledgement pulses on skill entries
    skill_added_pulse_ms: int = SKILL_ADDED_PULSE_MS
    skill_duplicate_pulse_ms: int = SKILL_DUPLICATE_PULSE_MS

    max_resume_bytes: int = MAX_RESUME_BYTES
    cover_max_length: int = DEFAULT_COVER_MAX_LENGTH

    # (display name, initially selected) pairs shown before any user input
    preset_skills: list[tuple[str, bool]] = field(default_factory=list)

    # Where the TUI resume browser starts
    resume_dir: str = "."

    def __post_init__(self) -> None:
        for key in _INT_KEYS:
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"'{key}' must be an integer, got {value!r}", key=key
                )
            if value < 0:
                raise ConfigurationError(f"'{key}' must not be negative", key=key)
        if self.max_resume_bytes == 0:
            raise ConfigurationError(
                "'max_resume_bytes' must be positive", key="max_resume_bytes"
            )

    @classmethod
    def load(cls, project_root: Path | None = None) -> "FormSettings":
        """Load settings from .jobform.yaml in project root.

        Args:
            project_root: Project root directory. Defaults to cwd.

        Returns:
            FormSettings with values from config file or defaults.

        Raises:
            ConfigurationError: If the file is not valid YAML or holds
                invalid values.
        """
        root = project_root or Path.cwd()
        config_path = root / SETTINGS_FILE

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Settings file is not valid YAML",
                config_path=str(config_path),
                details={"cause": str(e)},
            ) from e

        if not isinstance(config, dict):
            raise ConfigurationError(
                "Settings file must contain a mapping", config_path=str(config_path)
            )

        form_config = config.get("form", {}) or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(form_config) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown settings: {', '.join(unknown)}",
                config_path=str(config_path),
                suggestion=f"Valid keys are: {', '.join(sorted(known))}",
            )

        kwargs: dict[str, Any] = dict(form_config)
        if "preset_skills" in kwargs:
            kwargs["preset_skills"] = _parse_preset_skills(
                kwargs["preset_skills"], str(config_path)
            )
        try:
            return cls(**kwargs)
        except ConfigurationError as e:
            e.details["config_path"] = str(config_path)
            raise

    def get_resume_dir(self, project_root: Path | None = None) -> Path:
        """Get absolute path to the resume browser start directory."""
        root = project_root or Path.cwd()
        return (root / self.resume_dir).resolve()


def _parse_preset_skills(raw: Any, config_path: str) -> list[tuple[str, bool]]:
    """Accept plain names or {name, selected} mappings."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigurationError(
            "'preset_skills' must be a list", config_path=config_path, key="preset_skills"
        )

    presets: list[tuple[str, bool]] = []
    for item in raw:
        if isinstance(item, str):
            presets.append((item, True))
        elif isinstance(item, dict) and isinstance(item.get("name"), str):
            presets.append((item["name"], bool(item.get("selected", True))))
        else:
            raise ConfigurationError(
                f"Invalid preset skill entry: {item!r}",
                config_path=config_path,
                key="preset_skills",
            )
    return presets


# Global settings instance (loaded on first access)
_settings: FormSettings | None = None


def get_settings(reload: bool = False) -> FormSettings:
    """Get the global form settings.

    Args:
        reload: Force reload from config file.

    Returns:
        FormSettings instance.
    """
    global _settings
    if _settings is None or reload:
        _settings = FormSettings.load()
    return _settings
