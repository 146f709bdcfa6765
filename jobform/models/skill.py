"""Skill tag with normalized identity and selection state."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_skill_id(text: str) -> str:
    """Canonical key for a skill's display text.

    Lowercases, collapses every run of characters outside [a-z0-9] into a
    single hyphen and strips hyphens from both ends, so "Node.js!!" becomes
    "node-js". Normalizing an already-normalized id returns it unchanged.
    """
    return _NON_ALNUM.sub("-", text.lower()).strip("-")


class SkillPulse(str, Enum):
    """Transient highlight on a skill entry."""

    ADDED = "added"  # Just inserted
    DUPLICATE = "duplicate"  # An insert collided with this entry


@dataclass
class Skill:
    """A user-visible skill tag.

    Attributes:
        display_text: Text as entered (trimmed)
        normalized_id: Unique key derived from display_text
        is_selected: Whether the tag is checked
        default_selected: Selection restored when the form is reset
        pulse: Current transient highlight, if any
    """

    display_text: str
    normalized_id: str
    is_selected: bool = True
    default_selected: bool = True
    pulse: SkillPulse | None = None

    @classmethod
    def from_text(cls, text: str, selected: bool = True) -> "Skill":
        text = text.strip()
        return cls(
            display_text=text,
            normalized_id=normalize_skill_id(text),
            is_selected=selected,
            default_selected=selected,
        )

    @property
    def element_id(self) -> str:
        """Identifier used by the presentation surface."""
        return f"skill-{self.normalized_id}"
