"""Ordered, deduplicated collection of user skill tags."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, Iterator

from jobform.constants import SKILL_ADDED_PULSE_MS, SKILL_DUPLICATE_PULSE_MS
from jobform.errors import UnknownSkillError
from jobform.logging import get_form_logger
from jobform.models.skill import Skill, SkillPulse, normalize_skill_id
from jobform.scheduling import Scheduler, TaskSlot

logger = get_form_logger(__name__)

# Keys that toggle a focused skill entry
TOGGLE_KEYS = frozenset({"enter", "space", " ", "c-m"})


class AddResult(str, Enum):
    """Outcome of SkillCollection.add()."""

    ADDED = "added"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"


class SkillCollection:
    """Skill tags in insertion order, unique by normalized id.

    The collection also owns the text of the add-skill input (the draft) so
    that a completed add can clear it.

    Example:
        skills = SkillCollection(scheduler)
        skills.add("Node.js!!")   # AddResult.ADDED, id "node-js"
        skills.add("node js")     # AddResult.DUPLICATE, pulses the entry
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        added_pulse_ms: int = SKILL_ADDED_PULSE_MS,
        duplicate_pulse_ms: int = SKILL_DUPLICATE_PULSE_MS,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self.added_pulse_ms = added_pulse_ms
        self.duplicate_pulse_ms = duplicate_pulse_ms
        self.on_change = on_change
        # dicts keep insertion order
        self._skills: dict[str, Skill] = {}
        self._pulse_slots: dict[str, TaskSlot] = {}
        self.draft = ""

    def __len__(self) -> int:
        return len(self._skills)

    def __iter__(self) -> Iterator[Skill]:
        return iter(list(self._skills.values()))

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills

    def get(self, skill_id: str) -> Skill:
        try:
            return self._skills[skill_id]
        except KeyError:
            raise UnknownSkillError(skill_id) from None

    def ids(self) -> list[str]:
        return list(self._skills)

    def selected(self) -> list[Skill]:
        return [skill for skill in self._skills.values() if skill.is_selected]

    def seed(self, presets: Iterable[tuple[str, bool]]) -> None:
        """Insert predefined skills without pulses or draft handling.

        Presets whose id collides with an existing entry are skipped.
        """
        for text, selected in presets:
            skill = Skill.from_text(text, selected=selected)
            if skill.normalized_id and skill.normalized_id not in self._skills:
                self._skills[skill.normalized_id] = skill
        self._notify()

    def set_draft(self, text: str) -> None:
        self.draft = text

    def add(self, raw_text: str | None = None) -> AddResult:
        """Add a skill from raw text (or the current draft).

        Empty text is ignored and the draft is left alone. A collision pulses
        the existing entry; a new skill is appended selected and pulsed. In
        both cases the draft is cleared.
        """
        text = (self.draft if raw_text is None else raw_text).strip()
        skill_id = normalize_skill_id(text)
        if not skill_id:
            return AddResult.IGNORED

        existing = self._skills.get(skill_id)
        if existing is not None:
            logger.debug("Duplicate skill %r matches %s", text, skill_id)
            self._pulse(existing, SkillPulse.DUPLICATE, self.duplicate_pulse_ms)
            self.draft = ""
            self._notify()
            return AddResult.DUPLICATE

        skill = Skill.from_text(text, selected=True)
        self._skills[skill_id] = skill
        self._pulse(skill, SkillPulse.ADDED, self.added_pulse_ms)
        self.draft = ""
        logger.info("Skill added: %s", skill_id)
        self._notify()
        return AddResult.ADDED

    def remove(self, skill_id: str) -> None:
        """Delete a skill. Removing an absent id does nothing."""
        skill = self._skills.pop(skill_id, None)
        if skill is None:
            return
        slot = self._pulse_slots.pop(skill_id, None)
        if slot is not None:
            slot.cancel()
        logger.info("Skill removed: %s", skill_id)
        self._notify()

    def toggle_selection(self, skill_id: str) -> bool:
        """Flip a skill's selection and return the new state."""
        skill = self.get(skill_id)
        skill.is_selected = not skill.is_selected
        self._notify()
        return skill.is_selected

    def set_selection(self, skill_id: str, selected: bool) -> None:
        """Apply the state of the entry's checkbox control."""
        skill = self.get(skill_id)
        if skill.is_selected != selected:
            self.toggle_selection(skill_id)

    def handle_key(self, skill_id: str, key: str) -> bool:
        """Keyboard activation on a focused entry.

        Returns:
            True if the key toggled the entry and should not be processed
            further.
        """
        self.get(skill_id)
        if key not in TOGGLE_KEYS:
            return False
        self.toggle_selection(skill_id)
        return True

    def reset_selection(self) -> None:
        """Restore every skill's selection to its default."""
        for skill in self._skills.values():
            skill.is_selected = skill.default_selected
        self._notify()

    def _pulse(self, skill: Skill, pulse: SkillPulse, duration_ms: int) -> None:
        skill.pulse = pulse
        slot = self._pulse_slots.setdefault(skill.normalized_id, TaskSlot())

        def clear() -> None:
            skill.pulse = None
            slot.clear()
            self._notify()

        slot.replace(self._scheduler.call_later(duration_ms, clear))

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
