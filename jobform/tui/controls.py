"""prompt_toolkit controls for the application form."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from prompt_toolkit.application.current import get_app
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout.controls import UIContent, UIControl
from prompt_toolkit.mouse_events import MouseEvent, MouseEventType

from jobform.models.skill import Skill, SkillPulse

RESUME_SUFFIXES = (".pdf", ".doc", ".docx")


def _has_focus(control: UIControl) -> bool:
    return get_app().layout.current_control is control


class ClickableButton(UIControl):
    """A button activated by click, Enter or Space."""

    def __init__(
        self,
        text: str | Callable[[], str],
        handler: Callable[[], None],
        style: str = "class:button",
        enabled: Callable[[], bool] | None = None,
    ):
        self.text = text
        self.handler = handler
        self.style = style
        self.enabled = enabled
        self._hover = False

    def _is_enabled(self) -> bool:
        return self.enabled is None or self.enabled()

    def _activate(self) -> None:
        if self._is_enabled():
            self.handler()

    def create_content(self, width: int, height: int) -> UIContent:
        text = self.text() if callable(self.text) else self.text
        if not self._is_enabled():
            style = "class:button.disabled"
        elif _has_focus(self):
            style = "class:button.focused"
        elif self._hover:
            style = "class:button.hover"
        else:
            style = self.style

        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return [(style, f" {text} ")]
            return []

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self._activate()
        elif mouse_event.event_type == MouseEventType.MOUSE_MOVE:
            self._hover = True
        else:
            self._hover = False

    def is_focusable(self) -> bool:
        return True

    def get_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("enter")
        @kb.add("space")
        def activate(event: Any) -> None:
            self._activate()

        return kb


class CheckboxControl(UIControl):
    """Single checkbox toggled by click, Enter or Space."""

    def __init__(
        self,
        label: str,
        checked: Callable[[], bool],
        on_toggle: Callable[[], None],
    ):
        self.label = label
        self.checked = checked
        self.on_toggle = on_toggle

    def create_content(self, width: int, height: int) -> UIContent:
        mark = "[x]" if self.checked() else "[ ]"
        style = "class:checkbox.focused" if _has_focus(self) else "class:checkbox"

        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return [(style, f"{mark} {self.label}")]
            return []

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.on_toggle()

    def is_focusable(self) -> bool:
        return True

    def get_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("enter")
        @kb.add("space")
        def toggle(event: Any) -> None:
            self.on_toggle()

        return kb


class SkillEntryControl(UIControl):
    """One skill tag: checkbox, text and a remove marker.

    Enter/Space go through the form's keyboard path; clicking the box
    toggles through the checkbox path; clicking the ✕ or pressing Delete
    removes the tag.
    """

    REMOVE_MARK = " ✕"

    def __init__(
        self,
        skill: Skill,
        on_key: Callable[[str], bool],
        on_toggle: Callable[[bool], None],
        on_remove: Callable[[], None],
    ):
        self.skill = skill
        self.on_key = on_key
        self.on_toggle = on_toggle
        self.on_remove = on_remove

    def _text(self) -> str:
        mark = "[x]" if self.skill.is_selected else "[ ]"
        return f"{mark} {self.skill.display_text}"

    def create_content(self, width: int, height: int) -> UIContent:
        style = "class:skill"
        if self.skill.is_selected:
            style += ".selected"
        if self.skill.pulse is SkillPulse.ADDED:
            style = "class:skill.added"
        elif self.skill.pulse is SkillPulse.DUPLICATE:
            style = "class:skill.duplicate"
        if _has_focus(self):
            style += " reverse"

        text = self._text()

        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return [(style, text), ("class:skill.remove", self.REMOVE_MARK)]
            return []

        return UIContent(get_line=get_line, line_count=1)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type != MouseEventType.MOUSE_UP:
            return
        if mouse_event.position.x >= len(self._text()):
            self.on_remove()
        else:
            self.on_toggle(not self.skill.is_selected)

    def is_focusable(self) -> bool:
        return True

    def get_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("enter")
        def enter(event: Any) -> None:
            self.on_key("enter")

        @kb.add("space")
        def space(event: Any) -> None:
            self.on_key("space")

        @kb.add("delete")
        @kb.add("backspace")
        def remove(event: Any) -> None:
            self.on_remove()

        return kb


class OverlayControl(UIControl):
    """Backdrop behind the modal; clicking it reports to ``on_click``."""

    def __init__(self, on_click: Callable[[], None]):
        self.on_click = on_click

    def create_content(self, width: int, height: int) -> UIContent:
        return UIContent(get_line=lambda i: [], line_count=height)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        if mouse_event.event_type == MouseEventType.MOUSE_UP:
            self.on_click()

    def is_focusable(self) -> bool:
        return False


class ResumeBrowserControl(UIControl):
    """Interactive file browser for picking a resume.

    All files are listed so that the form can explain why a file is
    rejected; resume-like suffixes get a distinct icon.
    """

    HEADER_ICON = "📂"
    RESUME_ICON = "📄"
    OTHER_ICON = "·"
    HEADER_OFFSET = 2

    def __init__(
        self,
        on_select: Callable[[Path], None],
        on_cancel: Callable[[], None],
        initial_path: Path | None = None,
    ):
        self.on_select = on_select
        self.on_cancel = on_cancel
        self.current_path = initial_path or Path.cwd()
        self.items: list[Path] = []
        self.selected_idx = 0
        self._hover_idx: int | None = None
        self._refresh_items()

    def _refresh_items(self) -> None:
        """Refresh the file/folder list."""
        self.items = []
        try:
            if self.current_path.parent != self.current_path:
                self.items.append(self.current_path.parent)

            dirs = []
            files = []
            for item in sorted(self.current_path.iterdir()):
                if item.name.startswith("."):
                    continue
                if item.is_dir():
                    dirs.append(item)
                elif item.is_file():
                    files.append(item)

            self.items.extend(dirs)
            self.items.extend(files)
        except PermissionError:
            pass
        self.selected_idx = 0

    def _display(self, item: Path) -> str:
        if item == self.current_path.parent:
            return "📁 .."
        if item.is_dir():
            return f"📁 {item.name}/"
        icon = self.RESUME_ICON if item.suffix.lower() in RESUME_SUFFIXES else self.OTHER_ICON
        return f"{icon} {item.name}"

    def create_content(self, width: int, height: int) -> UIContent:
        header = f"  {self.HEADER_ICON} {self.current_path}"

        def get_line(i: int) -> list[tuple[str, str]]:
            if i == 0:
                return [("class:file-browser.header", header[:width])]
            if i == 1:
                return [("class:file-browser.divider", "─" * max(width - 2, 0))]

            item_idx = i - self.HEADER_OFFSET
            if item_idx >= len(self.items):
                return []

            item = self.items[item_idx]
            display = self._display(item)[: max(width - 4, 0)]

            if item_idx == self.selected_idx:
                return [("class:file-browser.selected", f" ▸ {display}")]
            if item_idx == self._hover_idx:
                return [("class:file-browser.hover", f"   {display}")]
            if item.is_dir():
                return [("class:file-browser.dir", f"   {display}")]
            return [("class:file-browser.file", f"   {display}")]

        return UIContent(get_line=get_line, line_count=len(self.items) + self.HEADER_OFFSET)

    def mouse_handler(self, mouse_event: MouseEvent) -> None:
        item_idx = mouse_event.position.y - self.HEADER_OFFSET
        if 0 <= item_idx < len(self.items):
            if mouse_event.event_type == MouseEventType.MOUSE_UP:
                self.selected_idx = item_idx
                self._activate_selected()
            elif mouse_event.event_type == MouseEventType.MOUSE_MOVE:
                self._hover_idx = item_idx
        else:
            self._hover_idx = None

    def _activate_selected(self) -> None:
        if 0 <= self.selected_idx < len(self.items):
            item = self.items[self.selected_idx]
            if item.is_dir():
                self.current_path = item
                self._refresh_items()
            else:
                self.on_select(item)

    def is_focusable(self) -> bool:
        return True

    def get_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("up")
        def move_up(event: Any) -> None:
            if self.items:
                self.selected_idx = (self.selected_idx - 1) % len(self.items)

        @kb.add("down")
        def move_down(event: Any) -> None:
            if self.items:
                self.selected_idx = (self.selected_idx + 1) % len(self.items)

        @kb.add("enter")
        def select(event: Any) -> None:
            self._activate_selected()

        @kb.add("escape")
        def cancel(event: Any) -> None:
            self.on_cancel()

        @kb.add("backspace")
        def go_up(event: Any) -> None:
            if self.current_path.parent != self.current_path:
                self.current_path = self.current_path.parent
                self._refresh_items()

        return kb
