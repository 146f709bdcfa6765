"""Full-screen prompt_toolkit front end for the application form.

This is a thin adapter: it turns key presses, clicks and focus changes
into ApplicationForm calls and renders the form's derived state. All
validation, gating and timing lives in jobform.form.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from prompt_toolkit import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import HTML, FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.bindings.focus import focus_next, focus_previous
from prompt_toolkit.layout import (
    BufferControl,
    ConditionalContainer,
    DynamicContainer,
    Float,
    FloatContainer,
    FormattedTextControl,
    HSplit,
    Layout,
    ScrollablePane,
    VSplit,
    Window,
)
from prompt_toolkit.layout.dimension import Dimension as D
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from jobform.errors import ConfigurationError
from jobform.form import ApplicationForm
from jobform.logging import get_form_logger, setup_logging
from jobform.models import FieldSpec, SelectedFile, UIElement
from jobform.scheduling import Scheduler
from jobform.settings import FormSettings, get_settings
from jobform.tui.controls import (
    CheckboxControl,
    ClickableButton,
    OverlayControl,
    ResumeBrowserControl,
    SkillEntryControl,
)
from jobform.tui.focus import LayoutFocusHost

logger = get_form_logger(__name__)


STYLE = Style.from_dict({
    "title": "bold bg:#005f87 #ffffff",
    "section-header": "bold underline #00af00",
    "field-label": "#d7d700",
    "field-label.required": "#d7d700 bold",
    "field-input": "bg:#1e1e1e #ffffff",
    "field-input.invalid": "bg:#3a1515 #ff6666",
    "field-help": "#808080 italic",
    "error": "bold #ff6666",
    "success": "bold #00d75f",
    "status-bar": "bg:#005f87 #ffffff",
    "button": "bg:#404040 #ffffff",
    "button.focused": "bg:#0087af #ffffff bold",
    "button.hover": "bg:#005f87 #ffffff bold",
    "button.disabled": "bg:#262626 #6c6c6c",
    "checkbox": "#d0d0d0",
    "checkbox.focused": "bg:#303030 #ffffff bold",
    "skill": "#a0a0a0",
    "skill.selected": "#00d7ff",
    "skill.added": "bg:#005f00 #ffffff bold",
    "skill.duplicate": "bg:#875f00 #ffffff bold",
    "skill.remove": "#ff6666",
    "overlay": "bg:#000000",
    "dialog": "bg:#1c1c1c",
    "dialog.body": "bg:#262626 #ffffff",
    "toast": "bg:#005f00 #ffffff",
    "file-browser": "bg:#262626",
    "file-browser.header": "bold #00d7ff",
    "file-browser.divider": "#404040",
    "file-browser.dir": "#87afff",
    "file-browser.file": "#d0d0d0",
    "file-browser.selected": "bg:#005f87 #ffffff bold",
    "file-browser.hover": "bg:#303030 #ffffff",
})


class FormApp:
    """Job application form in the terminal.

    Tab/Shift+Tab move between controls, Enter/Space activate buttons and
    checkboxes, Ctrl+S submits, Ctrl+Q quits.
    """

    def __init__(
        self,
        settings: FormSettings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.focus_host = LayoutFocusHost()
        self.form = ApplicationForm(
            self.settings,
            scheduler=scheduler,
            focus_host=self.focus_host,
            clear_file_selection=self._clear_resume_selection,
        )
        self.form.on_change = self._on_form_changed
        self.app: Application | None = None
        self.selected_resume: Path | None = None
        self.file_browser_active = False
        self.file_browser: ResumeBrowserControl | None = None

        self._syncing = False
        self._last_focused_field: str | None = None
        self._buffers: dict[str, Buffer] = {}
        self._field_windows: dict[Window, str] = {}
        self._skill_rows: dict[str, tuple[UIElement, Window]] = {}

        self.modal_close = UIElement("modal-close", close_target=True)
        self.modal_done = UIElement("modal-done", close_target=True)
        self.modal_overlay = UIElement("modal-overlay", overlay=True)
        self.resume_element = UIElement("resume")
        self.submit_element = UIElement("submit")

        self.skill_buffer = Buffer(
            name="skill-draft",
            multiline=False,
            accept_handler=self._accept_skill,
            on_text_changed=self._on_draft_changed,
        )
        self._browser_window = Window(style="class:file-browser", height=D(min=10, max=20))
        self.layout = self._create_layout()
        self.focus_host.attach(self.layout)

    def run(self) -> None:
        """Run the full-screen application."""
        self.app = Application(
            layout=self.layout,
            key_bindings=self._create_bindings(),
            style=STYLE,
            full_screen=True,
            mouse_support=True,
            before_render=self._track_focus,
        )
        self.app.run()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _create_layout(self) -> Layout:
        """Create the application layout."""
        form_pane = ScrollablePane(HSplit(self._build_form_content()), show_scrollbar=True)

        title_bar = Window(
            content=FormattedTextControl(HTML("<b>Job Application</b>")),
            style="class:title",
            height=1,
        )
        status_bar = Window(
            content=FormattedTextControl(self._get_status_bar),
            style="class:status-bar",
            height=1,
        )

        modal_visible = Condition(lambda: self.form.modal.is_visible)
        toast_visible = Condition(lambda: self.form.toast.is_visible)
        browser_visible = Condition(lambda: self.file_browser_active)

        overlay = Window(
            content=OverlayControl(lambda: self.form.click(self.modal_overlay)),
            style="class:overlay",
        )

        return Layout(
            FloatContainer(
                content=HSplit([title_bar, form_pane, status_bar]),
                floats=[
                    Float(
                        ConditionalContainer(overlay, filter=modal_visible),
                        left=0, right=0, top=0, bottom=0,
                    ),
                    Float(ConditionalContainer(self._build_modal(), filter=modal_visible)),
                    Float(
                        ConditionalContainer(self._build_toast(), filter=toast_visible),
                        bottom=1, right=2,
                    ),
                    Float(ConditionalContainer(self._build_browser(), filter=browser_visible)),
                ],
            ),
            focused_element=self._buffers["full_name"],
        )

    def _build_form_content(self) -> list:
        content: list = [Window(height=1)]
        for spec in self.form.fields.specs:
            content.extend(self._create_field_rows(spec))
            if spec.name == "position":
                content.extend(self._create_resume_rows())
                content.extend(self._create_skill_rows())

        submit = Window(
            content=ClickableButton(
                lambda: "Submitting…" if self.form.submission.in_progress else "Submit application",
                self.form.submit,
                enabled=lambda: self.form.submit_enabled,
            ),
            height=1,
            dont_extend_width=True,
        )
        self.focus_host.register(self.submit_element, submit)
        message = Window(
            content=FormattedTextControl(
                lambda: [("class:success", self.form.submission.message or "")]
            ),
            height=1,
        )
        content.extend([submit, Window(height=1), message])
        return content

    def _create_field_rows(self, spec: FieldSpec) -> list:
        if spec.kind == "checkbox":
            window = Window(
                content=CheckboxControl(
                    spec.label + (" *" if spec.required else ""),
                    checked=lambda: bool(self.form.fields.value(spec.name)),
                    on_toggle=lambda: self.form.set_value(
                        spec.name, not self.form.fields.value(spec.name)
                    ),
                ),
                height=1,
            )
            rows: list = [window]
        else:
            buffer = Buffer(
                name=spec.name,
                multiline=spec.multiline,
                on_text_changed=lambda buf: self._on_buffer_changed(spec.name, buf),
            )
            self._buffers[spec.name] = buffer
            window = Window(
                BufferControl(buffer=buffer),
                height=4 if spec.multiline else 1,
                style=lambda: self._input_style(spec.name),
            )
            label_style = "class:field-label.required" if spec.required else "class:field-label"
            rows = [
                Window(
                    FormattedTextControl([(label_style, spec.label + (" *" if spec.required else ""))]),
                    height=1,
                ),
                window,
            ]
            if spec.name == "cover":
                rows.append(
                    Window(
                        FormattedTextControl(lambda: [("class:field-help", self.form.cover_count_text)]),
                        height=1,
                    )
                )

        self._field_windows[window] = spec.name
        self.focus_host.register(UIElement(spec.name), window)
        rows.append(
            Window(
                FormattedTextControl(
                    lambda: [("class:error", self.form.fields.field(spec.name).error_message or "")]
                ),
                height=1,
            )
        )
        return rows

    def _create_resume_rows(self) -> list:
        choose = Window(
            content=ClickableButton("Choose resume…", self._show_file_browser),
            height=1,
            dont_extend_width=True,
        )
        clear = Window(
            content=ClickableButton("Clear", lambda: self._select_resume(None)),
            height=1,
            dont_extend_width=True,
        )
        self.focus_host.register(self.resume_element, choose)

        def resume_line() -> list[tuple[str, str]]:
            state = self.form.attachment.state
            if state.error_message:
                return [("class:error", state.error_message)]
            return [("class:field-help", state.summary)]

        return [
            Window(FormattedTextControl([("class:field-label.required", "Resume (PDF/DOC, max 5MB) *")]), height=1),
            VSplit([choose, Window(width=1), clear]),
            Window(FormattedTextControl(resume_line), height=1),
        ]

    def _create_skill_rows(self) -> list:
        draft = Window(BufferControl(buffer=self.skill_buffer), height=1, style="class:field-input")
        add = Window(
            content=ClickableButton("Add", self._add_skill),
            height=1,
            dont_extend_width=True,
        )
        self.focus_host.register(UIElement("add-text"), draft)
        return [
            Window(FormattedTextControl([("class:field-label", "Skills")]), height=1),
            VSplit([draft, Window(width=1), add]),
            DynamicContainer(self._skills_container),
            Window(height=1),
        ]

    def _skills_container(self) -> HSplit:
        """Rows for the current skills, reusing windows across renders."""
        current = set(self.form.skills.ids())
        for skill_id in list(self._skill_rows):
            if skill_id not in current:
                element, _ = self._skill_rows.pop(skill_id)
                self.focus_host.unregister(element)

        rows = []
        for skill in self.form.skills:
            if skill.normalized_id not in self._skill_rows:
                skill_id = skill.normalized_id
                window = Window(
                    SkillEntryControl(
                        skill,
                        on_key=lambda key, sid=skill_id: self.form.skill_key(sid, key),
                        on_toggle=lambda checked, sid=skill_id: self.form.skills.set_selection(sid, checked),
                        on_remove=lambda sid=skill_id: self._remove_skill(sid),
                    ),
                    height=1,
                )
                element = UIElement(skill.element_id)
                self.focus_host.register(element, window)
                self._skill_rows[skill_id] = (element, window)
            rows.append(self._skill_rows[skill.normalized_id][1])

        if not rows:
            rows.append(Window(FormattedTextControl([("class:field-help", "  No skills yet")]), height=1))
        return HSplit(rows)

    def _build_modal(self) -> Frame:
        close = Window(
            content=ClickableButton("✕", lambda: self.form.click(self.modal_close)),
            height=1,
            dont_extend_width=True,
        )
        done = Window(
            content=ClickableButton("Done", lambda: self.form.click(self.modal_done)),
            height=1,
            dont_extend_width=True,
        )
        self.focus_host.register(self.modal_close, close, modal=True)
        self.focus_host.register(self.modal_done, done, modal=True)

        body = HSplit([
            VSplit([Window(), close]),
            Window(
                FormattedTextControl("  Application received!\n\n  We will be in touch soon."),
                style="class:dialog.body",
                height=3,
            ),
            Window(height=1),
            VSplit([Window(), done, Window()]),
        ])
        return Frame(body, title="Success", style="class:dialog", width=D(min=40, max=50))

    def _build_toast(self) -> VSplit:
        close = Window(
            content=ClickableButton("✕", self.form.close_toast),
            height=1,
            dont_extend_width=True,
        )
        message = Window(
            FormattedTextControl(lambda: [("class:toast", f" {self.form.toast.message} ")]),
            height=1,
            dont_extend_width=True,
        )
        return VSplit([message, close], style="class:toast")

    def _build_browser(self) -> Frame:
        return Frame(
            self._browser_window,
            title="📂 Select resume  (Esc to cancel)",
            width=D(min=50, max=80),
        )

    def _input_style(self, field_name: str) -> str:
        if self.form.fields.field(field_name).error_message:
            return "class:field-input.invalid"
        return "class:field-input"

    def _get_status_bar(self) -> FormattedText:
        gate = "ready to submit" if self.form.submit_enabled else "complete required fields"
        shortcuts = "Tab:Nav  Space:Toggle  Ctrl+S:Submit  Ctrl+Q:Quit"
        return FormattedText([("class:status-bar", f"  {gate}  │  {shortcuts}  ")])

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _on_buffer_changed(self, field_name: str, buffer: Buffer) -> None:
        if not self._syncing:
            self.form.set_value(field_name, buffer.text)

    def _on_draft_changed(self, buffer: Buffer) -> None:
        if not self._syncing:
            self.form.set_skill_draft(buffer.text)

    def _on_form_changed(self) -> None:
        """Pull state back into the buffers (after a reset) and redraw."""
        self._syncing = True
        try:
            for name, buffer in self._buffers.items():
                value = self.form.fields.value(name) or ""
                if buffer.text != value:
                    buffer.text = value
            if self.skill_buffer.text != self.form.skills.draft:
                self.skill_buffer.text = self.form.skills.draft
        finally:
            self._syncing = False
        if not self.form.attachment.is_valid:
            self.selected_resume = None
        if self.app:
            self.app.invalidate()

    def _track_focus(self, _app: Any = None) -> None:
        """Blur-validate the field that just lost focus."""
        field_name = self._field_windows.get(self.layout.current_window)
        previous = self._last_focused_field
        self._last_focused_field = field_name
        if previous is not None and previous != field_name:
            self.form.blur(previous)

    def _accept_skill(self, buffer: Buffer) -> bool:
        self._add_skill()
        # Keep whatever the form left in the draft
        return True

    def _add_skill(self) -> None:
        self.form.add_skill()

    def _remove_skill(self, skill_id: str) -> None:
        self.form.remove_skill(skill_id)
        self.layout.focus(self.skill_buffer)

    def _show_file_browser(self) -> None:
        self.file_browser = ResumeBrowserControl(
            on_select=self._select_resume,
            on_cancel=self._close_file_browser,
            initial_path=self.settings.get_resume_dir(),
        )
        self._browser_window.content = self.file_browser
        self.file_browser_active = True
        self.layout.focus(self._browser_window)

    def _close_file_browser(self) -> None:
        self.file_browser_active = False
        self.file_browser = None
        resume = self.focus_host.window_for(self.resume_element)
        if resume is not None:
            self.layout.focus(resume)

    def _select_resume(self, path: Path | None) -> None:
        selected = None
        if path is not None:
            try:
                selected = SelectedFile.from_path(path)
            except OSError as e:
                logger.warning("Cannot read resume %s: %s", path, e)
        self.selected_resume = path if selected is not None else None
        self.form.select_file(selected)
        if self.file_browser_active:
            self._close_file_browser()

    def _clear_resume_selection(self) -> None:
        self.selected_resume = None

    def _create_bindings(self) -> KeyBindings:
        """Create key bindings."""
        kb = KeyBindings()

        @kb.add("tab")
        def next_(event: Any) -> None:
            if not self.form.handle_key("tab"):
                focus_next(event)

        @kb.add("s-tab")
        def prev_(event: Any) -> None:
            if not self.form.handle_key("s-tab"):
                focus_previous(event)

        @kb.add("escape")
        def escape_(event: Any) -> None:
            self.form.handle_key("escape")

        @kb.add("c-s")
        def submit_(event: Any) -> None:
            self.form.submit()

        @kb.add("c-q")
        @kb.add("c-c")
        def quit_(event: Any) -> None:
            event.app.exit()

        return kb


def run_form(settings: FormSettings | None = None) -> None:
    """Run the TUI application form."""
    FormApp(settings).run()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the TUI application."""
    parser = argparse.ArgumentParser(description="Job application form")
    parser.add_argument(
        "--project-root",
        type=Path,
        help="Directory holding .jobform.yaml (default: current directory)",
    )
    parser.add_argument("--log-file", help="Write logs to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Log records as JSON")
    args = parser.parse_args(argv)

    if args.log_file:
        setup_logging(
            verbose=args.verbose,
            json_format=args.json_logs,
            log_file=args.log_file,
            console=False,
        )

    try:
        settings = FormSettings.load(args.project_root)
    except ConfigurationError as e:
        sys.exit(f"Configuration error: {e}")

    run_form(settings)


if __name__ == "__main__":
    main()
