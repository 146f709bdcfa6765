"""Focus host backed by a prompt_toolkit layout."""

from __future__ import annotations

from typing import Sequence

from prompt_toolkit.layout import Layout, Window

from jobform.models.element import UIElement


class LayoutFocusHost:
    """Maps form elements to prompt_toolkit windows.

    Windows are registered as they are built. Modal windows are registered
    in document order so the modal's Tab order follows the dialog layout.
    """

    def __init__(self) -> None:
        self.layout: Layout | None = None
        self._windows: dict[UIElement, Window] = {}
        self._elements: dict[Window, UIElement] = {}
        self._modal: list[UIElement] = []

    def attach(self, layout: Layout) -> None:
        self.layout = layout

    def register(self, element: UIElement, window: Window, *, modal: bool = False) -> None:
        self._windows[element] = window
        self._elements[window] = element
        if modal:
            self._modal.append(element)

    def unregister(self, element: UIElement) -> None:
        window = self._windows.pop(element, None)
        if window is not None:
            self._elements.pop(window, None)
        if element in self._modal:
            self._modal.remove(element)

    def window_for(self, element: UIElement) -> Window | None:
        return self._windows.get(element)

    def element_for(self, window: Window) -> UIElement | None:
        return self._elements.get(window)

    def modal_elements(self) -> Sequence[UIElement]:
        return list(self._modal)

    def focused(self) -> UIElement | None:
        if self.layout is None:
            return None
        return self._elements.get(self.layout.current_window)

    def focus(self, element: UIElement) -> None:
        window = self._windows.get(element)
        if self.layout is not None and window is not None:
            self.layout.focus(window)

    def can_focus(self, element: UIElement) -> bool:
        window = self._windows.get(element)
        if self.layout is None or window is None or element.disabled:
            return False
        return window in self.layout.find_all_windows() and window.content.is_focusable()
