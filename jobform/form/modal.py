"""Single modal dialog with focus containment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from jobform.logging import get_form_logger
from jobform.models.element import UIElement

logger = get_form_logger(__name__)


class FocusHost(Protocol):
    """Focus capability the presentation surface provides to the modal."""

    def modal_elements(self) -> Sequence[UIElement]:
        """Focus candidates inside the modal, in document order."""
        ...

    def focused(self) -> UIElement | None:
        ...

    def focus(self, element: UIElement) -> None:
        ...

    def can_focus(self, element: UIElement) -> bool:
        """Whether the element is still attached and able to take focus."""
        ...


class NullFocusHost:
    """Focus host for a form without a presentation surface."""

    def modal_elements(self) -> Sequence[UIElement]:
        return ()

    def focused(self) -> UIElement | None:
        return None

    def focus(self, element: UIElement) -> None:
        pass

    def can_focus(self, element: UIElement) -> bool:
        return False


@dataclass
class ModalState:
    """Visibility and the element to give focus back to on close."""

    is_visible: bool = False
    prior_focus: UIElement | None = None


class ModalController:
    """Shows and hides the confirmation dialog.

    While the dialog is open, Tab and Shift+Tab wrap around inside it and
    Escape closes it. The element that had focus before opening gets it
    back on close.

    Key names follow prompt_toolkit: "tab", "s-tab", "escape".
    """

    def __init__(
        self,
        host: FocusHost,
        *,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._host = host
        self._state = ModalState()
        self.on_change = on_change

    @property
    def is_visible(self) -> bool:
        return self._state.is_visible

    @property
    def prior_focus(self) -> UIElement | None:
        return self._state.prior_focus

    @property
    def scroll_locked(self) -> bool:
        """The page behind an open modal must not scroll."""
        return self._state.is_visible

    def focusable_elements(self) -> list[UIElement]:
        """Current Tab order inside the modal."""
        return [el for el in self._host.modal_elements() if el.is_tabbable()]

    def open(self) -> None:
        """Show the modal and focus its first element. No-op if already open."""
        if self._state.is_visible:
            return
        self._state.prior_focus = self._host.focused()
        self._state.is_visible = True

        focusable = self.focusable_elements()
        if focusable:
            self._host.focus(focusable[0])
        logger.debug("Modal opened")
        self._notify()

    def close(self) -> None:
        """Hide the modal and restore prior focus. No-op if already hidden."""
        if not self._state.is_visible:
            return
        self._state.is_visible = False

        prior = self._state.prior_focus
        self._state.prior_focus = None
        if prior is not None and self._host.can_focus(prior):
            self._host.focus(prior)
        logger.debug("Modal closed")
        self._notify()

    def handle_key(self, key: str) -> bool:
        """Route a key press while the modal may be open.

        Returns:
            True if the default handling of the key must be suppressed.
        """
        if not self._state.is_visible:
            return False

        if key == "escape":
            self.close()
            return True

        if key not in ("tab", "s-tab"):
            return False

        focusable = self.focusable_elements()
        if not focusable:
            return False

        first, last = focusable[0], focusable[-1]
        current = self._host.focused()
        if key == "s-tab" and current is first:
            self._host.focus(last)
            return True
        if key == "tab" and current is last:
            self._host.focus(first)
            return True
        return False

    def handle_click(self, target: UIElement) -> bool:
        """Close on a click on the backdrop or on a close target."""
        if self._state.is_visible and (target.overlay or target.close_target):
            self.close()
            return True
        return False

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
