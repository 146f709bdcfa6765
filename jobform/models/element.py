"""Abstract presentation element used for focus and click routing."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class UIElement:
    """Something the presentation surface can focus or click.

    Identity is by object, like a live node: two elements with the same id
    are still different elements.

    Attributes:
        id: Element identifier
        tab_index: Explicit tab order marker; -1 removes it from Tab order
        disabled: Disabled elements cannot take focus
        overlay: Backdrop region of a modal
        close_target: Activating this element closes the enclosing modal
    """

    id: str
    tab_index: int | None = None
    disabled: bool = False
    overlay: bool = False
    close_target: bool = False

    def is_tabbable(self) -> bool:
        return not self.disabled and self.tab_index != -1
