"""Resume attachment policy check."""

from __future__ import annotations

from typing import Callable, Collection

from jobform.constants import (
    ALLOWED_RESUME_TYPES,
    MAX_RESUME_BYTES,
    MSG_BAD_RESUME_TYPE,
    MSG_RESUME_TOO_LARGE,
)
from jobform.logging import get_form_logger
from jobform.models.attachment import AttachmentState, SelectedFile

logger = get_form_logger(__name__)


class AttachmentValidator:
    """Evaluates the selected resume against the type and size policy.

    The validator owns the current verdict; the rest of the form reads it
    through ``state`` / ``is_valid``.

    Args:
        max_bytes: Largest accepted size (inclusive)
        allowed_types: Accepted media types
        clear_selection: Called to make the file-selection surface drop a
            rejected file
        on_change: Called after every evaluation or reset
    """

    def __init__(
        self,
        *,
        max_bytes: int = MAX_RESUME_BYTES,
        allowed_types: Collection[str] = ALLOWED_RESUME_TYPES,
        clear_selection: Callable[[], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.max_bytes = max_bytes
        self.allowed_types = frozenset(allowed_types)
        self.clear_selection = clear_selection
        self.on_change = on_change
        self._state = AttachmentState.empty()

    @property
    def state(self) -> AttachmentState:
        return self._state

    @property
    def is_valid(self) -> bool:
        return self._state.is_valid

    def evaluate(self, file: SelectedFile | None) -> AttachmentState:
        """Evaluate a newly selected file (None when the picker was cleared).

        A missing file is invalid without a message. A wrong type or an
        oversized file is invalid with a message and the selection is
        cleared on the surface.
        """
        if file is None:
            self._state = AttachmentState.empty()
        elif file.media_type not in self.allowed_types:
            self._reject(file, MSG_BAD_RESUME_TYPE)
        elif file.size > self.max_bytes:
            self._reject(file, MSG_RESUME_TOO_LARGE)
        else:
            self._state = AttachmentState.accepted(file)
            logger.debug("Resume accepted: %s", self._state.summary)

        self._notify()
        return self._state

    def reset(self) -> None:
        """Forget the current selection (form reset)."""
        self._state = AttachmentState.empty()
        self._notify()

    def _reject(self, file: SelectedFile, message: str) -> None:
        logger.warning(
            "Resume rejected: %s",
            message,
            extra={"file_name": file.name, "size": file.size, "media_type": file.media_type},
        )
        self._state = AttachmentState.rejected(message)
        if self.clear_selection is not None:
            self.clear_selection()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
