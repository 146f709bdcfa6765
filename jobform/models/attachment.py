"""Selected file description and attachment verdict."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

# mimetypes on some platforms lacks the OOXML mapping
mimetypes.add_type(
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx"
)
mimetypes.add_type("application/msword", ".doc")


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user, as reported by the file-selection surface.

    Attributes:
        name: File name without directories
        size: Size in bytes
        media_type: Declared media type (empty if unknown)
    """

    name: str
    size: int
    media_type: str = ""

    @classmethod
    def from_path(cls, path: Path) -> "SelectedFile":
        """Describe a file on disk, guessing its media type from the suffix."""
        media_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, size=path.stat().st_size, media_type=media_type or "")


@dataclass
class AttachmentState:
    """Verdict for the currently selected resume.

    Attributes:
        file_name: Name of the accepted file, if any
        size_bytes: Size of the accepted file
        media_type: Media type of the accepted file
        is_valid: Whether an acceptable file is selected
        error_message: Rejection reason shown to the user, if any
        summary: Human-readable "<name> — <size> MB" line for an accepted file
    """

    file_name: str = ""
    size_bytes: int = 0
    media_type: str = ""
    is_valid: bool = False
    error_message: str | None = None
    summary: str = ""

    @classmethod
    def empty(cls) -> "AttachmentState":
        return cls()

    @classmethod
    def rejected(cls, message: str) -> "AttachmentState":
        return cls(error_message=message)

    @classmethod
    def accepted(cls, file: SelectedFile) -> "AttachmentState":
        size_mb = file.size / 1024 / 1024
        return cls(
            file_name=file.name,
            size_bytes=file.size,
            media_type=file.media_type,
            is_valid=True,
            summary=f"{file.name} — {size_mb:.2f} MB",
        )
