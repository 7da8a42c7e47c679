from __future__ import annotations

import os
from typing import Literal

UnsafeReason = Literal["absolute", "parent"]


class ZipToolError(Exception):
    """Base error for ziptool."""


class ArchiveIOError(ZipToolError):
    def __init__(self, message: str, *, path: str | os.PathLike[str] | None = None) -> None:
        super().__init__(message)
        self.path = os.fspath(path) if path is not None else None


class DirectoryCreationError(ArchiveIOError):
    """Raised when a destination directory is missing and cannot be created."""


class ArchiveReadError(ZipToolError):
    pass


class ArchiveWriteError(ZipToolError):
    pass


class UnsafeEntryNameError(ZipToolError):
    """Raised when an entry name would write outside the extraction root."""

    def __init__(self, message: str, *, name: str, reason: UnsafeReason) -> None:
        super().__init__(message)
        self.name = name
        self.reason = reason
