"""Pack directory trees into ZIP archives and extract them safely."""

from .errors import (
    ArchiveIOError,
    ArchiveReadError,
    ArchiveWriteError,
    DirectoryCreationError,
    UnsafeEntryNameError,
    ZipToolError,
)
from .models import PackReport, UnpackReport
from .packer import pack
from .unpacker import unpack

__version__ = "1.0.0"

__all__ = [
    "ArchiveIOError",
    "ArchiveReadError",
    "ArchiveWriteError",
    "DirectoryCreationError",
    "PackReport",
    "UnpackReport",
    "UnsafeEntryNameError",
    "ZipToolError",
    "__version__",
    "pack",
    "unpack",
]
