"""Conversions between filesystem paths and archive entry names.

Entry names always use ``/`` as the separator and mark directories with a
trailing ``/``.  Decoding doubles as the safety gate for extraction: a name
that is absolute or carries a ``..`` component is refused before anything is
written to disk.  The ``..`` check is lexical, so ``a/../b`` is refused even
though it would resolve inside the root.
"""

from __future__ import annotations

import os

from .errors import UnsafeEntryNameError

ENTRY_SEPARATOR = "/"
PARENT_COMPONENT = ".."


def encode_entry_name(
    path: str | os.PathLike[str], base: str | os.PathLike[str], is_directory: bool
) -> str:
    """Return the entry name for ``path`` relative to ``base``.

    ``path`` must be ``base`` itself or one of its descendants; the name is
    the remainder of ``path`` after ``base`` and one separator.
    """

    path_text = os.fspath(path)
    base_text = os.fspath(base)
    cut = len(base_text) if base_text.endswith(os.sep) else len(base_text) + 1
    relative = path_text[min(cut, len(path_text)) :]
    relative = relative.replace(os.sep, ENTRY_SEPARATOR)
    if os.altsep:
        relative = relative.replace(os.altsep, ENTRY_SEPARATOR)
    return relative + (ENTRY_SEPARATOR if is_directory else "")


def decode_entry_name(name: str) -> str:
    """Return the relative filesystem path for entry ``name``.

    Raises :class:`UnsafeEntryNameError` when the decoded path is absolute or
    contains a parent directory component.
    """

    trimmed = name[:-1] if name.endswith(ENTRY_SEPARATOR) else name
    relative = trimmed.replace(ENTRY_SEPARATOR, os.sep)

    if os.path.isabs(relative):
        raise UnsafeEntryNameError(
            f"Illegal entry name refers to an absolute path: {trimmed}",
            name=name,
            reason="absolute",
        )
    if PARENT_COMPONENT in relative.split(os.sep):
        raise UnsafeEntryNameError(
            f"Illegal entry name contains parent directory components: {trimmed}",
            name=name,
            reason="parent",
        )
    return relative


__all__ = [
    "ENTRY_SEPARATOR",
    "PARENT_COMPONENT",
    "decode_entry_name",
    "encode_entry_name",
]
