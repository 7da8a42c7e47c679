"""Pack a directory tree into a ZIP archive.

The tree is walked breadth-first with an explicit frontier instead of
recursion.  Symbolic links are followed, so a link back to an ancestor would
loop forever; every directory is therefore expanded at most once, keyed by its
resolved path.
"""

from __future__ import annotations

import logging
import os
import zipfile
from collections import deque
from pathlib import Path

from .errors import ArchiveIOError, ArchiveWriteError
from .models import PackReport
from .paths import encode_entry_name
from .settings import resolve_buffer_size
from .streams import copy_stream, new_entry

logger = logging.getLogger(__name__)


def _canonical(path: str) -> Path:
    try:
        return Path(path).resolve()
    except (OSError, RuntimeError) as exc:
        raise ArchiveIOError(f"Unable to resolve {path}: {exc}", path=path) from exc


def _list_children(path: str) -> list[str] | None:
    """Return the sorted children of ``path`` or ``None`` when it is not a directory."""

    try:
        with os.scandir(path) as entries:
            names = sorted(entry.name for entry in entries)
    except NotADirectoryError:
        return None
    except OSError as exc:
        raise ArchiveIOError(f"Unable to list {path}: {exc}", path=path) from exc
    return [os.path.join(path, name) for name in names]


def _write_directory_entry(archive: zipfile.ZipFile, name: str) -> None:
    try:
        archive.writestr(new_entry(name, is_directory=True), b"")
    except ValueError as exc:
        raise ArchiveWriteError(f"Archive writer rejected entry {name!r}: {exc}") from exc


def _write_file_entry(
    archive: zipfile.ZipFile, path: str, name: str, buffer: bytearray
) -> int:
    try:
        source = open(path, "rb")
    except OSError as exc:
        raise ArchiveIOError(f"Unable to read {path}: {exc}", path=path) from exc

    with source:
        info = new_entry(name)
        try:
            info.file_size = os.fstat(source.fileno()).st_size
            with archive.open(info, "w") as target:
                return copy_stream(source, target, buffer)
        except ValueError as exc:
            raise ArchiveWriteError(f"Archive writer rejected entry {name!r}: {exc}") from exc
        except OSError as exc:
            raise ArchiveIOError(f"Failed to add {path} to the archive: {exc}", path=path) from exc


def pack(
    source_dir: str | os.PathLike[str],
    archive_path: str | os.PathLike[str],
    *,
    buffer_size: int | None = None,
) -> PackReport:
    """Write the contents of ``source_dir`` to a new ZIP archive at ``archive_path``.

    The source directory itself is not part of any entry name; its children
    appear at the top level of the archive.  Only empty directories get an
    explicit ``name/`` entry.  An existing file at ``archive_path`` is
    overwritten.

    Raises:
        ArchiveIOError: the source is missing or unreadable, or the archive
            cannot be written.
        ArchiveWriteError: the ZIP writer rejected an entry.
    """

    base = os.fspath(source_dir)
    archive = Path(archive_path)
    if not os.path.exists(base):
        raise ArchiveIOError(f"Source directory does not exist: {base}", path=base)
    if not os.path.isdir(base):
        raise ArchiveIOError(f"Source is not a directory: {base}", path=base)

    buffer = bytearray(resolve_buffer_size(buffer_size))
    archive_identity = archive.resolve()
    report = PackReport(archive=archive, source=Path(base))

    frontier: deque[str] = deque([base])
    visited: set[Path] = set()

    try:
        zip_file = zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED)
    except OSError as exc:
        raise ArchiveIOError(f"Unable to create archive {archive}: {exc}", path=archive) from exc

    try:
        with zip_file:
            while frontier:
                current = frontier.popleft()
                identity = _canonical(current)
                if identity in visited or identity == archive_identity:
                    logger.debug("Skipping %s (already packed as %s)", current, identity)
                    report.skipped.append(Path(current))
                    continue

                children = _list_children(current)
                if children is not None:
                    visited.add(identity)
                    frontier.extend(children)
                    if not children and current != base:
                        name = encode_entry_name(current, base, True)
                        _write_directory_entry(zip_file, name)
                        report.entries.append(name)
                        logger.debug("Added directory entry %s", name)
                    continue

                name = encode_entry_name(current, base, False)
                size = _write_file_entry(zip_file, current, name, buffer)
                report.entries.append(name)
                logger.debug("Added %s (%d bytes)", name, size)
    except OSError as exc:
        raise ArchiveIOError(f"Unable to write archive {archive}: {exc}", path=archive) from exc

    logger.info("Packed %d entries from %s into %s", report.entry_count, base, archive)
    return report


__all__ = ["pack"]
