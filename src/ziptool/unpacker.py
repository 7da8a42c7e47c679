"""Extract a ZIP archive into a directory.

Every entry name goes through :func:`ziptool.paths.decode_entry_name` before
anything is written for it.  The first unsafe name aborts the whole
extraction; entries after it are never touched.
"""

from __future__ import annotations

import logging
import os
import zipfile
import zlib
from pathlib import Path

from .errors import (
    ArchiveIOError,
    ArchiveReadError,
    DirectoryCreationError,
)
from .models import UnpackReport
from .paths import decode_entry_name
from .settings import resolve_buffer_size
from .streams import copy_stream

logger = logging.getLogger(__name__)


def ensure_directory(path: Path) -> None:
    """Create ``path`` with its parents unless it already is a directory."""

    if path.is_dir():
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationError(
            f"Failed to create the directory: {path}", path=path
        ) from exc


def _open_archive(archive: Path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(archive, "r")
    except zipfile.BadZipFile as exc:
        raise ArchiveReadError(f"{archive} is not a valid ZIP archive: {exc}") from exc
    except OSError as exc:
        raise ArchiveIOError(f"Unable to open archive {archive}: {exc}", path=archive) from exc


def _extract_file(
    zip_file: zipfile.ZipFile, info: zipfile.ZipInfo, target: Path, buffer: bytearray
) -> int:
    try:
        source = zip_file.open(info, "r")
    except (zipfile.BadZipFile, NotImplementedError, RuntimeError) as exc:
        raise ArchiveReadError(f"Unable to read entry {info.filename!r}: {exc}") from exc

    with source:
        try:
            handle = target.open("wb")
        except OSError as exc:
            raise ArchiveIOError(f"Unable to write {target}: {exc}", path=target) from exc
        with handle:
            try:
                return copy_stream(source, handle, buffer)
            except (zipfile.BadZipFile, EOFError, zlib.error) as exc:
                raise ArchiveReadError(
                    f"Entry {info.filename!r} is corrupt: {exc}"
                ) from exc
            except OSError as exc:
                raise ArchiveIOError(f"Unable to write {target}: {exc}", path=target) from exc


def unpack(
    archive_path: str | os.PathLike[str],
    dest_dir: str | os.PathLike[str],
    *,
    buffer_size: int | None = None,
) -> UnpackReport:
    """Extract every entry of ``archive_path`` under ``dest_dir``.

    Existing files that share a name with an entry are overwritten; nothing
    else in ``dest_dir`` is modified.  On failure, entries extracted so far
    stay on disk.  Names are checked lexically only, so a symlink that already
    exists under ``dest_dir`` is followed when an entry is written through it.

    Raises:
        UnsafeEntryNameError: an entry name is absolute or contains ``..``.
        ArchiveReadError: the archive or one of its entries is malformed.
        DirectoryCreationError: a destination directory could not be created.
        ArchiveIOError: any other read or write failure.
    """

    archive = Path(archive_path)
    destination = Path(dest_dir)
    buffer = bytearray(resolve_buffer_size(buffer_size))
    report = UnpackReport(archive=archive, destination=destination)

    zip_file = _open_archive(archive)
    with zip_file:
        ensure_directory(destination)
        for info in zip_file.infolist():
            relative = decode_entry_name(info.filename)
            target = destination / relative

            if info.is_dir():
                ensure_directory(target)
                report.entries.append(info.filename)
                logger.debug("Created directory %s", target)
                continue

            ensure_directory(target.parent)
            size = _extract_file(zip_file, info, target, buffer)
            report.entries.append(info.filename)
            logger.debug("Extracted %s (%d bytes)", target, size)

    logger.info("Extracted %d entries from %s into %s", report.entry_count, archive, destination)
    return report


__all__ = ["ensure_directory", "unpack"]
