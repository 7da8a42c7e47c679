from __future__ import annotations

import time
import zipfile
from typing import IO

# MS-DOS "directory" attribute bit.
_DOS_DIRECTORY_ATTR = 0x10
# ZipInfo.create_system value for MS-DOS; readers apply their own default modes.
_CREATE_SYSTEM_DOS = 0


def copy_stream(source: IO[bytes], target: IO[bytes], buffer: bytearray) -> int:
    """Copy ``source`` into ``target`` through ``buffer`` and return the byte count."""

    view = memoryview(buffer)
    total = 0
    while True:
        count = source.readinto(view)
        if not count:
            break
        target.write(view[:count])
        total += count
    return total


def new_entry(name: str, *, is_directory: bool = False) -> zipfile.ZipInfo:
    """Build a :class:`zipfile.ZipInfo` that carries no permission bits."""

    info = zipfile.ZipInfo(name, date_time=time.localtime(time.time())[:6])
    info.create_system = _CREATE_SYSTEM_DOS
    if is_directory:
        info.compress_type = zipfile.ZIP_STORED
        info.external_attr = _DOS_DIRECTORY_ATTR
    else:
        info.compress_type = zipfile.ZIP_DEFLATED
    return info
