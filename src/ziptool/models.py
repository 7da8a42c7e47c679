from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class PackReport(BaseModel):
    """Outcome of a successful :func:`ziptool.packer.pack` call."""

    archive: Path
    source: Path
    entries: list[str] = Field(default_factory=list)
    skipped: list[Path] = Field(
        default_factory=list,
        description="Paths left out because their directory was already packed or they are the archive itself",
    )

    @property
    def entry_count(self) -> int:
        return len(self.entries)


class UnpackReport(BaseModel):
    """Outcome of a successful :func:`ziptool.unpacker.unpack` call."""

    archive: Path
    destination: Path
    entries: list[str] = Field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.entries)
