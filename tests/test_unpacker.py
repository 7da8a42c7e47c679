from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from ziptool.errors import (
    ArchiveIOError,
    ArchiveReadError,
    DirectoryCreationError,
    UnsafeEntryNameError,
)
from ziptool.unpacker import ensure_directory, unpack


def _make_archive(path: Path, entries: list[tuple[str, bytes]]) -> Path:
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as z:
        for name, data in entries:
            z.writestr(name, data)
    return path


def test_unpack_files_and_directories(tmp_path: Path) -> None:
    archive = _make_archive(
        tmp_path / "in.zip",
        [("a.txt", b"hi"), ("empty/", b""), ("nested/deep/b.txt", b"yo")],
    )
    dest = tmp_path / "out"

    report = unpack(archive, dest)

    assert (dest / "a.txt").read_bytes() == b"hi"
    assert (dest / "empty").is_dir()
    assert list((dest / "empty").iterdir()) == []
    assert (dest / "nested" / "deep" / "b.txt").read_bytes() == b"yo"
    assert report.entries == ["a.txt", "empty/", "nested/deep/b.txt"]
    assert report.destination == dest


def test_unpack_creates_missing_destination(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "in.zip", [])
    dest = tmp_path / "fresh" / "target"

    report = unpack(archive, dest)

    assert dest.is_dir()
    assert report.entry_count == 0


@pytest.mark.parametrize(
    ("name", "reason"),
    [("../evil.txt", "parent"), ("a/../../evil.txt", "parent"), ("/etc/passwd", "absolute")],
)
def test_unsafe_entry_is_rejected(tmp_path: Path, name: str, reason: str) -> None:
    archive = _make_archive(tmp_path / "evil.zip", [(name, b"bad")])
    dest = tmp_path / "out"

    with pytest.raises(UnsafeEntryNameError) as excinfo:
        unpack(archive, dest)

    assert excinfo.value.reason == reason
    assert excinfo.value.name == name
    assert not (tmp_path / "evil.txt").exists()


def test_unsafe_entry_stops_processing(tmp_path: Path) -> None:
    archive = _make_archive(
        tmp_path / "mixed.zip",
        [
            ("one.txt", b"1"),
            ("two.txt", b"2"),
            ("../escape.txt", b"bad"),
            ("four.txt", b"4"),
        ],
    )
    dest = tmp_path / "out"

    with pytest.raises(UnsafeEntryNameError):
        unpack(archive, dest)

    assert not (tmp_path / "escape.txt").exists()
    assert not (dest / "four.txt").exists()


def test_lexically_unsafe_entry_is_rejected_even_if_it_stays_inside(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "in.zip", [("a/b/../c.txt", b"c")])
    dest = tmp_path / "out"

    with pytest.raises(UnsafeEntryNameError):
        unpack(archive, dest)

    assert not (dest / "a" / "c.txt").exists()


def test_reextraction_overwrites_and_keeps_unrelated_files(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "in.zip", [("a.txt", b"fresh"), ("dir/", b"")])
    dest = tmp_path / "out"
    dest.mkdir()
    (dest / "a.txt").write_bytes(b"stale contents that are longer")
    (dest / "unrelated.txt").write_bytes(b"keep")

    unpack(archive, dest)
    unpack(archive, dest)

    assert (dest / "a.txt").read_bytes() == b"fresh"
    assert (dest / "unrelated.txt").read_bytes() == b"keep"
    assert (dest / "dir").is_dir()


def test_file_blocking_parent_directory_raises(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "in.zip", [("blocker/inner.txt", b"x")])
    dest = tmp_path / "out"
    dest.mkdir()
    (dest / "blocker").write_bytes(b"i am a file")

    with pytest.raises(DirectoryCreationError) as excinfo:
        unpack(archive, dest)

    assert excinfo.value.path == str(dest / "blocker")
    assert isinstance(excinfo.value, ArchiveIOError)


def test_file_blocking_directory_entry_raises(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "in.zip", [("blocker/", b"")])
    dest = tmp_path / "out"
    dest.mkdir()
    (dest / "blocker").write_bytes(b"i am a file")

    with pytest.raises(DirectoryCreationError, match="Failed to create the directory"):
        unpack(archive, dest)


def test_directory_blocking_file_entry_raises(tmp_path: Path) -> None:
    archive = _make_archive(tmp_path / "in.zip", [("taken", b"x")])
    dest = tmp_path / "out"
    (dest / "taken").mkdir(parents=True)

    with pytest.raises(ArchiveIOError, match="Unable to write"):
        unpack(archive, dest)


def test_not_a_zip_raises_read_error(tmp_path: Path) -> None:
    archive = tmp_path / "garbage.zip"
    archive.write_bytes(b"this is not a zip archive")

    with pytest.raises(ArchiveReadError):
        unpack(archive, tmp_path / "out")


def test_missing_archive_raises_io_error(tmp_path: Path) -> None:
    with pytest.raises(ArchiveIOError) as excinfo:
        unpack(tmp_path / "missing.zip", tmp_path / "out")

    assert excinfo.value.path == str(tmp_path / "missing.zip")


def test_corrupted_entry_raises_read_error(tmp_path: Path) -> None:
    archive = tmp_path / "corrupt.zip"
    with zipfile.ZipFile(archive, "w", zipfile.ZIP_STORED) as z:
        z.writestr("data.txt", b"hello world")
    archive.write_bytes(archive.read_bytes().replace(b"hello world", b"jello world"))

    with pytest.raises(ArchiveReadError, match="data.txt"):
        unpack(archive, tmp_path / "out")


def test_small_buffer_extracts_full_contents(tmp_path: Path) -> None:
    payload = bytes(range(256)) * 50
    archive = _make_archive(tmp_path / "in.zip", [("blob.bin", payload)])
    dest = tmp_path / "out"

    unpack(archive, dest, buffer_size=5)

    assert (dest / "blob.bin").read_bytes() == payload


def test_ensure_directory_accepts_existing_directory(tmp_path: Path) -> None:
    ensure_directory(tmp_path)
    ensure_directory(tmp_path / "a" / "b")

    assert (tmp_path / "a" / "b").is_dir()


def test_corrupted_deflate_stream_raises_read_error(tmp_path: Path) -> None:
    archive = tmp_path / "corrupt.zip"
    payload = bytes(range(256)) * 64
    with zipfile.ZipFile(archive, "w", zipfile.ZIP_DEFLATED) as z:
        z.writestr("data.txt", payload)
        offset = z.getinfo("data.txt").header_offset
    raw = bytearray(archive.read_bytes())
    # 30-byte local header, then the entry name, then the compressed data.
    start = offset + 30 + len("data.txt") + 2
    for index in range(start, start + 20):
        raw[index] ^= 0xFF
    archive.write_bytes(bytes(raw))

    with pytest.raises(ArchiveReadError, match="data.txt"):
        unpack(archive, tmp_path / "out")
