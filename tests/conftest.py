from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

# Ensure the repository-local ``src`` directory is importable when the project is
# not installed as a package.
SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(autouse=True)
def clean_ziptool_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("ZIPTOOL_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def make_symlink():
    """Create a symlink or skip when the platform does not allow it."""

    def _make(link: Path, target: Path) -> Path:
        try:
            os.symlink(target, link, target_is_directory=target.is_dir())
        except (OSError, NotImplementedError) as exc:
            pytest.skip(f"symlinks unavailable: {exc}")
        return link

    return _make


def _snapshot(root: Path) -> dict[str, bytes | None]:
    tree: dict[str, bytes | None] = {}
    for path in sorted(root.rglob("*")):
        key = path.relative_to(root).as_posix()
        tree[key] = None if path.is_dir() else path.read_bytes()
    return tree


@pytest.fixture
def scenario_tree(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("hi", encoding="utf-8")
    (src / "sub").mkdir()
    (src / "sub2").mkdir()
    (src / "sub2" / "b.txt").write_text("yo", encoding="utf-8")
    return src


@pytest.fixture
def snapshot_tree():
    """Map every path under a root to its bytes, or ``None`` for directories."""

    return _snapshot
