from __future__ import annotations

from pathlib import Path

import pytest


def _write(p: Path, size: int) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(b"x" * size)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """root/a (1000), root/b (2000) with root/b/c (500)."""
    root = tmp_path / "root"
    _write(root / "a" / "one.bin", 1000)
    _write(root / "b" / "two.bin", 2000)
    _write(root / "b" / "c" / "three.bin", 500)
    return root
