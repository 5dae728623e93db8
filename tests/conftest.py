"""Shared fixtures: a small directory tree used across the test suite."""
from __future__ import annotations

from pathlib import Path

import pytest

SUPPORT_FILES = {
    "a.txt": "this\nhas\nsome\ntext\nxyz\n",
    "b": "1 duck\n2 duck\n3 goose\n4 duck\n",
    "c": "nothing to see here\n",
    "d1/a1": "first nested file\n",
    "d1/b1.txt": "abc\nxyz\nxyz again\n",
    "d1/c1": "another nested file\n",
    "d1/d2/a2": "deepest\n",
    "d1/d2/b2": "deeper still\n",
    "d1/d2/c2.txt": "xyz\n",
}


@pytest.fixture
def support(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """
    Build the support tree under tmp_path and chdir into tmp_path.

    Returns the relative root "support", so listed paths read like
    "support/d1/b1.txt".
    """
    root = tmp_path / "support"
    for rel, content in SUPPORT_FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    monkeypatch.chdir(tmp_path)
    return "support"
