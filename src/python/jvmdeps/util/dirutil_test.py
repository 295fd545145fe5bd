# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

from pathlib import Path

import pytest

from jvmdeps.util.dirutil import safe_delete, safe_mkdir, safe_open, touch


def test_safe_mkdir_is_idempotent(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"
    safe_mkdir(target)
    safe_mkdir(target)
    assert target.is_dir()


def test_safe_open_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "x" / "y" / "cache.txt"
    with safe_open(target, "a") as f:
        f.write("line\n")
    assert target.read_text() == "line\n"


def test_safe_delete(tmp_path: Path) -> None:
    target = tmp_path / "gone.txt"
    safe_delete(target)
    touch(target)
    assert target.exists()
    safe_delete(target)
    assert not target.exists()


def test_safe_delete_propagates_other_errors(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        safe_delete(tmp_path)
