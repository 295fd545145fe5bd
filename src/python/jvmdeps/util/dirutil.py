# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import errno
import os
from pathlib import Path


def safe_mkdir(directory: str | Path) -> None:
    """Ensure a directory is present.

    If it's not there, create it.  If it is, no-op.
    """
    try:
        os.makedirs(directory)
    except OSError as e:
        if e.errno != errno.EEXIST:
            raise


def safe_mkdir_for(path: str | Path) -> None:
    """Ensure that the parent directory for a file is present.

    If it's not there, create it. If it is, no-op.
    """
    dirname = os.path.dirname(path)
    if dirname:
        safe_mkdir(dirname)


def safe_open(filename, *args, **kwargs):
    """Open a file safely, ensuring that its directory exists."""
    safe_mkdir_for(filename)
    return open(filename, *args, **kwargs)


def safe_delete(filename: str | Path) -> None:
    """Delete a file safely.

    If it's not present, no-op.
    """
    try:
        os.unlink(filename)
    except OSError as e:
        if e.errno != errno.ENOENT:
            raise


def touch(path: str | Path) -> None:
    """Equivalent of unix `touch path`, creating parent directories as needed."""
    with safe_open(path, "a"):
        os.utime(path, None)
