# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
from pathlib import Path

from jvmdeps.base.exceptions import JvmDepsException
from jvmdeps.util.dirutil import safe_delete, safe_open
from jvmdeps.util.strutil import strip_quotes

logger = logging.getLogger(__name__)


class CacheReadFailure(JvmDepsException):
    """The cache file exists but could not be read."""


class CacheWriteFailure(JvmDepsException):
    """A resolved classpath could not be appended to the cache file."""


def classpath_entries(classpath: str) -> list[str]:
    """Split a classpath string into its (unquoted) path entries."""
    if not classpath:
        return []
    return [strip_quotes(entry) for entry in classpath.split(os.pathsep)]


class ResolutionCache:
    """A flat, append-only text file mapping a dependency key to its resolved classpath.

    Each line is `<key> <classpath>`. Entries are never rewritten: storing a key again appends a
    new line, and the last line for a key wins when loading. Neither keys nor classpaths may
    contain a raw space; classpath entries with spaces must already be quoted.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, str]:
        """Parses the cache file, raising `CacheReadFailure` if it exists but cannot be read."""
        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise CacheReadFailure(str(e)) from e

        entries: dict[str, str] = {}
        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            key, sep, classpath = line.partition(" ")
            if not sep or not key:
                # Most likely a partial line from an interrupted or concurrent append.
                logger.debug(f"Skipping unparsable line {lineno} of {self._path}")
                continue
            entries[key] = classpath
        return entries

    def load(self) -> dict[str, str]:
        """Like `read`, but a read failure is logged and treated as an empty cache."""
        try:
            return self.read()
        except CacheReadFailure as e:
            logger.warning(f"Could not access cache {e}")
            return {}

    def lookup(self, key: str) -> str | None:
        """Returns the cached classpath for `key`, or None on a miss.

        A cached classpath referring to any path that no longer exists on disk (for example after
        the local repository was wiped) is stale, and is reported as a miss.
        """
        classpath = self.load().get(key)
        if classpath is None:
            return None
        if all(os.path.exists(entry) for entry in classpath_entries(classpath)):
            return classpath
        logger.warning("Detected missing dependencies in cache.")
        return None

    def store(self, key: str, classpath: str) -> None:
        """Appends an entry, raising `CacheWriteFailure` if the file cannot be written."""
        try:
            with safe_open(self._path, "a", encoding="utf-8") as out:
                out.write(f"{key} {classpath}\n")
        except OSError as e:
            raise CacheWriteFailure(str(e)) from e

    def clear(self) -> None:
        safe_delete(self._path)

    def __repr__(self) -> str:
        return f"ResolutionCache({str(self._path)!r})"
