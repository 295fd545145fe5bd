# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations


class JvmDepsException(Exception):
    """Base exception type for jvmdeps."""


class ConfigError(JvmDepsException):
    """Indicates an unreadable or malformed settings file."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid jvmdeps config file {path}: {reason}")
        self.path = path
