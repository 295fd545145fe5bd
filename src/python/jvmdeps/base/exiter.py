# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import sys
from typing import TextIO

ExitCode = int

# Centralize integer return codes for callers that terminate the process on resolution failure.
SUCCEEDED_EXIT_CODE: ExitCode = 0
FAILED_EXIT_CODE: ExitCode = 1


def exit_for(exception: BaseException, *, out: TextIO | None = None) -> ExitCode:
    """Render `exception` for the user and return the exit code the process should terminate with.

    Exceptions that carry an `exit_code` attribute (such as `DependencyResolutionFailed`) decide
    their own code; anything else maps to `FAILED_EXIT_CODE`.
    """
    out = out or sys.stderr
    exit_code = getattr(exception, "exit_code", FAILED_EXIT_CODE)
    print(f"[jvmdeps] [ERROR] {exception}", file=out)
    cause = exception.__cause__
    if cause is not None:
        print(f"[jvmdeps] [ERROR] Caused by: {cause}", file=out)
    return exit_code
