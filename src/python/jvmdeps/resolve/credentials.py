# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import os
from typing import Mapping

from jvmdeps.base.exceptions import JvmDepsException


class MissingEnvironmentVariable(JvmDepsException):
    """A `{{NAME}}` credential template referenced an unset environment variable."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Could not resolve environment variable {{{{{name}}}}} in maven repository credentials"
        )
        self.name = name


def decode_env(value: str, env: Mapping[str, str] | None = None) -> str:
    """Expand a `{{NAME}}` template to the value of the environment variable `NAME`.

    Values that are not wrapped in `{{`/`}}` are returned unchanged.
    """
    if len(value) >= 4 and value.startswith("{{") and value.endswith("}}"):
        env = os.environ if env is None else env
        name = value[2:-2]
        decoded = env.get(name)
        if decoded is None:
            raise MissingEnvironmentVariable(name)
        return decoded
    return value
