# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).
from __future__ import annotations

import re
from dataclasses import dataclass

from jvmdeps.base.exceptions import JvmDepsException


class InvalidLocatorFormat(JvmDepsException):
    """The dependency locator being passed is invalid or malformed."""

    def __init__(self, locator: str) -> None:
        super().__init__(
            f"Invalid dependency locator: '{locator}'. "
            "Expected format is groupId:artifactId:version[:classifier][@type]"
        )
        self.locator = locator


def format_version(version: str) -> str:
    """Rewrites a trailing `+` as an open-ended Maven version range.

    `1.2+` means "1.2 or newer", which Maven spells `[1.2,)`.
    """
    if version.endswith("+"):
        return f"[{version[:-1]},)"
    return version


@dataclass(frozen=True, order=True)
class Coordinate:
    """A single Maven-style coordinate for a JVM dependency.

    Two string serializations are supported:
    1. The dependency locator format accepted from users,
       `groupId:artifactId:version[:classifier][@type]`. See `from_locator` and `to_locator`.
    2. The format accepted by the Coursier CLI, which uses trailing attributes to specify
       optional fields like `type` and `classifier`. See `to_coord_arg_str`.
    """

    LOCATOR_REGEX = re.compile(
        r"^(?P<group>[^:]*):(?P<artifact>[^:]*):(?P<version>[^:@]*)"
        r"(:(?P<classifier>[^@]*))?(@(?P<type>.*))?$"
    )

    group: str
    artifact: str
    version: str
    packaging: str = "jar"
    classifier: str | None = None

    @classmethod
    def from_locator(cls, locator: str) -> Coordinate:
        """Parses a dependency locator, normalizing `+` versions into open ranges.

        An empty version is accepted here; the resolution engine rejects it later.
        """
        parts = cls.LOCATOR_REGEX.fullmatch(locator)
        if parts is None or not parts.group("group") or not parts.group("artifact"):
            raise InvalidLocatorFormat(locator)
        return cls(
            group=parts.group("group"),
            artifact=parts.group("artifact"),
            version=format_version(parts.group("version")),
            packaging=parts.group("type") or "jar",
            classifier=parts.group("classifier") or None,
        )

    def to_locator(self) -> str:
        """Renders the coordinate back into dependency locator form.

        See also: `from_locator`. Versions are rendered as stored, so `1.2+` comes back as `[1.2,)`.
        """
        locator = f"{self.group}:{self.artifact}:{self.version}"
        if self.classifier is not None:
            locator += f":{self.classifier}"
        if self.packaging != "jar":
            locator += f"@{self.packaging}"
        return locator

    def to_coord_arg_str(self, extra_attrs: dict[str, str] | None = None) -> str:
        """Renders the coordinate in Coursier's CLI input format.

        The CLI input format uses trailing key-val attributes to specify `type`, `classifier`, etc.
        """
        attrs = dict(extra_attrs or {})
        if self.packaging != "jar":
            attrs["type"] = self.packaging
        if self.classifier:
            attrs["classifier"] = self.classifier
        attrs_sep_str = "," if attrs else ""
        attrs_str = ",".join((f"{k}={v}" for k, v in attrs.items()))
        return f"{self.group}:{self.artifact}:{self.version}{attrs_sep_str}{attrs_str}"

    def __str__(self) -> str:
        return self.to_locator()


def parse_locator(locator: str) -> Coordinate:
    return Coordinate.from_locator(locator)
