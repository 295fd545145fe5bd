# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

from jvmdeps.resolve.coordinate import Coordinate
from jvmdeps.resolve.repository import MavenRepository
from jvmdeps.util.dirutil import touch


@dataclass
class FakeEngine:
    """An in-memory `ResolutionEngine` for tests.

    `artifacts` maps a coordinate's locator form to the file names it resolves to; the files are
    created under `root` on first resolution. `failures` maps a locator form to the error raised.
    """

    root: Path
    artifacts: Mapping[str, Sequence[str]] = field(default_factory=dict)
    failures: Mapping[str, Exception] = field(default_factory=dict)
    calls: list[tuple[Coordinate, tuple[MavenRepository, ...]]] = field(default_factory=list)
    local_repository: Path | None = None
    use_maven_central: bool | None = None

    def configure(self, *, local_repository: Path, use_maven_central: bool) -> None:
        self.local_repository = local_repository
        self.use_maven_central = use_maven_central

    def resolve_transitive(
        self, coordinate: Coordinate, repositories: Sequence[MavenRepository]
    ) -> Sequence[str]:
        self.calls.append((coordinate, tuple(repositories)))
        locator = coordinate.to_locator()
        if locator in self.failures:
            raise self.failures[locator]
        paths = []
        for name in self.artifacts.get(locator, ()):
            path = self.root / name
            touch(path)
            paths.append(str(path))
        return paths
