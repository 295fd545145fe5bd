# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from typing_extensions import Protocol

from jvmdeps.base.exceptions import JvmDepsException
from jvmdeps.resolve.coordinate import Coordinate
from jvmdeps.resolve.repository import MavenRepository


class ResolutionEngineError(JvmDepsException):
    """The resolution engine failed to resolve a coordinate."""


class RepositoryConnectionError(ResolutionEngineError):
    """The resolution engine could not talk to a repository.

    Covers unreachable hosts, proxies, TLS failures, timeouts and rejected credentials.
    """


class ResolutionEngine(Protocol):
    """A Maven-compatible resolver that expands a coordinate into local artifact files.

    Implementations own the dependency graph, version conflict arbitration and downloads. The
    orchestrating `DependencyResolver` only calls `configure` once per batch and then
    `resolve_transitive` once per requested coordinate.
    """

    def configure(self, *, local_repository: Path, use_maven_central: bool) -> None:
        """Set the local repository root and whether the built-in central repository is used."""
        raise NotImplementedError()

    def resolve_transitive(
        self, coordinate: Coordinate, repositories: Sequence[MavenRepository]
    ) -> Sequence[str]:
        """Resolve `coordinate` and all of its transitive dependencies.

        Returns local file paths in classpath order. Raises `ResolutionEngineError` (or its
        `RepositoryConnectionError` subclass) on failure.
        """
        raise NotImplementedError()
