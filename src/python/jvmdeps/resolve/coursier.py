# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Sequence
from urllib.parse import urlparse

from jvmdeps.resolve.coordinate import Coordinate
from jvmdeps.resolve.credentials import decode_env
from jvmdeps.resolve.engine import RepositoryConnectionError, ResolutionEngineError
from jvmdeps.resolve.repository import MavenRepository
from jvmdeps.util.strutil import softwrap

logger = logging.getLogger(__name__)

# Coursier reports transport problems as free text on stderr, so they are recognized by the
# exception names and HTTP status phrases it prints. Stderr also echoes coordinates and URLs, so
# bare words and numbers must not match.
_CONNECTIVITY_ERROR_RE = re.compile(
    r"java\.net\.\w+Exception|javax\.net\.ssl\.\w+Exception|\bSSL\w*Exception\b"
    r"|\bUnknownHostException\b|\bConnection (?:refused|reset|timed out)\b"
    r"|\bconnect timed out\b|\bRead timed out\b|\bPKIX path building failed\b"
    r"|\b(?:HTTP|status)(?: code)?:?\s*40[137]\b|\bUnauthorized\b|\b403 Forbidden\b"
    r"|\bProxy Authentication Required\b",
    re.IGNORECASE,
)


class CoursierEngine:
    """A `ResolutionEngine` that shells out to the Coursier CLI (https://get-coursier.io/).

    Every call runs `cs fetch` for a single coordinate with Coursier's default repositories
    disabled, so that only the configured repositories (plus Maven Central, when requested) are
    consulted. Coursier prints the fetched files to stdout, one per line, in classpath order.
    """

    def __init__(self, coursier_binary: str = "cs", *, timeout: float | None = None) -> None:
        self._coursier_binary = coursier_binary
        self._timeout = timeout
        self._local_repository: Path | None = None
        self._use_maven_central = False

    def configure(self, *, local_repository: Path, use_maven_central: bool) -> None:
        self._local_repository = local_repository.absolute()
        self._use_maven_central = use_maven_central

    def repos_args(self, repositories: Sequence[MavenRepository]) -> list[str]:
        args = ["--no-default"]
        if self._use_maven_central:
            args.extend(["-r", "central"])
        for repo in repositories:
            args.extend(["-r", repo.url])
            if repo.has_credentials:
                host = urlparse(repo.url).hostname or repo.url
                # May raise MissingEnvironmentVariable.
                username = decode_env(repo.username)  # type: ignore[arg-type]
                password = decode_env(repo.password)  # type: ignore[arg-type]
                args.extend(["--credentials", f"{host} {username}:{password}"])
        return args

    def argv(self, coordinate: Coordinate, repositories: Sequence[MavenRepository]) -> list[str]:
        argv = [self._coursier_binary, "fetch", *self.repos_args(repositories)]
        if self._local_repository is not None:
            argv.extend(["--cache", str(self._local_repository)])
        # Coursier only fetches non-jar artifact types if passed an `-A` option explicitly
        # requesting them. `-A` replaces its `jar,bundle` default, so those must be kept.
        if coordinate.packaging != "jar":
            argv.extend(["-A", ",".join(sorted(["jar", "bundle", coordinate.packaging]))])
        argv.append(coordinate.to_coord_arg_str())
        return argv

    def resolve_transitive(
        self, coordinate: Coordinate, repositories: Sequence[MavenRepository]
    ) -> Sequence[str]:
        if not coordinate.version:
            raise ResolutionEngineError(
                f"No version given for {coordinate.group}:{coordinate.artifact}"
            )

        argv = self.argv(coordinate, repositories)
        logger.debug(f"Running `{self._coursier_binary} fetch` for {coordinate.to_coord_arg_str()}")
        try:
            process = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ResolutionEngineError(
                softwrap(
                    f"""
                    Could not find the Coursier executable `{self._coursier_binary}`. Install it
                    from https://get-coursier.io/ or point JVMDEPS_COURSIER at it.
                    """
                )
            ) from e
        except subprocess.TimeoutExpired as e:
            raise RepositoryConnectionError(
                f"Timed out after {self._timeout}s resolving {coordinate.to_coord_arg_str()}"
            ) from e
        except OSError as e:
            raise ResolutionEngineError(f"Problem executing coursier: {e}") from e

        stdout = process.stdout.decode("utf-8", errors="replace")
        stderr = process.stderr.decode("utf-8", errors="replace")
        if process.returncode != 0:
            message = (
                f"Coursier failed with exit code {process.returncode} resolving "
                f"{coordinate.to_coord_arg_str()}:\n{stderr.strip()}"
            )
            if _CONNECTIVITY_ERROR_RE.search(stderr):
                raise RepositoryConnectionError(message)
            raise ResolutionEngineError(message)

        return [line.strip() for line in stdout.splitlines() if line.strip()]

    def __repr__(self) -> str:
        return f"CoursierEngine({self._coursier_binary!r})"
