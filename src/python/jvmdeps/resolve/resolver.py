# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

from jvmdeps.base.exceptions import JvmDepsException
from jvmdeps.base.exiter import FAILED_EXIT_CODE, SUCCEEDED_EXIT_CODE, ExitCode
from jvmdeps.resolve.cache import CacheWriteFailure, ResolutionCache
from jvmdeps.resolve.coordinate import Coordinate, InvalidLocatorFormat
from jvmdeps.resolve.coursier import CoursierEngine
from jvmdeps.resolve.credentials import MissingEnvironmentVariable
from jvmdeps.resolve.engine import RepositoryConnectionError, ResolutionEngine
from jvmdeps.resolve.repository import (
    MavenCentral,
    MavenRepository,
    RepositoryDescriptor,
    default_repositories,
)
from jvmdeps.settings import Settings
from jvmdeps.util.strutil import pluralize, quote_if_spaced, softwrap

logger = logging.getLogger(__name__)


class DependencyResolutionFailed(JvmDepsException):
    """Resolving one locator of a batch failed, so the whole batch failed.

    `exit_code` is what the process should terminate with. Connectivity problems exit with
    SUCCEEDED_EXIT_CODE and every other failure raised by the engine with FAILED_EXIT_CODE;
    callers rely on this distinction.
    """

    def __init__(self, locator: str, cause: Exception) -> None:
        if isinstance(cause, RepositoryConnectionError):
            exit_code: ExitCode = SUCCEEDED_EXIT_CODE
            message = softwrap(
                """
                Failed while connecting to the server. Check the connection (http/https, port,
                proxy, credentials, etc.) of your maven dependency locators.
                """
            )
        else:
            exit_code = FAILED_EXIT_CODE
            message = f"Could not resolve dependency {locator}"
        super().__init__(message)
        self.locator = locator
        self.cause = cause
        self.exit_code = exit_code


def cache_key(locators: Iterable[str]) -> str:
    """The cache key for a batch of locators; order matters."""
    return os.pathsep.join(locators)


def render_classpath(paths: Iterable[str | Path]) -> str:
    return os.pathsep.join(quote_if_spaced(str(Path(p).absolute())) for p in paths)


def split_repositories(
    repositories: Sequence[RepositoryDescriptor],
) -> tuple[tuple[MavenRepository, ...], bool]:
    """Splits descriptors into the URL repositories and whether Maven Central is enabled."""
    url_repositories = []
    use_maven_central = False
    for repo in repositories or default_repositories():
        if isinstance(repo, MavenCentral):
            use_maven_central = True
        elif isinstance(repo, MavenRepository):
            url_repositories.append(repo)
        else:
            raise TypeError(f"Unexpected repository descriptor {repo!r}")
    return tuple(url_repositories), use_maven_central


class DependencyResolver:
    """Resolves dependency locators to a classpath, caching results on disk.

    Resolution itself is delegated to a `ResolutionEngine`; this class owns locator parsing,
    repository selection, the result cache and the translation of engine failures.
    """

    def __init__(
        self,
        settings: Settings,
        engine: ResolutionEngine,
        cache: ResolutionCache | None = None,
    ) -> None:
        self._settings = settings
        self._engine = engine
        self._cache = cache or ResolutionCache(settings.cache_dependency_file)

    @classmethod
    def from_settings(cls, settings: Settings) -> DependencyResolver:
        """A resolver backed by the Coursier CLI configured in `settings`."""
        engine = CoursierEngine(settings.coursier_binary, timeout=settings.coursier_timeout)
        return cls(settings, engine)

    @property
    def cache(self) -> ResolutionCache:
        return self._cache

    @property
    def engine(self) -> ResolutionEngine:
        return self._engine

    def resolve(
        self,
        locators: Sequence[str],
        repositories: Sequence[RepositoryDescriptor] = (),
        logging_enabled: bool = False,
    ) -> str:
        """Returns the classpath for `locators`, from the cache when it is still valid."""
        if not locators:
            return ""

        key = cache_key(locators)
        cached = self._cache.lookup(key)
        if cached is not None:
            logger.debug(f"Using cached classpath for {pluralize(len(locators), 'dependency')}")
            return cached

        if logging_enabled:
            logger.info("Resolving dependencies...")
        paths = self.resolve_paths(locators, repositories, logging_enabled=logging_enabled)
        classpath = render_classpath(paths)
        if logging_enabled:
            logger.info("Dependencies resolved")

        try:
            self._cache.store(key, classpath)
        except CacheWriteFailure as e:
            logger.error(f"Could not write to cache: {e}", exc_info=e.__cause__)

        return classpath

    def resolve_paths(
        self,
        locators: Sequence[str],
        repositories: Sequence[RepositoryDescriptor] = (),
        logging_enabled: bool = False,
    ) -> list[Path]:
        """Resolves every locator in order, bypassing the cache.

        Paths are concatenated in engine order across all locators and are not de-duplicated.
        """
        url_repositories, use_maven_central = split_repositories(repositories)
        self._engine.configure(
            local_repository=self._settings.local_repository.absolute(),
            use_maven_central=use_maven_central,
        )

        paths: list[Path] = []
        for locator in locators:
            coordinate = Coordinate.from_locator(locator)
            if logging_enabled:
                logger.info(f"    Resolving {locator}...")
            try:
                resolved = self._engine.resolve_transitive(coordinate, url_repositories)
            except (InvalidLocatorFormat, MissingEnvironmentVariable):
                raise
            except Exception as e:
                logger.error(f"Exception: {e}")
                raise DependencyResolutionFailed(locator, e) from e
            if logging_enabled:
                logger.info(f"    Resolving {locator}... Done")
            paths.extend(Path(p).absolute() for p in resolved)
        return paths
