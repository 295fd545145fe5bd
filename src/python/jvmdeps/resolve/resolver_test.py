# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from jvmdeps.base.exiter import FAILED_EXIT_CODE, SUCCEEDED_EXIT_CODE
from jvmdeps.resolve.cache import ResolutionCache
from jvmdeps.resolve.coordinate import Coordinate, InvalidLocatorFormat
from jvmdeps.resolve.coursier import CoursierEngine
from jvmdeps.resolve.credentials import MissingEnvironmentVariable
from jvmdeps.resolve.engine import RepositoryConnectionError, ResolutionEngineError
from jvmdeps.resolve.repository import (
    GOOGLE_URL,
    JCENTER_URL,
    MAVEN_CENTRAL,
    MavenRepository,
    parse_repo_reference,
)
from jvmdeps.resolve.resolve_test_util import FakeEngine
from jvmdeps.resolve.resolver import (
    DependencyResolutionFailed,
    DependencyResolver,
    cache_key,
    render_classpath,
    split_repositories,
)
from jvmdeps.settings import Settings

GUAVA = "com.google.guava:guava:31.1-jre"
JUNIT = "junit:junit:4.13.2"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(jvmdeps_dir=tmp_path / "jvmdeps", local_repository=tmp_path / "m2")


@pytest.fixture
def engine(tmp_path: Path) -> FakeEngine:
    return FakeEngine(
        root=tmp_path / "m2",
        artifacts={
            GUAVA: ["guava.jar", "failureaccess.jar"],
            JUNIT: ["junit.jar", "hamcrest-core.jar"],
        },
    )


@pytest.fixture
def resolver(settings: Settings, engine: FakeEngine) -> DependencyResolver:
    return DependencyResolver(settings, engine)


def test_empty_locators_skip_the_cache(settings: Settings, engine: FakeEngine) -> None:
    resolver = DependencyResolver(settings, engine)
    assert resolver.resolve([], [], False) == ""
    assert not settings.cache_dependency_file.exists()
    assert not settings.jvmdeps_dir.exists()
    assert engine.calls == []


def test_resolve_concatenates_in_order(
    resolver: DependencyResolver, engine: FakeEngine, tmp_path: Path
) -> None:
    classpath = resolver.resolve([JUNIT, GUAVA])
    m2 = tmp_path / "m2"
    assert classpath.split(os.pathsep) == [
        str(m2 / "junit.jar"),
        str(m2 / "hamcrest-core.jar"),
        str(m2 / "guava.jar"),
        str(m2 / "failureaccess.jar"),
    ]
    assert [coord for coord, _ in engine.calls] == [
        Coordinate.from_locator(JUNIT),
        Coordinate.from_locator(GUAVA),
    ]


def test_warm_cache_skips_the_engine(resolver: DependencyResolver, engine: FakeEngine) -> None:
    first = resolver.resolve([GUAVA, JUNIT])
    assert len(engine.calls) == 2
    second = resolver.resolve([GUAVA, JUNIT])
    assert second == first
    assert len(engine.calls) == 2
    assert resolver.cache.load() == {cache_key([GUAVA, JUNIT]): first}


def test_cache_key_is_order_sensitive(resolver: DependencyResolver, engine: FakeEngine) -> None:
    resolver.resolve([GUAVA, JUNIT])
    resolver.resolve([JUNIT, GUAVA])
    assert len(engine.calls) == 4
    assert cache_key([GUAVA, JUNIT]) != cache_key([JUNIT, GUAVA])


def test_stale_cache_is_re_resolved(
    resolver: DependencyResolver, engine: FakeEngine, tmp_path: Path
) -> None:
    first = resolver.resolve([GUAVA])
    (tmp_path / "m2" / "failureaccess.jar").unlink()
    second = resolver.resolve([GUAVA])
    assert second == first
    assert len(engine.calls) == 2


def test_duplicates_across_locators_are_kept(settings: Settings, tmp_path: Path) -> None:
    engine = FakeEngine(
        root=tmp_path / "m2", artifacts={"g:a:1": ["a.jar", "shared.jar"], "g:b:1": ["shared.jar"]}
    )
    classpath = DependencyResolver(settings, engine).resolve(["g:a:1", "g:b:1"])
    assert classpath.split(os.pathsep).count(str(tmp_path / "m2" / "shared.jar")) == 2


def test_paths_with_spaces_are_quoted(settings: Settings, tmp_path: Path) -> None:
    engine = FakeEngine(root=tmp_path / "my repo", artifacts={"g:a:1": ["a.jar"]})
    resolver = DependencyResolver(settings, engine)
    classpath = resolver.resolve(["g:a:1"])
    assert classpath == f'"{tmp_path / "my repo" / "a.jar"}"'
    # The quoted entry still validates, so the second call is a cache hit.
    assert resolver.resolve(["g:a:1"]) == classpath
    assert len(engine.calls) == 1


def test_render_classpath_makes_paths_absolute(tmp_path: Path) -> None:
    assert render_classpath(["rel.jar"]) == str(Path("rel.jar").absolute())
    assert render_classpath([]) == ""


def test_repositories_default_to_jcenter(resolver: DependencyResolver, engine: FakeEngine) -> None:
    resolver.resolve([GUAVA])
    _, repositories = engine.calls[0]
    assert repositories == (MavenRepository(url=JCENTER_URL, id="jcenter"),)
    assert engine.use_maven_central is False


def test_maven_central_marker_configures_engine(
    resolver: DependencyResolver, engine: FakeEngine, settings: Settings
) -> None:
    resolver.resolve([GUAVA], [MAVEN_CENTRAL, parse_repo_reference("google")])
    _, repositories = engine.calls[0]
    assert repositories == (MavenRepository(url=GOOGLE_URL, id="google"),)
    assert engine.use_maven_central is True
    assert engine.local_repository == settings.local_repository.absolute()


def test_split_repositories() -> None:
    assert split_repositories([MAVEN_CENTRAL]) == ((), True)
    with pytest.raises(TypeError):
        split_repositories(["https://not-a-descriptor"])  # type: ignore[list-item]


def test_invalid_locator_fails_fast(resolver: DependencyResolver, engine: FakeEngine) -> None:
    with pytest.raises(InvalidLocatorFormat):
        resolver.resolve([GUAVA, "not-a-valid-locator"])
    assert not resolver.cache.path.exists()


@pytest.mark.parametrize(
    "error,exit_code,message",
    (
        (
            RepositoryConnectionError("Connection refused"),
            SUCCEEDED_EXIT_CODE,
            "Failed while connecting to the server.",
        ),
        (
            ResolutionEngineError("not found"),
            FAILED_EXIT_CODE,
            f"Could not resolve dependency {JUNIT}",
        ),
    ),
)
def test_engine_failure_aborts_batch(
    settings: Settings,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
    error: ResolutionEngineError,
    exit_code: int,
    message: str,
) -> None:
    engine = FakeEngine(
        root=tmp_path / "m2",
        artifacts={GUAVA: ["guava.jar"], "g:a:1": ["a.jar"]},
        failures={JUNIT: error},
    )
    resolver = DependencyResolver(settings, engine)
    with caplog.at_level(logging.ERROR), pytest.raises(DependencyResolutionFailed) as exc:
        resolver.resolve([GUAVA, JUNIT, "g:a:1"])

    assert exc.value.locator == JUNIT
    assert exc.value.cause is error
    assert exc.value.__cause__ is error
    assert exc.value.exit_code == exit_code
    assert str(exc.value).startswith(message)
    # No partial results: the third locator is never attempted and nothing is cached.
    assert len(engine.calls) == 2
    assert not resolver.cache.path.exists()
    assert "Exception:" in caplog.text


def test_unexpected_engine_error_aborts_batch(settings: Settings, tmp_path: Path) -> None:
    error = RuntimeError("backend blew up")
    engine = FakeEngine(root=tmp_path / "m2", failures={"g:a:1": error})
    resolver = DependencyResolver(settings, engine)
    with pytest.raises(DependencyResolutionFailed) as exc:
        resolver.resolve(["g:a:1"])
    assert exc.value.cause is error
    assert exc.value.exit_code == FAILED_EXIT_CODE
    assert str(exc.value) == "Could not resolve dependency g:a:1"
    assert not resolver.cache.path.exists()


def test_missing_credentials_variable_is_not_wrapped(settings: Settings, tmp_path: Path) -> None:
    engine = FakeEngine(
        root=tmp_path / "m2", failures={"g:a:1": MissingEnvironmentVariable("CORP_PASSWORD")}
    )
    with pytest.raises(MissingEnvironmentVariable):
        DependencyResolver(settings, engine).resolve(["g:a:1"])


def test_cache_write_failure_still_returns_classpath(
    settings: Settings, engine: FakeEngine, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    # A directory where the cache file should be makes every append fail.
    resolver = DependencyResolver(settings, engine, cache=ResolutionCache(tmp_path))
    with caplog.at_level(logging.ERROR):
        classpath = resolver.resolve([GUAVA])
    assert classpath.endswith("failureaccess.jar")
    assert "Could not write to cache:" in caplog.text


def test_progress_logging(resolver: DependencyResolver, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO):
        resolver.resolve([GUAVA], logging_enabled=True)
    assert caplog.messages == [
        "Resolving dependencies...",
        f"    Resolving {GUAVA}...",
        f"    Resolving {GUAVA}... Done",
        "Dependencies resolved",
    ]


def test_no_progress_logging_by_default(
    resolver: DependencyResolver, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.INFO):
        resolver.resolve([GUAVA])
    assert caplog.messages == []


def test_from_settings_uses_coursier(settings: Settings) -> None:
    resolver = DependencyResolver.from_settings(settings)
    assert resolver.cache.path == settings.cache_dependency_file
    assert isinstance(resolver.engine, CoursierEngine)
