# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import toml

from jvmdeps.base.exceptions import ConfigError
from jvmdeps.resolve.repository import RepositoryDescriptor, parse_repo_references

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "jvmdeps.toml"
CACHE_FILE_NAME = "dependency_cache.txt"

JVMDEPS_DIR_ENV = "JVMDEPS_DIR"
JVMDEPS_REPO_ENV = "JVMDEPS_REPO"
JVMDEPS_COURSIER_ENV = "JVMDEPS_COURSIER"


@dataclass(frozen=True)
class Settings:
    """Process-wide locations and defaults used when resolving dependencies.

    Values come from, in increasing order of precedence: built-in defaults, the `[resolve]` table
    of `<jvmdeps_dir>/jvmdeps.toml`, and the `JVMDEPS_*` environment variables.
    """

    jvmdeps_dir: Path
    local_repository: Path
    coursier_binary: str = "cs"
    repositories: tuple[str, ...] = ()
    coursier_timeout: float | None = None

    @property
    def cache_dependency_file(self) -> Path:
        return self.jvmdeps_dir / CACHE_FILE_NAME

    def repository_descriptors(self) -> tuple[RepositoryDescriptor, ...]:
        return parse_repo_references(self.repositories)

    @classmethod
    def load(
        cls, config_file: str | Path | None = None, env: Mapping[str, str] | None = None
    ) -> Settings:
        env = os.environ if env is None else env
        home = Path(env.get("HOME") or Path.home())
        jvmdeps_dir = Path(env.get(JVMDEPS_DIR_ENV) or home / ".jvmdeps")

        config_path = Path(config_file) if config_file else jvmdeps_dir / CONFIG_FILE_NAME
        values = cls._read_config(config_path)

        local_repository = Path(
            env.get(JVMDEPS_REPO_ENV)
            or values.get("local_repository")
            or home / ".m2" / "repository"
        ).expanduser()
        coursier_binary = env.get(JVMDEPS_COURSIER_ENV) or values.get("coursier", "cs")
        timeout = values.get("coursier_timeout")

        return cls(
            jvmdeps_dir=jvmdeps_dir.expanduser(),
            local_repository=local_repository,
            coursier_binary=str(coursier_binary),
            repositories=tuple(values.get("repositories", ())),
            coursier_timeout=float(timeout) if timeout is not None else None,
        )

    @staticmethod
    def _read_config(config_path: Path) -> dict[str, Any]:
        if not config_path.is_file():
            return {}
        try:
            contents = toml.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(str(config_path), str(e)) from e
        section = contents.get("resolve", {})
        if not isinstance(section, dict):
            raise ConfigError(str(config_path), "`resolve` must be a table.")
        repositories = section.get("repositories", [])
        if not isinstance(repositories, list) or not all(isinstance(r, str) for r in repositories):
            raise ConfigError(str(config_path), "`resolve.repositories` must be a list of strings.")
        for name in ("local_repository", "coursier"):
            if name in section and not isinstance(section[name], str):
                raise ConfigError(str(config_path), f"`resolve.{name}` must be a string.")
        timeout = section.get("coursier_timeout")
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float, type(None))):
            raise ConfigError(str(config_path), "`resolve.coursier_timeout` must be a number.")
        logger.debug(f"Loaded settings from {config_path}")
        return section
