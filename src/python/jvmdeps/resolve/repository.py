# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Iterable, Union

from jvmdeps.base.exceptions import JvmDepsException

JCENTER_URL = "https://jcenter.bintray.com/"
GOOGLE_URL = "https://maven.google.com/"


class InvalidRepositoryReference(JvmDepsException):
    """A repository reference was not of the form `url` or `id=url` with a non-empty `url`."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Invalid Maven repository reference: {reference}")
        self.reference = reference


@dataclass(frozen=True)
class MavenRepository:
    """A Maven style repository at a URL, optionally named and optionally authenticated.

    `username` and `password` may be `{{ENV_VAR}}` templates; they are decoded when the resolution
    engine consumes them, not here.
    """

    url: str
    id: str | None = None
    username: str | None = dataclasses.field(default=None, repr=False)
    password: str | None = dataclasses.field(default=None, repr=False)

    def with_credentials(self, username: str, password: str) -> MavenRepository:
        return dataclasses.replace(self, username=username, password=password)

    @property
    def has_credentials(self) -> bool:
        return self.username is not None and self.password is not None

    def __str__(self) -> str:
        return f"{self.id}={self.url}" if self.id else self.url


@dataclass(frozen=True)
class MavenCentral:
    """Marker asking the resolution engine to enable its built-in Maven Central repository."""

    def __str__(self) -> str:
        return "mavenCentral"


RepositoryDescriptor = Union[MavenRepository, MavenCentral]

MAVEN_CENTRAL = MavenCentral()


def parse_repo_reference(reference: str) -> RepositoryDescriptor:
    """Parses `url` or `id=url`, where `url` may also be one of the aliases `jcenter`, `google`
    or `mavenCentral` (case-insensitive)."""
    split = reference.split("=")
    if len(split) == 1:
        repo_id, repo_ref = None, split[0]
    elif len(split) == 2:
        repo_id, repo_ref = split
    else:
        raise InvalidRepositoryReference(reference)
    if not repo_ref:
        raise InvalidRepositoryReference(reference)

    alias = repo_ref.lower()
    if alias == "jcenter":
        return MavenRepository(url=JCENTER_URL, id=repo_id or "jcenter")
    if alias == "google":
        return MavenRepository(url=GOOGLE_URL, id=repo_id or "google")
    if alias == "mavencentral":
        return MAVEN_CENTRAL
    return MavenRepository(url=repo_ref, id=repo_id)


def default_repositories() -> tuple[RepositoryDescriptor, ...]:
    return (parse_repo_reference("jcenter"),)


def parse_repo_references(references: Iterable[str]) -> tuple[RepositoryDescriptor, ...]:
    """Parses every reference in order, defaulting to `jcenter` when there are none."""
    repositories = tuple(parse_repo_reference(ref) for ref in references)
    return repositories or default_repositories()
