# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import io

from jvmdeps.base.exiter import FAILED_EXIT_CODE, SUCCEEDED_EXIT_CODE, exit_for
from jvmdeps.resolve.engine import RepositoryConnectionError, ResolutionEngineError
from jvmdeps.resolve.resolver import DependencyResolutionFailed


def _failed(cause: ResolutionEngineError) -> DependencyResolutionFailed:
    try:
        raise DependencyResolutionFailed("com.foo:bar:1.0", cause) from cause
    except DependencyResolutionFailed as e:
        return e


def test_connectivity_failure() -> None:
    out = io.StringIO()
    exit_code = exit_for(_failed(RepositoryConnectionError("proxy said no")), out=out)
    assert exit_code == SUCCEEDED_EXIT_CODE
    assert out.getvalue().splitlines() == [
        "[jvmdeps] [ERROR] Failed while connecting to the server. Check the connection "
        "(http/https, port, proxy, credentials, etc.) of your maven dependency locators.",
        "[jvmdeps] [ERROR] Caused by: proxy said no",
    ]


def test_resolution_failure() -> None:
    out = io.StringIO()
    assert exit_for(_failed(ResolutionEngineError("not found")), out=out) == FAILED_EXIT_CODE
    assert "Could not resolve dependency com.foo:bar:1.0" in out.getvalue()


def test_other_exceptions_fail() -> None:
    out = io.StringIO()
    assert exit_for(ValueError("boom"), out=out) == FAILED_EXIT_CODE
    assert out.getvalue() == "[jvmdeps] [ERROR] boom\n"
