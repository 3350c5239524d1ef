"""
Shared fixtures and fakes for the test suite.
"""

from __future__ import annotations

from typing import Any

import pytest

from ghstatus.cache import CachePolicy, CacheStore
from ghstatus.errors import CliError


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class FakeCli:
    tool = "gh"

    def __init__(self, available: bool = True, responses: dict[str, Any] | None = None):
        self.available = available
        self.responses = responses or {}
        self.probes = 0
        self.calls: list[str] = []

    def probe(self) -> bool:
        self.probes += 1
        return self.available

    def fetch(self, path: str) -> Any:
        self.calls.append(path)
        value = self.responses.get(path, CliError(f"gh api failed for {path}"))
        if isinstance(value, Exception):
            raise value
        return value


class FakeHttp:
    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    def fetch(self, path: str) -> Any:
        self.calls.append(path)
        value = self.responses[path]
        if isinstance(value, Exception):
            raise value
        return value


class FakeClient:
    """
    Stand-in for `ApiClient` that answers from a dict of paths.
    """

    def __init__(self, responses: dict[str, Any]):
        self.responses = responses
        self.calls: list[tuple[str, CachePolicy]] = []

    def fetch(self, path: str, policy: CachePolicy) -> Any:
        self.calls.append((path, policy))
        value = self.responses[path]
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(tmp_path, clock) -> CacheStore:
    return CacheStore(directory=tmp_path / "cache", clock=clock)


@pytest.fixture
def policy() -> CachePolicy:
    return CachePolicy(duration=1, unit="hours")


@pytest.fixture
def sleeps() -> list[float]:
    return []
