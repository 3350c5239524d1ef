"""
Pytest tests for the cached API client.
"""

from __future__ import annotations

import pytest

from conftest import FakeCli, FakeHttp
from ghstatus import transport
from ghstatus.api import ApiClient
from ghstatus.cache import CachePolicy
from ghstatus.errors import ApiError
from ghstatus.transport import CliTransport

PATH = "/users/octocat"
PROFILE = {"login": "octocat", "followers": 5}


def make_client(store, sleeps, cli, http):
    return ApiClient(store=store, cli=cli, http=http, delay=0.1, sleeper=sleeps.append)


def test_cache_hit_skips_delay_and_transports(store, policy, sleeps):
    store.write(PATH, PROFILE)
    cli, http = FakeCli(), FakeHttp()
    client = make_client(store, sleeps, cli, http)

    assert client.fetch(PATH, policy) == PROFILE
    assert sleeps == []
    assert cli.probes == 0
    assert cli.calls == []
    assert http.calls == []


def test_cli_is_preferred_and_written_through(store, policy, sleeps):
    cli, http = FakeCli(responses={PATH: PROFILE}), FakeHttp()
    client = make_client(store, sleeps, cli, http)

    assert client.fetch(PATH, policy) == PROFILE
    assert sleeps == [0.1]
    assert cli.calls == [PATH]
    assert http.calls == []

    assert client.fetch(PATH, policy) == PROFILE
    assert cli.calls == [PATH]
    assert store.read(PATH, policy).payload == PROFILE


def test_cli_failure_falls_back_to_http(store, policy, sleeps):
    cli, http = FakeCli(), FakeHttp({PATH: PROFILE})
    client = make_client(store, sleeps, cli, http)

    assert client.fetch(PATH, policy) == PROFILE
    assert cli.calls == [PATH]
    assert http.calls == [PATH]
    assert store.read(PATH, policy).payload == PROFILE


def test_unavailable_cli_goes_straight_to_http(store, policy, sleeps):
    cli, http = FakeCli(available=False), FakeHttp({PATH: PROFILE})
    client = make_client(store, sleeps, cli, http)

    assert client.fetch(PATH, policy) == PROFILE
    assert cli.calls == []
    assert http.calls == [PATH]


def test_http_failure_propagates_and_is_not_cached(store, policy, sleeps):
    error = ApiError(url=f"https://api.github.com{PATH}", status=404, body="Not Found")
    cli, http = FakeCli(available=False), FakeHttp({PATH: error})
    client = make_client(store, sleeps, cli, http)

    with pytest.raises(ApiError) as info:
        client.fetch(PATH, policy)

    assert info.value.status == 404
    assert store.read(PATH, policy) is None


def test_disabled_cache_always_goes_upstream(store, sleeps):
    policy = CachePolicy(duration=0, unit="hours")
    cli, http = FakeCli(available=False), FakeHttp({PATH: PROFILE})
    client = make_client(store, sleeps, cli, http)

    client.fetch(PATH, policy)
    client.fetch(PATH, policy)

    assert http.calls == [PATH, PATH]
    assert sleeps == [0.1, 0.1]


def test_missing_token_never_invokes_cli(monkeypatch, store, policy, sleeps):
    def forbidden(*args, **kwargs):
        msg = "the CLI must not be spawned without a token"
        raise AssertionError(msg)

    monkeypatch.setattr(transport, "run", forbidden)
    http = FakeHttp({PATH: PROFILE, "/users/octocat/repos": []})
    client = make_client(store, sleeps, CliTransport(token=None), http)

    assert client.fetch(PATH, policy) == PROFILE
    assert client.fetch("/users/octocat/repos", policy) == []
    assert http.calls == [PATH, "/users/octocat/repos"]


def test_default_client_owns_transports(store):
    client = ApiClient(token="t0ken", store=store)

    assert client.cli.token == "t0ken"
    assert client.http.token == "t0ken"
    assert client.store is store
