"""
Pytest tests for the CLI and HTTP transports.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from subprocess import CompletedProcess, TimeoutExpired

import pytest
from github.Auth import Token
from github.GithubException import GithubException
from requests.exceptions import ConnectionError as RequestsConnectionError

from ghstatus import transport
from ghstatus.consts import USER_AGENT
from ghstatus.errors import ApiError, CliError
from ghstatus.transport import Availability, CliTransport, HttpTransport


class FakeRun:
    def __init__(self, *results):
        self.results = list(results)
        self.calls: list[list[str]] = []

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        result = self.results.pop(0)
        if isinstance(result, BaseException):
            raise result
        returncode, stdout, stderr = result
        return CompletedProcess(args, returncode, stdout, stderr)


class FakeRequester:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def requestJsonAndCheck(self, verb, url, headers=None):  # noqa: N802
        self.calls.append((verb, url, headers))
        if self.error is not None:
            raise self.error
        return self.result


# ============================================================================
# CLI availability probe
# ============================================================================


def test_probe_without_token_never_spawns(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(transport, "run", fake)
    cli = CliTransport(token=None)

    assert cli.probe() is False
    assert cli.availability is Availability.UNAVAILABLE
    assert fake.calls == []


def test_probe_success_is_memoized(monkeypatch):
    fake = FakeRun((0, "", "Logged in"))
    monkeypatch.setattr(transport, "run", fake)
    cli = CliTransport(token="t0ken")

    assert cli.availability is Availability.UNKNOWN
    assert cli.probe() is True
    assert cli.probe() is True
    assert cli.availability is Availability.AVAILABLE
    assert fake.calls == [["gh", "auth", "status"]]


def test_probe_failure_is_not_retried(monkeypatch):
    fake = FakeRun((1, "", "not logged in"), (0, "", ""))
    monkeypatch.setattr(transport, "run", fake)
    cli = CliTransport(token="t0ken")

    assert cli.probe() is False
    assert cli.probe() is False
    assert len(fake.calls) == 1


@pytest.mark.parametrize(
    "error",
    [FileNotFoundError("gh"), TimeoutExpired(["gh", "auth", "status"], 5)],
)
def test_probe_execution_error_is_unavailable(monkeypatch, error):
    monkeypatch.setattr(transport, "run", FakeRun(error))
    cli = CliTransport(token="t0ken")

    assert cli.probe() is False
    assert cli.availability is Availability.UNAVAILABLE


def test_probe_passes_token_to_tool(monkeypatch):
    seen = {}

    def fake_run(args, **kwargs):
        seen.update(kwargs["env"])
        return CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(transport, "run", fake_run)

    CliTransport(token="t0ken").probe()

    assert seen["GH_TOKEN"] == "t0ken"


def test_concurrent_probes_check_once(monkeypatch):
    calls = []

    def slow_run(args, **kwargs):
        calls.append(list(args))
        time.sleep(0.05)
        return CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(transport, "run", slow_run)
    cli = CliTransport(token="t0ken")

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: cli.probe(), range(4)))

    assert results == [True] * 4
    assert calls == [["gh", "auth", "status"]]


# ============================================================================
# CLI fetch
# ============================================================================


def test_cli_fetch_decodes_output(monkeypatch):
    fake = FakeRun((0, '{"login": "octocat"}', ""))
    monkeypatch.setattr(transport, "run", fake)

    data = CliTransport(token="t0ken").fetch("/users/octocat")

    assert data == {"login": "octocat"}
    assert fake.calls == [["gh", "api", "--method", "GET", "/users/octocat"]]


@pytest.mark.parametrize(
    "result",
    [
        (1, "", "HTTP 404: Not Found"),
        (0, "", ""),
        (0, "   \n", ""),
        (0, "<html>", ""),
        OSError("spawn failed"),
    ],
)
def test_cli_fetch_failures_raise_cli_error(monkeypatch, result):
    monkeypatch.setattr(transport, "run", FakeRun(result))

    with pytest.raises(CliError):
        CliTransport(token="t0ken").fetch("/users/octocat")


# ============================================================================
# HTTP fetch
# ============================================================================


def test_http_fetch_returns_data():
    requester = FakeRequester(result=({"x-ratelimit-remaining": "4999"}, {"Go": 1}))
    http = HttpTransport(token="t0ken", requester=requester)

    assert http.fetch("/repos/octocat/hello/languages") == {"Go": 1}
    assert requester.calls == [
        (
            "GET",
            "/repos/octocat/hello/languages",
            {"Accept": "application/vnd.github.v3+json"},
        )
    ]


def test_http_error_carries_status_body_and_rate_limit():
    error = GithubException(
        403, {"message": "API rate limit exceeded"}, {"x-ratelimit-remaining": "0"}
    )
    http = HttpTransport(requester=FakeRequester(error=error))

    with pytest.raises(ApiError) as info:
        http.fetch("/users/octocat")

    assert info.value.status == 403
    assert "API rate limit exceeded" in info.value.body
    assert info.value.rate_limit_remaining == "0"
    assert info.value.url == "https://api.github.com/users/octocat"
    assert "Status 403" in str(info.value)


def test_http_network_error_has_no_status():
    http = HttpTransport(requester=FakeRequester(error=RequestsConnectionError("boom")))

    with pytest.raises(ApiError) as info:
        http.fetch("/users/octocat")

    assert info.value.status is None
    assert "boom" in info.value.body


def test_http_non_json_body_raises_api_error():
    http = HttpTransport(requester=FakeRequester(error=ValueError("Expecting value")))

    with pytest.raises(ApiError) as info:
        http.fetch("/users/octocat")

    assert info.value.status is None
    assert "Expecting value" in info.value.body


# ============================================================================
# HTTP client construction
# ============================================================================


class RecordingGithub:
    instances: list[dict] = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.requester = object()
        RecordingGithub.instances.append(kwargs)


@pytest.fixture
def github(monkeypatch):
    RecordingGithub.instances = []
    monkeypatch.setattr(transport, "Github", RecordingGithub)
    return RecordingGithub


def test_token_client_is_authenticated(github):
    http = HttpTransport(token="t0ken")

    requester = http.requester

    assert http.requester is requester
    assert len(github.instances) == 1
    kwargs = github.instances[0]
    assert isinstance(kwargs["auth"], Token)
    assert kwargs["auth"].token == "t0ken"
    assert kwargs["user_agent"] == USER_AGENT
    assert kwargs["retry"] is None


def test_tokenless_client_is_anonymous(github):
    assert HttpTransport(token=None).requester is not None

    assert github.instances == [{"retry": None}]
