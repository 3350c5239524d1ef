"""
Transports that execute a request path against the GitHub API.
"""

from __future__ import annotations

import logging
from enum import Enum
from json import JSONDecodeError, dumps, loads
from os import environ
from subprocess import SubprocessError, run
from threading import Lock
from typing import TYPE_CHECKING, Any

from github import Github
from github.Auth import Token
from github.GithubException import GithubException
from requests.exceptions import RequestException

from .consts import API_ACCEPT, API_BASE, CLI_TOOL, TOKEN_ENV, USER_AGENT
from .errors import ApiError, CliError

if TYPE_CHECKING:
    from github.Requester import Requester

    from .consts import JSONValue

logger = logging.getLogger(__name__)


class Availability(Enum):
    UNKNOWN = "unknown"
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class CliTransport:
    """
    Run requests through an authenticated `gh` command-line tool.

    Whether the tool is usable is probed once, the first time it's
    asked, and remembered for the lifetime of the instance.
    """

    def __init__(self, token: str | None, tool: str = CLI_TOOL) -> None:
        self.token = token
        self.tool = tool
        self.availability = Availability.UNKNOWN
        self._lock = Lock()

    def probe(self) -> bool:
        """
        Check whether the CLI is authenticated and usable.

        Return:
            bool: `True` if requests can go through the CLI.

        """

        with self._lock:
            if self.availability is Availability.UNKNOWN:
                self.availability = self._check_auth()

        return self.availability is Availability.AVAILABLE

    def fetch(self, path: str) -> JSONValue:
        """
        Request a path with `gh api`.

        Args:
            path: Service-relative resource path.

        Return:
            JSONValue: Decoded response.

        Raises:
            CliError: The tool couldn't be run, exited non-zero,
                      or printed something that isn't JSON.

        """

        try:
            result = run(  # noqa: S603
                [self.tool, "api", "--method", "GET", path],
                capture_output=True,
                text=True,
                check=False,
                env=self._env(),
            )
        except (OSError, SubprocessError) as e:
            msg = f"Error running {self.tool} api for {path}: {e!s}"
            raise CliError(msg) from e

        if result.returncode != 0 or not result.stdout.strip():
            msg = (
                f"{self.tool} api failed for {path} "
                f"(exit code {result.returncode}): {result.stderr.strip()}"
            )
            raise CliError(msg)

        try:
            return loads(result.stdout)
        except JSONDecodeError as j:
            msg = f"{self.tool} api returned invalid JSON for {path}: {j!s}"
            raise CliError(msg) from j

    def _check_auth(self) -> Availability:
        if not self.token:
            logger.info("%s is not set, not using %s", TOKEN_ENV, self.tool)
            return Availability.UNAVAILABLE

        try:
            result = run(  # noqa: S603
                [self.tool, "auth", "status"],
                capture_output=True,
                text=True,
                check=False,
                env=self._env(),
            )
        except (OSError, SubprocessError) as e:
            logger.warning("Could not run %s auth status: %s", self.tool, e)
            return Availability.UNAVAILABLE

        if result.returncode != 0:
            logger.info(
                "%s is not authenticated (exit code %d)", self.tool, result.returncode
            )
            return Availability.UNAVAILABLE

        logger.info("Using %s for API requests", self.tool)
        return Availability.AVAILABLE

    def _env(self) -> dict[str, str]:
        env: dict[str, str] = dict(environ)
        if self.token:
            env[TOKEN_ENV] = self.token
        return env


class HttpTransport:
    """
    Run requests directly against the REST API through PyGithub's requester.

    Requests carry the token and a descriptive user agent when a token
    is given, and go out unauthenticated otherwise.
    """

    def __init__(
        self, token: str | None = None, requester: Requester | None = None
    ) -> None:
        self.token = token
        self._requester = requester

    @property
    def requester(self) -> Requester:
        if self._requester is None:
            if self.token:
                client = Github(auth=Token(self.token), user_agent=USER_AGENT, retry=None)
            else:
                logger.warning("%s is not set, using unauthenticated requests", TOKEN_ENV)
                client = Github(retry=None)

            self._requester = client.requester

        return self._requester

    def fetch(self, path: str) -> JSONValue:
        """
        Request a path over HTTP.

        Args:
            path: Service-relative resource path.

        Return:
            JSONValue: Decoded response.

        Raises:
            ApiError: Non-success status, network failure or a body
                      that isn't JSON.

        """

        url: str = f"{API_BASE}{path}"

        try:
            headers, data = self.requester.requestJsonAndCheck(
                "GET", path, headers={"Accept": API_ACCEPT}
            )
        except GithubException as g:
            raise ApiError(
                url=url,
                status=g.status,
                body=_body_text(g.data),
                rate_limit_remaining=(g.headers or {}).get("x-ratelimit-remaining"),
            ) from g
        except RequestException as r:
            raise ApiError(url=url, status=None, body=str(r)) from r
        except ValueError as v:
            # Success status with a body that isn't JSON
            raise ApiError(url=url, status=None, body=str(v)) from v

        remaining: str | None = headers.get("x-ratelimit-remaining")
        if remaining is not None:
            logger.info("Fetched %s, rate limit remaining: %s", url, remaining)
        else:
            logger.info("Fetched %s", url)

        return data


def _body_text(data: Any) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return dumps(data)
