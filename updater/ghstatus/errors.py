"""
Exceptions raised by the package.
"""

from __future__ import annotations


class GhStatusError(Exception):
    """
    Base class for every error this package raises.
    """


class ConfigError(GhStatusError):
    """
    No usable configuration could be resolved.
    """


class TransportError(GhStatusError):
    """
    A request could not be executed against GitHub.
    """


class CliError(TransportError):
    """
    The `gh` command-line tool failed to answer a request.
    """


class ApiError(TransportError):
    """
    An HTTP request to the GitHub API failed.

    Attributes:
        url:                  Absolute URL that was requested.
        status:               HTTP status, `None` for network errors.
        body:                 Response body (or error text) for diagnostics.
        rate_limit_remaining: Value of `x-ratelimit-remaining`, if sent.

    """

    def __init__(
        self,
        url: str,
        status: int | None,
        body: str,
        rate_limit_remaining: str | None = None,
    ) -> None:
        self.url = url
        self.status = status
        self.body = body
        self.rate_limit_remaining = rate_limit_remaining

        super().__init__(
            f"Failed to fetch {url}: Status {status}. "
            f"Rate Limit Remaining: {rate_limit_remaining}. Body: {body}"
        )


class StatusError(GhStatusError):
    """
    A core fact (user profile or repository list) could not be fetched.
    """


class RenderError(GhStatusError):
    """
    Descriptive exception for card-rendering errors.
    """
