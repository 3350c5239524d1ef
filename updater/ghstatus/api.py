"""
Cached, rate-limited access to the GitHub REST API.
"""

from __future__ import annotations

import logging
from time import sleep
from typing import TYPE_CHECKING

from .cache import CacheStore
from .consts import API_BASE, REQUEST_DELAY
from .errors import CliError
from .transport import CliTransport, HttpTransport

if TYPE_CHECKING:
    from collections.abc import Callable

    from .cache import CachePolicy
    from .consts import JSONValue

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Fetch JSON from GitHub, preferring the cache, then `gh`, then HTTP.

    Attributes:
        store: Cache the responses are read from and written to.
        cli:   CLI transport, which owns the memoized availability probe.
        http:  HTTP transport used when the CLI is unavailable or fails.
        delay: Seconds to wait before every uncached request.

    """

    def __init__(
        self,
        token: str | None = None,
        store: CacheStore | None = None,
        cli: CliTransport | None = None,
        http: HttpTransport | None = None,
        delay: float = REQUEST_DELAY,
        sleeper: Callable[[float], None] = sleep,
    ) -> None:
        self.store = store if store is not None else CacheStore()
        self.cli = cli if cli is not None else CliTransport(token)
        self.http = http if http is not None else HttpTransport(token)
        self.delay = delay
        self.sleeper = sleeper

    def fetch(self, path: str, policy: CachePolicy) -> JSONValue:
        """
        Fetch a resource.

        Args:
            path:   Service-relative resource path, also the cache key.
            policy: Cache freshness policy.

        Return:
            JSONValue: Decoded response.

        Raises:
            ApiError: The HTTP request failed. Nothing else escapes:
                      cache faults are misses and CLI faults fall back.

        """

        entry = self.store.read(path, policy)
        if entry is not None:
            return entry.payload

        self.sleeper(self.delay)

        if self.cli.probe():
            try:
                data = self.cli.fetch(path)
            except CliError as c:
                logger.warning("%s Falling back to HTTP.", c)
            else:
                logger.info("Fetched via %s: %s%s", self.cli.tool, API_BASE, path)
                self.store.write(path, data)
                return data

        data = self.http.fetch(path)
        self.store.write(path, data)
        return data
