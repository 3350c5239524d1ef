"""
Functions for handling the caching of API responses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from json import JSONDecodeError, dump, load
from math import inf, isinf, isnan
from os import replace
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import TYPE_CHECKING

from .consts import CACHE_DIR, CACHE_UNITS, ENCODING
from .utils import cache_key, now_ms

if TYPE_CHECKING:
    from collections.abc import Callable

    from .consts import JSONValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachePolicy:
    """
    How long a cached response stays fresh.

    Attributes:
        duration: Number of `unit`s a response stays fresh.
        unit:     One of `seconds`, `minutes`, `hours`, `days`,
                  `weeks`, `months` or `years`.

    """

    duration: float = 0
    unit: str = "hours"

    def window_ms(self) -> float:
        """
        Convert the policy to an absolute expiry window.

        Return:
            float: Window in milliseconds, 0 when caching is disabled
                   and `inf` when entries never expire.

        """

        if isnan(self.duration) or self.duration <= 0:
            return 0

        unit_ms: int = CACHE_UNITS.get(self.unit, 0)
        if unit_ms == 0:
            return 0
        if isinf(self.duration):
            return inf

        return int(self.duration * unit_ms)


@dataclass(frozen=True)
class CacheEntry:
    timestamp: int
    payload: JSONValue


class CacheStore:
    """
    One JSON file per request path, stamped with the time it was written.

    Faults never reach the caller: a file that can't be read counts as
    a miss, and a file that can't be written is skipped.
    """

    def __init__(
        self,
        directory: Path = CACHE_DIR,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.directory = directory
        self.clock = clock

    def path_for(self, key: str) -> Path:
        """
        Resolve the cache file for a request path.

        Args:
            key: Request identity.

        Return:
            Path: File the entry for `key` lives in.

        """

        return self.directory / f"{cache_key(key)}.json"

    def read(self, key: str, policy: CachePolicy) -> CacheEntry | None:
        """
        Read a fresh cache entry.

        Args:
            key:    Request identity.
            policy: Freshness policy to validate the entry against.

        Return:
            CacheEntry | None: Entry, or `None` on any kind of miss.

        """

        window: float = policy.window_ms()
        if window == 0:
            logger.debug("Cache disabled for %s", key)
            return None

        path: Path = self.path_for(key)

        try:
            with path.open(encoding=ENCODING) as cache:
                raw = load(cache)
            entry = CacheEntry(timestamp=int(raw["timestamp"]), payload=raw["data"])
        except FileNotFoundError:
            logger.debug("Cache miss for %s", key)
            return None
        except (OSError, JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Error reading cache for %s: %s", key, e)
            return None

        if self.clock() - entry.timestamp >= window:
            logger.info("Cache expired for %s", key)
            return None

        logger.info("Cache hit for %s", key)
        return entry

    def write(self, key: str, payload: JSONValue) -> None:
        """
        Stamp a payload with the current time and persist it.

        Args:
            key:     Request identity.
            payload: JSON-serializable response data.

        """

        path: Path = self.path_for(key)
        tmp: Path | None = None

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding=ENCODING,
                dir=self.directory,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as cache:
                tmp = Path(cache.name)
                dump({"timestamp": self.clock(), "data": payload}, cache)
            replace(tmp, path)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Error writing cache for %s: %s", key, e)
            if tmp is not None:
                tmp.unlink(missing_ok=True)
            return

        logger.debug("Cache written for %s", key)
