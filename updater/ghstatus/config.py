"""
Resolve configuration from defaults, a YAML file, the environment and a prompt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from math import isnan
from os import environ
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from yaml import YAMLError, safe_load

from .cache import CachePolicy
from .consts import CACHE_UNITS, CHART_TYPES, CONFIG_FILE, ENCODING, TOKEN_ENV
from .errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

logger = logging.getLogger(__name__)

ENV_VARS: dict[str, str] = {
    "username": "GITHUB_REPOSITORY_OWNER",
    "theme": "GH_THEME",
    "language_chart_type": "GH_LANGUAGE_CHART_TYPE",
    "cache_duration": "GH_CACHE_DURATION",
    "cache_unit": "GH_CACHE_UNIT",
}
FILE_KEYS: dict[str, str] = {
    "username": "username",
    "theme": "theme",
    "language_chart_type": "languageChartType",
    "cache_duration": "cacheDuration",
    "cache_unit": "cacheUnit",
}


@dataclass(frozen=True)
class Config:
    username: str = ""
    theme: str = "default"
    language_chart_type: str = "bar"
    cache_duration: float = 1
    cache_unit: str = "hours"
    token: str | None = None

    @property
    def cache_policy(self) -> CachePolicy:
        return CachePolicy(duration=self.cache_duration, unit=self.cache_unit)


def load_config(
    path: Path = CONFIG_FILE,
    prompt: Callable[[str], str] = input,
    env: Mapping[str, str] | None = None,
) -> Config:
    """
    Resolve the configuration.

    Later sources win: defaults, then the YAML file, then the environment.
    A username that's still missing is asked for on standard input.

    Args:
        path:   YAML configuration file.
        prompt: Function used to ask for a missing username.
        env:    Environment to read, `os.environ` (after `.env`) by default.

    Return:
        Config: Resolved configuration.

    Raises:
        ConfigError: No username could be resolved.

    """

    if env is None:
        load_dotenv()
        env = environ

    config = Config()
    config = replace(config, **_from_file(path))
    config = replace(config, **_from_env(env))
    config = replace(config, token=env.get(TOKEN_ENV) or None)

    if not config.username:
        logger.info("Username not found in config file or environment variable.")
        try:
            username = prompt("Enter username: ").strip()
        except (EOFError, OSError) as e:
            logger.warning("Could not read username from standard input: %s", e)
            username = ""

        config = replace(config, username=username)

    if not config.username:
        msg = "A GitHub username is required."
        raise ConfigError(msg)

    return config


def _from_file(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding=ENCODING) as file:
            loaded = safe_load(file)
    except FileNotFoundError:
        logger.info("Config file not found at: %s", path)
        return {}
    except (OSError, YAMLError) as e:
        logger.error("Error loading or parsing config file %s: %s", path, e)
        return {}

    if not isinstance(loaded, dict):
        logger.warning("Config file %s does not contain a mapping.", path)
        return {}

    values: dict[str, Any] = {}
    for field, key in FILE_KEYS.items():
        if key in loaded and (value := _validate(field, loaded[key])) is not None:
            values[field] = value

    if not values:
        logger.warning("Config file %s did not contain any valid fields.", path)

    return values


def _from_env(env: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}

    for field, var in ENV_VARS.items():
        raw = env.get(var)
        if not raw:
            continue

        value = _validate(field, raw)
        if value is None:
            logger.warning("Ignoring invalid %s=%r", var, raw)
            continue

        logger.info("Using %s from environment variable %s", field, var)
        values[field] = value

    return values


def _validate(field: str, value: Any) -> Any:
    """
    Coerce a raw setting, returning `None` if it isn't acceptable.
    """

    if field == "cache_duration":
        if isinstance(value, bool):
            return None
        try:
            duration = float(value)
        except (TypeError, ValueError):
            return None
        return None if isnan(duration) else duration

    if not isinstance(value, str) or not value:
        return None
    if field == "language_chart_type" and value not in CHART_TYPES:
        return None
    if field == "cache_unit" and value not in CACHE_UNITS:
        return None

    return value
