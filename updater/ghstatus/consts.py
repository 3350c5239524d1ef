"""
Constants used by the package.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

JSONValue = Any
LanguageMap = dict[str, int]

ENCODING: str = "utf-8"

API_BASE: str = "https://api.github.com"
API_ACCEPT: str = "application/vnd.github.v3+json"
USER_AGENT: str = "ghstatus-card-builder"
CLI_TOOL: str = "gh"
TOKEN_ENV: str = "GH_TOKEN"

REQUEST_DELAY: float = 0.1
REPOS_PER_PAGE: int = 100

CACHE_UNITS: dict[str, int] = {
    "seconds": 1000,
    "minutes": 1000 * 60,
    "hours": 1000 * 60 * 60,
    "days": 1000 * 60 * 60 * 24,
    "weeks": 1000 * 60 * 60 * 24 * 7,
    "months": 1000 * 60 * 60 * 24 * 30,
    "years": 1000 * 60 * 60 * 24 * 365,
}
CHART_TYPES: tuple[str, ...] = ("bar", "pie")
KEY_HASH_LENGTH: int = 10

WORK_DIR: Path = Path.cwd()
CACHE_DIR: Path = Path(WORK_DIR / ".cache")
CONFIG_FILE: Path = Path(WORK_DIR / "config" / "gh.yaml")
OUT_DIR: Path = Path(WORK_DIR / "out")
