"""
Fetch a user's Github language and activity statistics and render status cards.
"""

from __future__ import annotations

from .api import ApiClient
from .cache import CacheEntry, CachePolicy, CacheStore
from .config import Config, load_config
from .errors import (
    ApiError,
    CliError,
    ConfigError,
    GhStatusError,
    RenderError,
    StatusError,
    TransportError,
)
from .languages import LanguageAggregator, LanguageUsage, LanguageUsages
from .status import (
    ActivityStatus,
    GitHubStatus,
    RepoLanguages,
    StatusAssembler,
    github_status,
)
from .svg import build_cards
from .transport import Availability, CliTransport, HttpTransport

__all__: list[str] = [
    "ActivityStatus",
    "ApiClient",
    "ApiError",
    "Availability",
    "CacheEntry",
    "CachePolicy",
    "CacheStore",
    "CliError",
    "CliTransport",
    "Config",
    "ConfigError",
    "GhStatusError",
    "GitHubStatus",
    "HttpTransport",
    "LanguageAggregator",
    "LanguageUsage",
    "LanguageUsages",
    "RenderError",
    "RepoLanguages",
    "StatusAssembler",
    "StatusError",
    "TransportError",
    "build_cards",
    "github_status",
    "load_config",
]
