"""
Main entry point for script execution.
"""

from __future__ import annotations

import logging
import sys
from os import environ
from typing import TYPE_CHECKING

from ghstatus import GhStatusError, build_cards, github_status, load_config

if TYPE_CHECKING:
    from ghstatus import Config, GitHubStatus

logger = logging.getLogger("ghstatus")


def log_level(name: str) -> int:
    """
    Resolve a level name, falling back to `INFO` for unknown names.

    Args:
        name: Level name such as `debug` or `WARNING`.

    Return:
        int: Numeric logging level.

    """

    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def main() -> int:
    """
    Execute script.

    Return:
        int: Process exit code.

    """

    logging.basicConfig(
        level=log_level(environ.get("GH_LOG_LEVEL", "INFO")),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config: Config = load_config()
        status: GitHubStatus = github_status(config)
        build_cards(status, config)
    except GhStatusError as e:
        logger.error("%s", e)
        return 1

    activity = status.activity
    logger.info(
        "%s: %d followers, %d following, %d public repos, %d bytes of code",
        config.username,
        activity.followers,
        activity.followings,
        activity.public_repos_count,
        status.languages_by_repo.total(),
    )

    for failure in status.failed_repos:
        logger.info("Skipped %s: %s", failure.repo, failure.error)

    return 0


if __name__ == "__main__":
    sys.exit(main())
