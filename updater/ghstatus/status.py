"""
Functions for assembling a user's GitHub status.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .api import ApiClient
from .consts import REPOS_PER_PAGE
from .errors import StatusError, TransportError
from .languages import LanguageAggregator, LanguageUsages, validate_language_map
from .utils import api_path

if TYPE_CHECKING:
    from concurrent.futures import Future

    from .cache import CachePolicy
    from .config import Config
    from .consts import LanguageMap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityStatus:
    followers: int
    followings: int
    public_repos_count: int
    current_year_contributions: int = 0

    @classmethod
    def from_profile(cls, profile: dict[str, Any]) -> ActivityStatus:
        """
        Build an activity snapshot from a `/users/{login}` response.

        Args:
            profile: Decoded user profile.

        Return:
            ActivityStatus: Snapshot, contributions always 0.

        """

        return cls(
            followers=int(profile.get("followers") or 0),
            followings=int(profile.get("following") or 0),
            public_repos_count=int(profile.get("public_repos") or 0),
        )


@dataclass(frozen=True)
class RepoLanguages:
    """
    Outcome of fetching one repository's languages.

    Exactly one of `languages` and `error` is set.
    """

    repo: str
    languages: LanguageMap | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class GitHubStatus:
    languages_by_repo: LanguageUsages
    languages_by_commits: LanguageUsages
    activity: ActivityStatus
    failed_repos: tuple[RepoLanguages, ...] = ()


class StatusAssembler:
    """
    Fetch a user's profile, repositories and languages, and fold them.

    A failed profile or repository-list fetch ends the run. A failed
    languages fetch only drops that repository.
    """

    def __init__(self, client: ApiClient, policy: CachePolicy) -> None:
        self.client = client
        self.policy = policy

    def assemble(self, username: str) -> GitHubStatus:
        """
        Build the status for a user.

        Args:
            username: GitHub login.

        Return:
            GitHubStatus: Activity plus aggregated languages.

        Raises:
            StatusError: The profile or the repository list couldn't be fetched.

        """

        profile, repos = self.fetch_core(username)
        results: list[RepoLanguages] = self.fetch_languages(username, repos)

        aggregator = LanguageAggregator()
        aggregator.merge(r.languages for r in results if r.languages is not None)
        usages: LanguageUsages = aggregator.usages()

        failures = tuple(r for r in results if not r.ok)
        logger.info(
            "Aggregated %d languages from %d of %d repositories",
            len(usages.as_dict()),
            len(results) - len(failures),
            len(results),
        )

        return GitHubStatus(
            languages_by_repo=usages,
            languages_by_commits=usages,
            activity=ActivityStatus.from_profile(profile),
            failed_repos=failures,
        )

    def fetch_core(self, username: str) -> tuple[dict[str, Any], list[dict[str, Any]]]:
        """
        Fetch the user profile and the owned repositories in parallel.

        Args:
            username: GitHub login.

        Return:
            (dict, list): Profile and repository list.

        Raises:
            StatusError: Either fetch failed.

        """

        profile_path = f"/users/{username}"
        repos_path = f"/users/{username}/repos?per_page={REPOS_PER_PAGE}&type=owner"

        with ThreadPoolExecutor(max_workers=2) as pool:
            profile_future = pool.submit(self.client.fetch, profile_path, self.policy)
            repos_future = pool.submit(self.client.fetch, repos_path, self.policy)

            profile = _core_result(profile_future, "user profile", username)
            repos = _core_result(repos_future, "repository list", username)

        if not isinstance(profile, dict):
            msg = f"Unexpected user profile response for {username}: {profile!r}"
            raise StatusError(msg)
        if not isinstance(repos, list):
            msg = f"Unexpected repository list response for {username}: {repos!r}"
            raise StatusError(msg)

        return profile, repos

    def fetch_languages(
        self, username: str, repos: list[dict[str, Any]]
    ) -> list[RepoLanguages]:
        """
        Fetch every repository's languages, one after the other.

        Args:
            username: Owner used when a repository has no `languages_url`.
            repos:    Repository objects from the repository list.

        Return:
            list[RepoLanguages]: One result per repository, in input order.

        """

        results: list[RepoLanguages] = []

        for repo in repos:
            if not isinstance(repo, dict):
                logger.warning("Skipping malformed repository entry: %r", repo)
                results.append(RepoLanguages(repo=str(repo), error="malformed repository entry"))
                continue

            name: str = str(repo.get("name", "?"))
            url: str = repo.get("languages_url") or f"/repos/{username}/{name}/languages"

            try:
                languages = self.client.fetch(api_path(url), self.policy)
                results.append(RepoLanguages(repo=name, languages=_language_map(languages)))
            except (TransportError, ValueError) as e:
                logger.warning("Failed to fetch languages for repo %s: %s", name, e)
                results.append(RepoLanguages(repo=name, error=str(e)))

        return results


def github_status(config: Config, client: ApiClient | None = None) -> GitHubStatus:
    """
    Assemble the status for the configured user.

    Args:
        config: Resolved configuration.
        client: API client, built from the config token if not given.

    Return:
        GitHubStatus: Activity plus aggregated languages.

    """

    if client is None:
        client = ApiClient(token=config.token)

    return StatusAssembler(client, config.cache_policy).assemble(config.username)


def _core_result(future: Future[Any], what: str, username: str) -> Any:
    try:
        return future.result()
    except TransportError as e:
        msg = f"Failed to fetch {what} for {username}: {e!s}"
        raise StatusError(msg) from e


def _language_map(data: Any) -> LanguageMap:
    if not isinstance(data, dict):
        msg = f"Expected a language map, got {type(data).__name__}"
        raise ValueError(msg)

    return dict(validate_language_map(data))
