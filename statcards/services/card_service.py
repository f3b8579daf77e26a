from collections.abc import Callable
from datetime import date
from typing import TypeVar

import httpx

from statcards.github_api import fetch_contribution_calendar
from statcards.github_api import fetch_user_stats
from statcards.github_api import iter_language_edges
from statcards.models import ContributionCalendarPayload
from statcards.models import LanguageStat
from statcards.models import StreakResult
from statcards.models import UserStats
from statcards.services.stats import aggregate_languages
from statcards.services.streaks import calculate_streaks
from statcards.services.streaks import normalize_calendar
from statcards.settings import Settings

T = TypeVar("T")


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


def _call_github(operation: Callable[[], T]) -> T:
    """Run a GitHub-backed operation and translate its failures."""

    try:
        return operation()
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError from exc
        raise GitHubAPIError(
            f"GitHub API error: {exc.response.status_code} "
            f"{exc.response.reason_phrase}"
        ) from exc
    except Exception as exc:
        raise GitHubAPIError(str(exc) or "GitHub API request failed") from exc


def get_user_stats(settings: Settings) -> UserStats:
    """Fetch profile totals for the configured GitHub user."""

    return _call_github(
        lambda: UserStats.model_validate(
            fetch_user_stats(
                username=settings.github_username,
                token=settings.github_token,
                graphql_url=settings.github_graphql_url,
                timeout=settings.github_timeout_seconds,
            )
        )
    )


def get_language_stats(settings: Settings) -> list[LanguageStat]:
    """Aggregate language usage across the configured user's repositories."""

    return _call_github(
        lambda: aggregate_languages(
            iter_language_edges(
                username=settings.github_username,
                token=settings.github_token,
                graphql_url=settings.github_graphql_url,
                timeout=settings.github_timeout_seconds,
            )
        )
    )


def get_streak_stats(settings: Settings, today: date) -> StreakResult:
    """Fetch the contribution calendar and compute streaks relative to `today`.

    The whole calendar is fetched before any computation happens; a malformed
    day in the payload fails the request instead of being skipped.
    """

    def operation() -> StreakResult:
        raw_calendar = fetch_contribution_calendar(
            username=settings.github_username,
            token=settings.github_token,
            graphql_url=settings.github_graphql_url,
            today=today,
            timeout=settings.github_timeout_seconds,
        )
        payload = ContributionCalendarPayload.model_validate(raw_calendar)
        return calculate_streaks(normalize_calendar(payload), today=today)

    return _call_github(operation)
