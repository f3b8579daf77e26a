from collections.abc import Iterator
from collections.abc import Mapping
from datetime import UTC
from datetime import date
from datetime import datetime
from datetime import timedelta
from typing import Any

import httpx

USER_AGENT = "github-stats-cards"

USER_STATS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    name
    avatarUrl
    contributionsCollection(from: $from, to: $to) {
      totalCommitContributions
      restrictedContributionsCount
    }
    repositoriesContributedTo(
      first: 1
      contributionTypes: [COMMIT, ISSUE, PULL_REQUEST, REPOSITORY]
    ) {
      totalCount
    }
    pullRequests(first: 1) {
      totalCount
    }
    issues(first: 1) {
      totalCount
    }
    repositories(
      first: 100
      ownerAffiliations: OWNER
      orderBy: {direction: DESC, field: STARGAZERS}
    ) {
      totalCount
      nodes {
        stargazerCount
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

STARS_PAGE_QUERY = """
query($login: String!, $cursor: String) {
  user(login: $login) {
    repositories(
      first: 100
      after: $cursor
      ownerAffiliations: OWNER
      orderBy: {direction: DESC, field: STARGAZERS}
    ) {
      nodes {
        stargazerCount
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

LANGUAGES_PAGE_QUERY = """
query($login: String!, $cursor: String) {
  user(login: $login) {
    repositories(
      first: 100
      after: $cursor
      ownerAffiliations: OWNER
      isFork: false
      orderBy: {direction: DESC, field: PUSHED_AT}
    ) {
      nodes {
        languages(first: 10, orderBy: {direction: DESC, field: SIZE}) {
          edges {
            size
            node {
              name
              color
            }
          }
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""

CONTRIBUTION_CALENDAR_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


def graphql_request(
    query: str,
    variables: Mapping[str, Any],
    token: str,
    graphql_url: str,
    timeout: float = 20.0,
) -> Mapping[str, Any]:
    """POST a GraphQL query to GitHub and return its `data` object."""

    if not token:
        raise ValueError("GITHUB_TOKEN is required for GraphQL requests")

    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }

    response = httpx.post(
        graphql_url,
        json={"query": query, "variables": dict(variables)},
        headers=headers,
        timeout=timeout,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    errors = payload.get("errors")
    if errors:
        messages = [
            str(error.get("message", "unknown error"))
            for error in errors
            if isinstance(error, Mapping)
        ]
        raise ValueError(f"GraphQL error: {', '.join(messages) or 'unknown error'}")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    return data


def _get_user(data: Mapping[str, Any]) -> Mapping[str, Any]:
    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ValueError("GitHub user not found")
    return user


def _get_repositories(user: Mapping[str, Any]) -> Mapping[str, Any]:
    repositories = user.get("repositories")
    if not isinstance(repositories, Mapping):
        raise ValueError("GitHub repositories are missing")
    return repositories


def _next_cursor(repositories: Mapping[str, Any]) -> str | None:
    """Return the cursor of the next page, or None on the last page."""

    page_info = repositories.get("pageInfo")
    if not isinstance(page_info, Mapping) or not page_info.get("hasNextPage"):
        return None

    cursor = page_info.get("endCursor")
    if not isinstance(cursor, str) or not cursor:
        raise ValueError("GitHub pageInfo is missing endCursor")
    return cursor


def _sum_stars(repositories: Mapping[str, Any]) -> int:
    nodes = repositories.get("nodes") or []
    return sum(
        node.get("stargazerCount", 0) for node in nodes if isinstance(node, Mapping)
    )


def _year_window(today: date) -> tuple[str, str]:
    from_day = today - timedelta(days=364)
    return f"{from_day.isoformat()}T00:00:00Z", f"{today.isoformat()}T23:59:59Z"


def _total_count(user: Mapping[str, Any], field: str) -> int:
    connection = user.get(field)
    if not isinstance(connection, Mapping):
        raise ValueError(f"GitHub {field} is missing")
    count = connection.get("totalCount")
    if not isinstance(count, int):
        raise ValueError(f"GitHub {field} totalCount is missing")
    return count


def fetch_user_stats(
    username: str,
    token: str,
    graphql_url: str,
    timeout: float = 20.0,
) -> dict[str, str | int]:
    """Fetch profile totals for a user, paging through owned repositories for stars."""

    now = datetime.now(UTC)
    variables = {
        "login": username,
        "from": (now - timedelta(days=365)).isoformat(),
        "to": now.isoformat(),
    }
    user = _get_user(
        graphql_request(USER_STATS_QUERY, variables, token, graphql_url, timeout)
    )

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    repositories = _get_repositories(user)
    total_stars = _sum_stars(repositories)
    cursor = _next_cursor(repositories)
    while cursor is not None:
        page = _get_repositories(
            _get_user(
                graphql_request(
                    STARS_PAGE_QUERY,
                    {"login": username, "cursor": cursor},
                    token,
                    graphql_url,
                    timeout,
                )
            )
        )
        total_stars += _sum_stars(page)
        cursor = _next_cursor(page)

    raw_name = user.get("name")
    return {
        "username": username,
        "name": raw_name if isinstance(raw_name, str) and raw_name else username,
        "avatar_url": str(user.get("avatarUrl") or ""),
        "total_stars": total_stars,
        "total_commits": int(collection.get("totalCommitContributions") or 0)
        + int(collection.get("restrictedContributionsCount") or 0),
        "total_prs": _total_count(user, "pullRequests"),
        "total_issues": _total_count(user, "issues"),
        "total_repos": _total_count(user, "repositories"),
        "contributed_to": _total_count(user, "repositoriesContributedTo"),
    }


def iter_language_edges(
    username: str,
    token: str,
    graphql_url: str,
    timeout: float = 20.0,
) -> Iterator[Mapping[str, Any]]:
    """Yield language edges from every owned, non-fork repository of a user."""

    cursor: str | None = None
    while True:
        repositories = _get_repositories(
            _get_user(
                graphql_request(
                    LANGUAGES_PAGE_QUERY,
                    {"login": username, "cursor": cursor},
                    token,
                    graphql_url,
                    timeout,
                )
            )
        )
        for repository in repositories.get("nodes") or []:
            if not isinstance(repository, Mapping):
                continue
            languages = repository.get("languages")
            if not isinstance(languages, Mapping):
                continue
            for edge in languages.get("edges") or []:
                if isinstance(edge, Mapping):
                    yield edge

        cursor = _next_cursor(repositories)
        if cursor is None:
            return


def fetch_contribution_calendar(
    username: str,
    token: str,
    graphql_url: str,
    today: date,
    timeout: float = 20.0,
) -> Mapping[str, Any]:
    """Fetch the one-year contribution calendar ending at `today`."""

    from_value, to_value = _year_window(today)
    variables = {"login": username, "from": from_value, "to": to_value}
    user = _get_user(
        graphql_request(
            CONTRIBUTION_CALENDAR_QUERY, variables, token, graphql_url, timeout
        )
    )

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    return calendar
