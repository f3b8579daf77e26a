from collections.abc import Iterable
from collections.abc import Mapping

from statcards.models import LanguageStat
from statcards.models import Rank
from statcards.models import UserStats

DEFAULT_LANGUAGE_COLOR = "#858585"

# (minimum score, level, top percentile), highest first.
RANK_THRESHOLDS: tuple[tuple[int, str, int], ...] = (
    (10000, "S+", 1),
    (5000, "S", 5),
    (2500, "A++", 10),
    (1000, "A+", 15),
    (500, "A", 25),
    (250, "B+", 35),
    (100, "B", 50),
    (50, "C+", 65),
    (25, "C", 80),
)


def rank_score(stats: UserStats) -> int:
    """Weighted activity score used to place a user on the rank ladder."""

    return (
        stats.total_stars * 2
        + stats.total_commits
        + stats.total_prs * 3
        + stats.total_issues
        + stats.contributed_to * 2
    )


def calculate_rank(stats: UserStats) -> Rank:
    score = rank_score(stats)
    for minimum, level, percentile in RANK_THRESHOLDS:
        if score >= minimum:
            return Rank(level=level, percentile=percentile)
    return Rank(level="D", percentile=100)


def aggregate_languages(
    edges: Iterable[Mapping[str, object]],
    limit: int = 10,
) -> list[LanguageStat]:
    """Sum language byte sizes across repositories and rank them by size.

    Each edge is a GraphQL `LanguageEdge` mapping with `size` and a `node`
    holding `name` and `color`. The first color seen for a language is kept.
    """

    sizes: dict[str, int] = {}
    colors: dict[str, str] = {}

    for edge in edges:
        node = edge.get("node")
        raw_size = edge.get("size")
        if not isinstance(node, Mapping) or not isinstance(raw_size, int):
            raise ValueError("GitHub language edge is invalid")

        name = node.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("GitHub language edge is missing a name")

        if name not in sizes:
            sizes[name] = 0
            raw_color = node.get("color")
            colors[name] = (
                raw_color
                if isinstance(raw_color, str) and raw_color
                else DEFAULT_LANGUAGE_COLOR
            )
        sizes[name] += raw_size

    total_size = sum(sizes.values())
    languages = [
        LanguageStat(
            name=name,
            size=size,
            color=colors[name],
            percentage=(size / total_size) * 100 if total_size > 0 else 0.0,
        )
        for name, size in sizes.items()
    ]
    languages.sort(key=lambda language: language.size, reverse=True)
    return languages[:limit]
