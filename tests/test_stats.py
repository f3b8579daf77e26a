import pytest

from statcards.models import UserStats
from statcards.services.stats import DEFAULT_LANGUAGE_COLOR
from statcards.services.stats import aggregate_languages
from statcards.services.stats import calculate_rank
from statcards.services.stats import rank_score


def make_stats(**overrides: int) -> UserStats:
    values: dict[str, str | int] = {
        "username": "octocat",
        "name": "The Octocat",
        "avatar_url": "https://avatars.githubusercontent.com/u/583231",
        "total_stars": 0,
        "total_commits": 0,
        "total_prs": 0,
        "total_issues": 0,
        "total_repos": 0,
        "contributed_to": 0,
    }
    values.update(overrides)
    return UserStats.model_validate(values)


def edge(name: str, size: int, color: str | None = "#3572A5") -> dict[str, object]:
    return {"size": size, "node": {"name": name, "color": color}}


def test_rank_score_weights_activity() -> None:
    stats = make_stats(
        total_stars=10, total_commits=5, total_prs=2, total_issues=3, contributed_to=4
    )

    assert rank_score(stats) == 10 * 2 + 5 + 2 * 3 + 3 + 4 * 2


@pytest.mark.parametrize(
    ("commits", "level", "percentile"),
    [
        (0, "D", 100),
        (24, "D", 100),
        (25, "C", 80),
        (50, "C+", 65),
        (100, "B", 50),
        (250, "B+", 35),
        (500, "A", 25),
        (1000, "A+", 15),
        (2500, "A++", 10),
        (5000, "S", 5),
        (10000, "S+", 1),
        (250000, "S+", 1),
    ],
)
def test_calculate_rank_thresholds(commits: int, level: str, percentile: int) -> None:
    rank = calculate_rank(make_stats(total_commits=commits))

    assert rank.level == level
    assert rank.percentile == percentile


def test_aggregate_languages_sums_sizes_across_repositories() -> None:
    languages = aggregate_languages(
        [
            edge("Python", 600),
            edge("Go", 200, "#00ADD8"),
            edge("Python", 200, "#000000"),
        ]
    )

    assert [language.name for language in languages] == ["Python", "Go"]
    assert languages[0].size == 800
    assert languages[0].color == "#3572A5"
    assert languages[0].percentage == pytest.approx(80.0)
    assert languages[1].percentage == pytest.approx(20.0)


def test_aggregate_languages_defaults_missing_color() -> None:
    languages = aggregate_languages([edge("Brainfuck", 10, None)])

    assert languages[0].color == DEFAULT_LANGUAGE_COLOR


def test_aggregate_languages_limits_result() -> None:
    edges = [edge(f"Lang{index}", 100 - index) for index in range(15)]

    languages = aggregate_languages(edges, limit=10)

    assert len(languages) == 10
    assert languages[0].name == "Lang0"
    assert languages[-1].name == "Lang9"


def test_aggregate_languages_zero_sizes_have_zero_percentage() -> None:
    languages = aggregate_languages([edge("Empty", 0)])

    assert languages[0].percentage == 0.0


def test_aggregate_languages_empty() -> None:
    assert aggregate_languages([]) == []


def test_aggregate_languages_rejects_invalid_edge() -> None:
    with pytest.raises(ValueError):
        aggregate_languages([{"size": "big", "node": {"name": "Python"}}])
