from datetime import date
from datetime import timedelta

import pytest
from pydantic import ValidationError

from statcards.models import ContributionCalendar
from statcards.models import ContributionCalendarPayload
from statcards.models import ContributionDay
from statcards.models import ContributionWeek
from statcards.services.streaks import CalendarError
from statcards.services.streaks import calculate_streaks
from statcards.services.streaks import flatten_weeks
from statcards.services.streaks import normalize_calendar

JAN_1 = date(2026, 1, 1)


def make_calendar(
    counts: list[int], start: date = JAN_1, total: int | None = None
) -> ContributionCalendar:
    days = [
        ContributionDay(date=start + timedelta(days=offset), contribution_count=count)
        for offset, count in enumerate(counts)
    ]
    return ContributionCalendar(
        total_contributions=sum(counts) if total is None else total,
        days=days,
    )


def test_flatten_weeks_sorts_days_from_unordered_weeks() -> None:
    payload = ContributionCalendarPayload.model_validate(
        {
            "totalContributions": 6,
            "weeks": [
                {
                    "contributionDays": [
                        {"date": "2026-01-09", "contributionCount": 3},
                        {"date": "2026-01-08", "contributionCount": 0},
                    ]
                },
                {
                    "contributionDays": [
                        {"date": "2026-01-02", "contributionCount": 1},
                        {"date": "2026-01-01", "contributionCount": 2},
                    ]
                },
            ],
        }
    )

    days = flatten_weeks(payload.weeks)

    assert [day.date.isoformat() for day in days] == [
        "2026-01-01",
        "2026-01-02",
        "2026-01-08",
        "2026-01-09",
    ]
    assert [day.contribution_count for day in days] == [2, 1, 0, 3]


def test_normalize_calendar_keeps_source_total() -> None:
    payload = ContributionCalendarPayload(
        total_contributions=42,
        weeks=[
            ContributionWeek(
                contribution_days=[ContributionDay(date=JAN_1, contribution_count=1)]
            )
        ],
    )

    calendar = normalize_calendar(payload)

    assert calendar.total_contributions == 42
    assert calendar.days == [ContributionDay(date=JAN_1, contribution_count=1)]


def test_normalize_calendar_empty_payload() -> None:
    payload = ContributionCalendarPayload.model_validate(
        {"totalContributions": 0, "weeks": []}
    )

    assert normalize_calendar(payload).days == []


def test_malformed_date_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ContributionCalendarPayload.model_validate(
            {
                "totalContributions": 1,
                "weeks": [
                    {"contributionDays": [{"date": "2026-13-45", "contributionCount": 1}]}
                ],
            }
        )


def test_missing_date_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ContributionDay.model_validate({"contributionCount": 1})


def test_negative_count_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ContributionDay.model_validate({"date": "2026-01-01", "contributionCount": -1})


def test_duplicate_dates_are_rejected() -> None:
    calendar = ContributionCalendar(
        total_contributions=2,
        days=[
            ContributionDay(date=JAN_1, contribution_count=1),
            ContributionDay(date=JAN_1, contribution_count=1),
        ],
    )

    with pytest.raises(CalendarError):
        calculate_streaks(calendar, today=JAN_1)


def test_empty_calendar_returns_zero_streaks() -> None:
    result = calculate_streaks(make_calendar([]), today=JAN_1)

    assert result.current_streak == 0
    assert result.longest_streak == 0
    assert result.total_contributions == 0


def test_all_zero_calendar_has_no_streaks_or_dates() -> None:
    result = calculate_streaks(make_calendar([0] * 30), today=JAN_1 + timedelta(days=29))

    assert result.current_streak == 0
    assert result.longest_streak == 0
    assert result.current_streak_start is None
    assert result.current_streak_end is None
    assert result.longest_streak_start is None
    assert result.longest_streak_end is None


@pytest.mark.parametrize("length", [1, 7, 365])
def test_calendar_without_zero_days_is_one_long_streak(length: int) -> None:
    calendar = make_calendar([1] * length)

    result = calculate_streaks(calendar, today=date(2030, 1, 1))

    assert result.longest_streak == length


def test_zero_after_run_leaves_no_current_streak() -> None:
    """Jan 1-5 active, Jan 6 recorded as zero and Jan 6 is today."""

    result = calculate_streaks(make_calendar([1, 1, 1, 1, 1, 0]), today=date(2026, 1, 6))

    assert result.current_streak == 0
    assert result.current_streak_start is None
    assert result.current_streak_end is None
    assert result.longest_streak == 5
    assert result.longest_streak_start == date(2026, 1, 1)
    assert result.longest_streak_end == date(2026, 1, 5)


def test_run_ending_today_is_current_and_longest() -> None:
    result = calculate_streaks(make_calendar([1] * 5), today=date(2026, 1, 5))

    assert result.current_streak == 5
    assert result.current_streak_start == date(2026, 1, 1)
    assert result.current_streak_end == date(2026, 1, 5)
    assert result.longest_streak == 5
    assert result.longest_streak_start == result.current_streak_start
    assert result.longest_streak_end == result.current_streak_end


def test_single_day_today_is_a_current_streak_of_one() -> None:
    result = calculate_streaks(make_calendar([3]), today=JAN_1)

    assert result.current_streak == 1
    assert result.current_streak_start == JAN_1
    assert result.current_streak_end == JAN_1
    assert result.longest_streak == 1


def test_zero_day_breaks_current_streak() -> None:
    result = calculate_streaks(make_calendar([1, 0, 1]), today=date(2026, 1, 3))

    assert result.current_streak == 1
    assert result.current_streak_start == date(2026, 1, 3)
    assert result.longest_streak == 1
    assert result.longest_streak_start == JAN_1
    assert result.longest_streak_end == JAN_1


def test_today_active_with_nothing_yesterday() -> None:
    result = calculate_streaks(make_calendar([2, 2, 0, 4]), today=date(2026, 1, 4))

    assert result.current_streak == 1
    assert result.current_streak_start == date(2026, 1, 4)
    assert result.longest_streak == 2


def test_yesterday_counts_when_today_has_no_entry_yet() -> None:
    """Grace day: the calendar ends yesterday and today is not listed."""

    result = calculate_streaks(make_calendar([1, 1, 1, 1, 1]), today=date(2026, 1, 6))

    assert result.current_streak == 5
    assert result.current_streak_start == date(2026, 1, 1)
    assert result.current_streak_end == date(2026, 1, 5)


def test_run_ending_before_yesterday_is_not_current() -> None:
    result = calculate_streaks(make_calendar([1, 1, 1]), today=date(2026, 1, 10))

    assert result.current_streak == 0
    assert result.current_streak_start is None
    assert result.longest_streak == 3


def test_today_extends_yesterday_run() -> None:
    result = calculate_streaks(make_calendar([0, 1, 1, 1]), today=date(2026, 1, 4))

    assert result.current_streak == 3
    assert result.current_streak_start == date(2026, 1, 2)
    assert result.current_streak_end == date(2026, 1, 4)


def test_missing_date_breaks_current_streak() -> None:
    calendar = ContributionCalendar(
        total_contributions=4,
        days=[
            ContributionDay(date=date(2026, 1, 1), contribution_count=1),
            ContributionDay(date=date(2026, 1, 2), contribution_count=1),
            ContributionDay(date=date(2026, 1, 4), contribution_count=1),
            ContributionDay(date=date(2026, 1, 5), contribution_count=1),
        ],
    )

    result = calculate_streaks(calendar, today=date(2026, 1, 5))

    assert result.current_streak == 2
    assert result.current_streak_start == date(2026, 1, 4)
    assert result.current_streak_end == date(2026, 1, 5)
    assert result.longest_streak >= result.current_streak


def test_longest_streak_keeps_first_of_equal_runs() -> None:
    result = calculate_streaks(
        make_calendar([1, 1, 0, 5, 5, 0, 1]), today=date(2026, 2, 1)
    )

    assert result.longest_streak == 2
    assert result.longest_streak_start == date(2026, 1, 1)
    assert result.longest_streak_end == date(2026, 1, 2)


def test_longest_streak_in_the_middle() -> None:
    counts = [1, 0, 1, 1, 1, 1, 0, 1, 1]

    result = calculate_streaks(make_calendar(counts), today=date(2026, 1, 9))

    assert result.longest_streak == 4
    assert result.longest_streak_start == date(2026, 1, 3)
    assert result.longest_streak_end == date(2026, 1, 6)
    assert result.current_streak == 2


def test_unsorted_days_are_sorted_before_scanning() -> None:
    ordered = make_calendar([1, 1, 0, 1, 1, 1])
    shuffled = ContributionCalendar(
        total_contributions=ordered.total_contributions,
        days=list(reversed(ordered.days)),
    )
    today = date(2026, 1, 6)

    assert calculate_streaks(shuffled, today=today) == calculate_streaks(
        ordered, today=today
    )


def test_scanner_is_idempotent() -> None:
    calendar = make_calendar([0, 3, 1, 0, 2, 2, 2])
    today = date(2026, 1, 7)

    first = calculate_streaks(calendar, today=today)
    second = calculate_streaks(calendar, today=today)

    assert first == second
    assert [day.contribution_count for day in calendar.days] == [0, 3, 1, 0, 2, 2, 2]


def test_total_contributions_is_passed_through() -> None:
    result = calculate_streaks(make_calendar([1, 2], total=999), today=JAN_1)

    assert result.total_contributions == 999


@pytest.mark.parametrize(
    "counts",
    [
        [1, 1, 0, 1, 1, 1, 1],
        [0, 0, 0, 1],
        [1, 0, 1, 0, 1, 0, 1],
        [5, 5, 5, 5, 5, 5, 5, 5],
        [1, 1, 1, 0, 0, 0, 0],
    ],
)
def test_longest_is_never_shorter_than_current(counts: list[int]) -> None:
    calendar = make_calendar(counts)
    for offset in range(len(counts) + 2):
        result = calculate_streaks(calendar, today=JAN_1 + timedelta(days=offset))
        assert result.longest_streak >= result.current_streak
