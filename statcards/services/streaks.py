from collections.abc import Iterable
from datetime import date
from datetime import timedelta

from statcards.models import ContributionCalendar
from statcards.models import ContributionCalendarPayload
from statcards.models import ContributionDay
from statcards.models import ContributionWeek
from statcards.models import StreakResult


class CalendarError(ValueError):
    """Raised when a contribution calendar breaks the one-entry-per-date contract."""


def flatten_weeks(weeks: Iterable[ContributionWeek]) -> list[ContributionDay]:
    """Flatten week buckets into a single list of days sorted by date."""

    days = [day for week in weeks for day in week.contribution_days]
    return sorted(days, key=lambda day: day.date)


def normalize_calendar(payload: ContributionCalendarPayload) -> ContributionCalendar:
    """Build a flat, date-ordered calendar from a week-grouped payload."""

    return ContributionCalendar(
        total_contributions=payload.total_contributions,
        days=flatten_weeks(payload.weeks),
    )


def calculate_streaks(calendar: ContributionCalendar, today: date) -> StreakResult:
    """Compute current and longest contribution streaks.

    The longest streak counts consecutive positive entries and is broken only
    by a zero-count day. The current streak is the contiguous run of positive
    days (no missing dates in between) that ends on `today` or on the day
    before it. If both days qualify the larger run wins, and on a tie the
    earlier one is kept. Ending on yesterday is a grace day that only holds
    while today has no entry yet: a zero recorded for today ends the run.

    Raises:
        CalendarError: If the calendar holds the same date twice.
    """

    yesterday = today - timedelta(days=1)
    days = sorted(calendar.days, key=lambda day: day.date)

    longest_streak = 0
    longest_start: date | None = None
    longest_end: date | None = None
    current_streak = 0
    current_start: date | None = None
    current_end: date | None = None

    temp_streak = 0
    temp_start: date | None = None
    # Run ending at the previous day with no missing dates in between.
    run_length = 0
    run_start: date | None = None
    previous_date: date | None = None

    for day in days:
        if previous_date is not None and day.date == previous_date:
            raise CalendarError(f"duplicate calendar date {day.date.isoformat()}")

        if day.contribution_count > 0:
            if temp_streak == 0:
                temp_start = day.date
            temp_streak += 1

            if temp_streak > longest_streak:
                longest_streak = temp_streak
                longest_start = temp_start
                longest_end = day.date

            contiguous = (
                previous_date is not None
                and day.date - previous_date == timedelta(days=1)
            )
            if run_length > 0 and contiguous:
                run_length += 1
            else:
                run_length = 1
                run_start = day.date

            if day.date in (today, yesterday) and run_length > current_streak:
                current_streak = run_length
                current_start = run_start
                current_end = day.date
        else:
            temp_streak = 0
            temp_start = None
            run_length = 0
            run_start = None
            # A recorded zero after the anchor day ends the current streak.
            if current_end is not None and day.date > current_end:
                current_streak = 0
                current_start = None
                current_end = None

        previous_date = day.date

    return StreakResult(
        current_streak=current_streak,
        longest_streak=longest_streak,
        total_contributions=calendar.total_contributions,
        current_streak_start=current_start,
        current_streak_end=current_end,
        longest_streak_start=longest_start,
        longest_streak_end=longest_end,
    )
