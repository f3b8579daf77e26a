from dataclasses import dataclass
from datetime import date

from statcards.cards.common import FONT_FAMILY
from statcards.cards.common import render_border
from statcards.cards.common import render_card
from statcards.cards.themes import Theme
from statcards.models import StreakResult

CARD_WIDTH = 495
MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

FIRE_ICON_PATH = (
    "M12 23a7.5 7.5 0 0 1-5.138-12.963C8.204 8.774 11.5 6.5 11 1.5c6 4 9 8 "
    "3 14 1 0 2.5 0 5-2.47.27.773.5 1.604.5 2.47A7.5 7.5 0 0 1 12 23z"
)


@dataclass(frozen=True)
class StreakCardOptions:
    hide_border: bool = False
    hide_title: bool = False


def _month_day(value: date) -> str:
    return f"{MONTHS[value.month - 1]} {value.day}"


def format_date_range(start: date | None, end: date | None) -> str:
    """Format streak bounds for display.

    A single day renders as one date; ranges drop the parts shared by both
    ends (year, then month).
    """

    if start is None or end is None:
        return "N/A"

    if start == end:
        return _month_day(start)

    if start.year == end.year:
        if start.month == end.month:
            return f"{_month_day(start)} - {end.day}"
        return f"{_month_day(start)} - {_month_day(end)}"

    return f"{_month_day(start)}, {start.year} - {_month_day(end)}, {end.year}"


def _column(
    x: float,
    y: int,
    value: str,
    label: str,
    caption: str,
    value_class: str,
    icon: str = "",
) -> str:
    return f"""
  <g transform="translate({x:g}, {y})">
    {icon}
    <text class="{value_class}" x="0" y="30" text-anchor="middle">{value}</text>
    <text class="stat-label" x="0" y="50" text-anchor="middle">{label}</text>
    <text class="date-label" x="0" y="70" text-anchor="middle">{caption}</text>
  </g>"""


def generate_streak_card(
    stats: StreakResult, theme: Theme, options: StreakCardOptions
) -> str:
    """Render total contributions, current streak and longest streak columns."""

    height = 150 if options.hide_title else 175
    start_y = 30 if options.hide_title else 55
    column_width = CARD_WIDTH / 3

    title = (
        ""
        if options.hide_title
        else f'<text x="{CARD_WIDTH / 2:g}" y="30" class="title" text-anchor="middle">'
        "GitHub Contribution Streak</text>"
    )

    fire_icon = ""
    if stats.current_streak > 0:
        fire_icon = (
            f'<svg x="25" y="8" width="20" height="20" viewBox="0 0 24 24" '
            f'fill="{theme.ring}"><path d="{FIRE_ICON_PATH}"/></svg>'
        )

    columns = [
        _column(
            column_width * 0.5,
            start_y,
            f"{stats.total_contributions:,}",
            "Total Contributions",
            "Last year",
            "stat-value",
        ),
        _column(
            column_width * 1.5,
            start_y,
            str(stats.current_streak),
            "Current Streak",
            format_date_range(stats.current_streak_start, stats.current_streak_end),
            "streak-value",
            fire_icon,
        ),
        _column(
            column_width * 2.5,
            start_y,
            str(stats.longest_streak),
            "Longest Streak",
            format_date_range(stats.longest_streak_start, stats.longest_streak_end),
            "stat-value",
        ),
    ]

    dividers = "".join(
        f'<line x1="{x:g}" y1="{start_y}" x2="{x:g}" y2="{start_y + 80}" '
        f'stroke="{theme.border}" stroke-width="1"/>'
        for x in (column_width, column_width * 2)
    )

    style = f"""    .title {{ font: 600 18px {FONT_FAMILY}; fill: {theme.title}; }}
    .stat-value {{ font: 700 28px {FONT_FAMILY}; fill: {theme.text}; }}
    .streak-value {{ font: 700 32px {FONT_FAMILY}; fill: {theme.ring}; }}
    .stat-label {{ font: 600 14px {FONT_FAMILY}; fill: {theme.text}; }}
    .date-label {{ font: 400 11px {FONT_FAMILY}; fill: {theme.icon}; }}"""

    body = "\n  ".join(
        [
            render_border(CARD_WIDTH, height, theme, options.hide_border),
            title,
            dividers,
            "".join(columns),
        ]
    )
    return render_card(CARD_WIDTH, height, theme, style, body)
