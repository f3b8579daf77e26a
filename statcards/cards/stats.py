from dataclasses import dataclass

from statcards.cards.common import FONT_FAMILY
from statcards.cards.common import escape_xml
from statcards.cards.common import format_number
from statcards.cards.common import render_border
from statcards.cards.common import render_card
from statcards.cards.themes import Theme
from statcards.models import UserStats
from statcards.services.stats import calculate_rank

CARD_WIDTH = 495
RANK_RING_LENGTH = 251.2

ICONS = {
    "star": '<path fill-rule="evenodd" d="M8 .25a.75.75 0 01.673.418l1.882 3.815 4.21.612a.75.75 0 01.416 1.279l-3.046 2.97.719 4.192a.75.75 0 01-1.088.791L8 12.347l-3.766 1.98a.75.75 0 01-1.088-.79l.72-4.194L.818 6.374a.75.75 0 01.416-1.28l4.21-.611L7.327.668A.75.75 0 018 .25z"/>',
    "commit": '<path fill-rule="evenodd" d="M1.643 3.143L.427 1.927A.25.25 0 000 2.104V5.75c0 .138.112.25.25.25h3.646a.25.25 0 00.177-.427L2.715 4.215a6.5 6.5 0 11-1.18 4.458.75.75 0 10-1.493.154 8.001 8.001 0 101.6-5.684zM7.75 4a.75.75 0 01.75.75v2.992l2.028.812a.75.75 0 01-.557 1.392l-2.5-1A.75.75 0 017 8.25v-3.5A.75.75 0 017.75 4z"/>',
    "pr": '<path fill-rule="evenodd" d="M7.177 3.073L9.573.677A.25.25 0 0110 .854v4.792a.25.25 0 01-.427.177L7.177 3.427a.25.25 0 010-.354zM3.75 2.5a.75.75 0 100 1.5.75.75 0 000-1.5zm-2.25.75a2.25 2.25 0 113 2.122v5.256a2.251 2.251 0 11-1.5 0V5.372A2.25 2.25 0 011.5 3.25zM11 2.5h-1V4h1a1 1 0 011 1v5.628a2.251 2.251 0 101.5 0V5A2.5 2.5 0 0011 2.5zm1 10.25a.75.75 0 111.5 0 .75.75 0 01-1.5 0zM3.75 12a.75.75 0 100 1.5.75.75 0 000-1.5z"/>',
    "issue": '<path d="M8 9.5a1.5 1.5 0 100-3 1.5 1.5 0 000 3z"/><path fill-rule="evenodd" d="M8 0a8 8 0 100 16A8 8 0 008 0zM1.5 8a6.5 6.5 0 1113 0 6.5 6.5 0 01-13 0z"/>',
    "repo": '<path fill-rule="evenodd" d="M2 2.5A2.5 2.5 0 014.5 0h8.75a.75.75 0 01.75.75v12.5a.75.75 0 01-.75.75h-2.5a.75.75 0 110-1.5h1.75v-2h-8a1 1 0 00-.714 1.7.75.75 0 01-1.072 1.05A2.495 2.495 0 012 11.5v-9zm10.5-1V9h-8c-.356 0-.694.074-1 .208V2.5a1 1 0 011-1h8zM5 12.25v3.25a.25.25 0 00.4.2l1.45-1.087a.25.25 0 01.3 0L8.6 15.7a.25.25 0 00.4-.2v-3.25a.25.25 0 00-.25-.25h-3.5a.25.25 0 00-.25.25z"/>',
}
ICONS["contrib"] = ICONS["repo"]


@dataclass(frozen=True)
class StatsCardOptions:
    hide_border: bool = False
    hide_title: bool = False
    hide_rank: bool = False
    show_icons: bool = True
    line_height: int = 25


def generate_stats_card(
    stats: UserStats, theme: Theme, options: StatsCardOptions
) -> str:
    """Render the profile totals card with an optional rank ring."""

    height = 170 if options.hide_title else 195
    rank = calculate_rank(stats)

    stat_items = [
        ("star", "Total Stars Earned", stats.total_stars),
        ("commit", "Total Commits (last year)", stats.total_commits),
        ("pr", "Total PRs", stats.total_prs),
        ("issue", "Total Issues", stats.total_issues),
        ("repo", "Total Repos", stats.total_repos),
        ("contrib", "Contributed To", stats.contributed_to),
    ]

    stat_y = 25 if options.hide_title else 55
    text_x = 48 if options.show_icons else 25

    rows = []
    for index, (icon, label, value) in enumerate(stat_items):
        y = stat_y + index * options.line_height
        icon_svg = (
            f'<svg x="25" y="{y - 12}" width="16" height="16" viewBox="0 0 16 16" '
            f'fill="{theme.icon}">{ICONS[icon]}</svg>'
            if options.show_icons
            else ""
        )
        rows.append(
            f"""
    <g transform="translate(0, 0)">
      {icon_svg}
      <text x="{text_x}" y="{y}" class="stat-label">{escape_xml(label)}:</text>
      <text x="220" y="{y}" class="stat-value">{format_number(value)}</text>
    </g>"""
        )

    rank_ring = ""
    if not options.hide_rank:
        offset = RANK_RING_LENGTH * (rank.percentile / 100)
        rank_ring = f"""
  <g transform="translate(400, {height / 2:g})">
    <circle r="40" fill="none" stroke="{theme.ring}" stroke-width="5" stroke-dasharray="{RANK_RING_LENGTH}" stroke-dashoffset="{offset:g}" transform="rotate(-90)"/>
    <text class="rank-text" x="0" y="0" text-anchor="middle" dominant-baseline="central">{rank.level}</text>
    <text class="rank-percentile" x="0" y="20" text-anchor="middle">Top {rank.percentile}%</text>
  </g>"""

    title = ""
    if not options.hide_title:
        heading = escape_xml(f"{stats.name}'s GitHub Stats")
        title = f'<text x="25" y="35" class="title">{heading}</text>'

    style = f"""    .title {{ font: 600 18px {FONT_FAMILY}; fill: {theme.title}; }}
    .stat-label {{ font: 400 14px {FONT_FAMILY}; fill: {theme.text}; }}
    .stat-value {{ font: 600 14px {FONT_FAMILY}; fill: {theme.text}; }}
    .rank-text {{ font: 800 24px {FONT_FAMILY}; fill: {theme.rank_text}; }}
    .rank-percentile {{ font: 400 10px {FONT_FAMILY}; fill: {theme.icon}; }}"""

    body = "\n  ".join(
        [
            render_border(CARD_WIDTH, height, theme, options.hide_border),
            title,
            "".join(rows),
            rank_ring,
        ]
    )
    return render_card(CARD_WIDTH, height, theme, style, body)
