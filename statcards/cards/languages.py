import math
from dataclasses import dataclass

from statcards.cards.common import FONT_FAMILY
from statcards.cards.common import escape_xml
from statcards.cards.common import render_border
from statcards.cards.common import render_card
from statcards.cards.themes import Theme
from statcards.models import LanguageStat

CARD_WIDTH = 300
BAR_WIDTH = 250
LAYOUTS = ("normal", "compact", "donut", "pie")


@dataclass(frozen=True)
class LanguagesCardOptions:
    hide_border: bool = False
    hide_title: bool = False
    layout: str = "normal"
    langs_count: int = 6


def _title(options: LanguagesCardOptions) -> str:
    if options.hide_title:
        return ""
    return '<text x="25" y="35" class="title">Most Used Languages</text>'


def _title_style(theme: Theme) -> str:
    return f"    .title {{ font: 600 18px {FONT_FAMILY}; fill: {theme.title}; }}"


def generate_languages_card(
    languages: list[LanguageStat], theme: Theme, options: LanguagesCardOptions
) -> str:
    """Render the top languages card in the requested layout.

    Unknown layouts render the normal progress-bar list.
    """

    shown = languages[: options.langs_count]
    if options.layout == "compact":
        return _compact_card(shown, theme, options)
    if options.layout in {"donut", "pie"}:
        return _donut_card(shown, theme, options)
    return _normal_card(shown, theme, options)


def _normal_card(
    languages: list[LanguageStat], theme: Theme, options: LanguagesCardOptions
) -> str:
    height = (45 if options.hide_title else 70) + len(languages) * 40
    start_y = 25 if options.hide_title else 55

    rows = []
    for index, language in enumerate(languages):
        y = start_y + index * 40
        filled = (language.percentage / 100) * BAR_WIDTH
        rows.append(
            f"""
  <g transform="translate(25, {y})">
    <circle cx="6" cy="6" r="6" fill="{language.color}"/>
    <text x="20" y="10" class="lang-name">{escape_xml(language.name)}</text>
    <text x="{BAR_WIDTH}" y="10" class="lang-percent" text-anchor="end">{language.percentage:.2f}%</text>
    <rect x="0" y="18" width="{BAR_WIDTH}" height="8" rx="4" fill="{theme.progress_bar_bg}"/>
    <rect x="0" y="18" width="{filled:g}" height="8" rx="4" fill="{language.color}"/>
  </g>"""
        )

    style = f"""{_title_style(theme)}
    .lang-name {{ font: 400 14px {FONT_FAMILY}; fill: {theme.text}; }}
    .lang-percent {{ font: 600 14px {FONT_FAMILY}; fill: {theme.text}; }}"""

    body = "\n  ".join(
        [
            render_border(CARD_WIDTH, height, theme, options.hide_border),
            _title(options),
            "".join(rows),
        ]
    )
    return render_card(CARD_WIDTH, height, theme, style, body)


def _compact_card(
    languages: list[LanguageStat], theme: Theme, options: LanguagesCardOptions
) -> str:
    height = 100 if options.hide_title else 125
    start_y = 25 if options.hide_title else 55

    segments = []
    offset = 0.0
    for language in languages:
        width = (language.percentage / 100) * BAR_WIDTH
        radius = 4 if offset == 0 else 0
        segments.append(
            f'<rect x="{25 + offset:g}" y="{start_y}" width="{width:g}" height="8" '
            f'fill="{language.color}" rx="{radius}"/>'
        )
        offset += width

    # Two-column legend below the bar.
    legend = []
    for index, language in enumerate(languages):
        x = 25 + (index % 2) * 130
        y = start_y + 25 + (index // 2) * 20
        legend.append(
            f"""
  <g transform="translate({x}, {y})">
    <circle cx="6" cy="6" r="5" fill="{language.color}"/>
    <text x="16" y="10" class="legend-text">{escape_xml(language.name)} {language.percentage:.1f}%</text>
  </g>"""
        )

    style = f"""{_title_style(theme)}
    .legend-text {{ font: 400 11px {FONT_FAMILY}; fill: {theme.text}; }}"""

    body = "\n  ".join(
        [
            render_border(CARD_WIDTH, height, theme, options.hide_border),
            _title(options),
            f'<rect x="25" y="{start_y}" width="{BAR_WIDTH}" height="8" rx="4" '
            f'fill="{theme.progress_bar_bg}"/>',
            "".join(segments),
            "".join(legend),
        ]
    )
    return render_card(CARD_WIDTH, height, theme, style, body)


def _donut_card(
    languages: list[LanguageStat], theme: Theme, options: LanguagesCardOptions
) -> str:
    height = 170 if options.hide_title else 195
    center_x = 85
    center_y = 85 if options.hide_title else 110
    radius = 50
    inner_radius = 30 if options.layout == "donut" else 0

    segments = []
    angle = -90.0
    for language in languages:
        slice_angle = (language.percentage / 100) * 360
        start_rad = math.radians(angle)
        end_rad = math.radians(angle + slice_angle)
        large_arc = 1 if slice_angle > 180 else 0

        x1 = center_x + radius * math.cos(start_rad)
        y1 = center_y + radius * math.sin(start_rad)
        x2 = center_x + radius * math.cos(end_rad)
        y2 = center_y + radius * math.sin(end_rad)

        if inner_radius:
            ix1 = center_x + inner_radius * math.cos(start_rad)
            iy1 = center_y + inner_radius * math.sin(start_rad)
            ix2 = center_x + inner_radius * math.cos(end_rad)
            iy2 = center_y + inner_radius * math.sin(end_rad)
            path = (
                f"M {x1:.3f} {y1:.3f} A {radius} {radius} 0 {large_arc} 1 "
                f"{x2:.3f} {y2:.3f} L {ix2:.3f} {iy2:.3f} "
                f"A {inner_radius} {inner_radius} 0 {large_arc} 0 "
                f"{ix1:.3f} {iy1:.3f} Z"
            )
        else:
            path = (
                f"M {center_x} {center_y} L {x1:.3f} {y1:.3f} "
                f"A {radius} {radius} 0 {large_arc} 1 {x2:.3f} {y2:.3f} Z"
            )
        segments.append(f'<path d="{path}" fill="{language.color}"/>')
        angle += slice_angle

    legend_start_y = 25 if options.hide_title else 50
    legend = []
    for index, language in enumerate(languages[:6]):
        y = legend_start_y + index * 22
        legend.append(
            f"""
  <g transform="translate(160, {y})">
    <circle cx="6" cy="6" r="5" fill="{language.color}"/>
    <text x="16" y="10" class="legend-text">{escape_xml(language.name)}</text>
    <text x="130" y="10" class="legend-percent" text-anchor="end">{language.percentage:.1f}%</text>
  </g>"""
        )

    style = f"""{_title_style(theme)}
    .legend-text {{ font: 400 12px {FONT_FAMILY}; fill: {theme.text}; }}
    .legend-percent {{ font: 600 12px {FONT_FAMILY}; fill: {theme.text}; }}"""

    body = "\n  ".join(
        [
            render_border(CARD_WIDTH, height, theme, options.hide_border),
            _title(options),
            f"<g>{''.join(segments)}</g>",
            "".join(legend),
        ]
    )
    return render_card(CARD_WIDTH, height, theme, style, body)
