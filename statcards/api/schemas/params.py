from fastapi import Query
from pydantic import BaseModel

from statcards.cards.languages import LAYOUTS
from statcards.cards.themes import DEFAULT_THEME


class CardQueryParams(BaseModel):
    """Display options shared by all card endpoints."""

    theme: str = DEFAULT_THEME
    hide_border: bool = False
    hide_title: bool = False
    hide_rank: bool = False
    show_icons: bool = True
    line_height: int = 25
    layout: str = "normal"
    langs_count: int = 6


def _parse_int(raw_value: str | None, default: int) -> int:
    if raw_value is None:
        return default
    try:
        return int(raw_value.strip())
    except ValueError:
        return default


def card_query_params(
    theme: str | None = Query(default=None),
    hide_border: str | None = Query(default=None),
    hide_title: str | None = Query(default=None),
    hide_rank: str | None = Query(default=None),
    show_icons: str | None = Query(default=None),
    line_height: str | None = Query(default=None),
    layout: str | None = Query(default=None),
    langs_count: str | None = Query(default=None),
) -> CardQueryParams:
    """Parse card query parameters leniently.

    Flags are opt-in (`hide_*` only for the literal "true") or opt-out
    (`show_icons` only for the literal "false"); unparsable numbers fall back
    to their defaults so a badge URL never fails validation.
    """

    return CardQueryParams(
        theme=theme or DEFAULT_THEME,
        hide_border=hide_border == "true",
        hide_title=hide_title == "true",
        hide_rank=hide_rank == "true",
        show_icons=show_icons != "false",
        line_height=_parse_int(line_height, 25),
        layout=layout if layout in LAYOUTS else "normal",
        langs_count=min(max(_parse_int(langs_count, 6), 1), 10),
    )
