import logging
from collections.abc import Callable
from datetime import date
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter
from fastapi import Depends
from fastapi.responses import Response

from statcards.api.schemas.params import CardQueryParams
from statcards.api.schemas.params import card_query_params
from statcards.cards.common import render_error_card
from statcards.cards.languages import LanguagesCardOptions
from statcards.cards.languages import generate_languages_card
from statcards.cards.stats import StatsCardOptions
from statcards.cards.stats import generate_stats_card
from statcards.cards.streak import StreakCardOptions
from statcards.cards.streak import generate_streak_card
from statcards.cards.themes import get_theme
from statcards.services.card_service import GitHubAPIError
from statcards.services.card_service import InvalidGitHubTokenError
from statcards.services.card_service import get_language_stats
from statcards.services.card_service import get_streak_stats
from statcards.services.card_service import get_user_stats
from statcards.settings import Settings
from statcards.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SVG_MEDIA_TYPE = "image/svg+xml"
ERROR_MESSAGE_LIMIT = 60


def svg_response(svg: str, status_code: int = 200) -> Response:
    return Response(
        content=svg,
        status_code=status_code,
        media_type=SVG_MEDIA_TYPE,
        headers={"Access-Control-Allow-Origin": "*"},
    )


def error_response(message: str, status_code: int = 500) -> Response:
    """Render an error card in place of the requested one."""

    return svg_response(
        render_error_card(message[:ERROR_MESSAGE_LIMIT]), status_code=status_code
    )


def get_today(settings: Settings = Depends(get_settings)) -> date:
    """Return the current calendar date in the configured timezone."""

    return datetime.now(ZoneInfo(settings.timezone)).date()


def _render(settings: Settings, build: Callable[[], str]) -> Response:
    if not settings.github_token:
        return error_response("GITHUB_TOKEN not configured", 500)
    if not settings.github_username:
        return error_response("GITHUB_USERNAME not configured", 500)

    try:
        return svg_response(build())
    except InvalidGitHubTokenError:
        logger.warning("GitHub rejected the configured token")
        return error_response("GitHub token is invalid", 401)
    except GitHubAPIError as exc:
        logger.error("Error generating card: %s", exc)
        return error_response(str(exc) or "GitHub API request failed", 502)


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/")
def get_stats_card(
    params: CardQueryParams = Depends(card_query_params),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Render the profile stats card."""

    def build() -> str:
        stats = get_user_stats(settings)
        return generate_stats_card(
            stats,
            get_theme(params.theme),
            StatsCardOptions(
                hide_border=params.hide_border,
                hide_title=params.hide_title,
                hide_rank=params.hide_rank,
                show_icons=params.show_icons,
                line_height=params.line_height,
            ),
        )

    return _render(settings, build)


@router.get("/languages")
def get_languages_card(
    params: CardQueryParams = Depends(card_query_params),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Render the most used languages card."""

    def build() -> str:
        languages = get_language_stats(settings)
        return generate_languages_card(
            languages,
            get_theme(params.theme),
            LanguagesCardOptions(
                hide_border=params.hide_border,
                hide_title=params.hide_title,
                layout=params.layout,
                langs_count=params.langs_count,
            ),
        )

    return _render(settings, build)


@router.get("/streak")
def get_streak_card(
    params: CardQueryParams = Depends(card_query_params),
    settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
) -> Response:
    """Render the contribution streak card."""

    def build() -> str:
        streak = get_streak_stats(settings, today=today)
        return generate_streak_card(
            streak,
            get_theme(params.theme),
            StreakCardOptions(
                hide_border=params.hide_border,
                hide_title=params.hide_title,
            ),
        )

    return _render(settings, build)
