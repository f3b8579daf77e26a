from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import Response

from statcards.api.routes.cards import error_response
from statcards.api.routes.cards import router
from statcards.core.middleware import CardRateLimitMiddleware
from statcards.core.observability import configure_logging
from statcards.core.observability import init_sentry
from statcards.settings import Settings


async def not_found_handler(request: Request, exc: Exception) -> Response:
    return error_response("Not Found: Use /, /languages, or /streak", 404)


def create_app() -> FastAPI:
    settings = Settings()
    configure_logging(settings)
    init_sentry(settings)

    application = FastAPI(title="GitHub Stats Cards")
    application.add_middleware(
        CardRateLimitMiddleware,
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    application.add_exception_handler(404, not_found_handler)
    application.include_router(router)
    return application


app = create_app()
