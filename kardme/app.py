import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from kardme.core.config import get_settings
from kardme.core.logs import configure_logging
from kardme.db.create_tables import create_all
from kardme.routers import cards as cards_router
from kardme.routers import pages as pages_router
from kardme.routers import slug as slug_router
from kardme.services.card_service import CardService
from kardme.services.slug_service import SlugService
from kardme.services.theme_service import ThemeService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``uvicorn kardme.app:create_app --factory``)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Kardme Card API")

    allowed_cors = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:3000",
                "http://127.0.0.1:3000",
            }
        )
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    create_all()

    app.state.card_service = CardService()
    app.state.theme_service = ThemeService()
    app.state.slug_service = SlugService()

    app.include_router(pages_router.router)
    app.include_router(slug_router.router)
    app.include_router(cards_router.router)

    logger.info("Kardme API ready (env=%s)", settings.app_env)
    return app
