import os

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware

from kontakt.core.config import ROOT_DIR, get_settings
from kontakt.core.logging_config import configure_logging
from kontakt.routers import cards as cards_router
from kontakt.routers import signatures as signatures_router

TEMPLATES_DIR = os.path.join(ROOT_DIR, "templates")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data: https:; "
            "style-src 'self' 'unsafe-inline'; "
            "script-src 'self'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (--factory)."""
    settings = get_settings()
    logger = configure_logging(settings.log_level)

    app = FastAPI(title="Kontakt Card API")
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    # avatars and backgrounds referenced by cards; uploads themselves are handled elsewhere
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")
    app.state.templates = Jinja2Templates(directory=TEMPLATES_DIR)

    app.include_router(cards_router.router)
    app.include_router(signatures_router.router)

    logger.info("Kontakt app ready (env=%s, base=%s)", settings.app_env, settings.public_base_url)
    return app


app = create_app()
