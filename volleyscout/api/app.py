"""
VolleyScout API — FastAPI application factory.
REST surface over live matches, statistics, exports and saves.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from volleyscout.config import configure_logging, settings
from volleyscout.api.middleware import RequestLoggingMiddleware
from volleyscout.api.routes_matches import router as matches_router
from volleyscout.api.routes_stats import router as stats_router
from volleyscout.api.routes_saves import router as saves_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="VolleyScout API",
        description="Volleyball match event logging, rotation tracking and statistics.",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # ── Middleware ──────────────────────────────────────
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ──────────────────────────────────────────
    prefix = settings.API_PREFIX
    app.include_router(matches_router, prefix=f"{prefix}/matches", tags=["Matches"])
    app.include_router(stats_router, prefix=f"{prefix}/stats", tags=["Stats"])
    app.include_router(saves_router, prefix=f"{prefix}/saves", tags=["Saves"])

    # ── Health check ────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT.value,
        }

    @app.get("/", tags=["System"])
    async def root():
        return {
            "app": settings.APP_NAME,
            "tagline": "Volleyball match scouting",
            "version": settings.APP_VERSION,
            "docs": "/docs",
        }

    return app


# Module-level app instance for `uvicorn volleyscout.api.app:app`
app = create_app()
