import os
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure local imports resolve
sys.path.append(os.path.dirname(__file__))

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.change_feed import start_realtime_bridge
from core.errors import AppError
from core.logging_config import logger
from repositories.notification_repo import NotificationRepository

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers import api_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Roomkeeper API — Supabase-powered property & room rental management",
    )

    # -------------------------------------------------
    # CORS (the backoffice console calls from the browser)
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup / shutdown
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENV})")
        validate_config_on_startup()

        app.state.realtime_channel = None
        if settings.REALTIME_BRIDGE_ENABLED:
            try:
                app.state.realtime_channel = await start_realtime_bridge(NotificationRepository.table)
            except Exception as e:
                # Local writes still reach the feed without the bridge
                logger.error(f"Realtime bridge unavailable: {e}", exc_info=True)

    @app.on_event("shutdown")
    async def on_shutdown():
        channel = getattr(app.state, "realtime_channel", None)
        if channel is not None:
            await channel.unsubscribe()

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"HTTP {exc.status_code} at {request.url} — {exc.message}")
        elif exc.status_code in (401, 403):
            logger.warning(f"HTTP {exc.status_code} at {request.url} — {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url} — {exc.detail}"
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(api_router)

    return app


# Create the global FastAPI instance
app = create_app()
