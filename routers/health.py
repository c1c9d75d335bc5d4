# routers/health.py

from fastapi import APIRouter

from core.change_feed import auth_events, change_feed
from core.config import settings
from core.supabase_client import ping_supabase

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/app
# No auth; safe for uptime monitors
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    return {
        "service": settings.PROJECT_NAME,
        "status": "ok",
        "env": settings.ENV,
        "realtime_bridge": settings.REALTIME_BRIDGE_ENABLED,
        "live_feeds": change_feed.subscriber_count(),
        "auth_listeners": auth_events.subscriber_count(),
    }


# -----------------------------------------------------
# GET /health/db
# One probe query per table; "degraded" if any fails
# -----------------------------------------------------
@router.get("/db", summary="Supabase / DB health check")
def health_db():
    status = ping_supabase()
    return {
        "service": "Supabase",
        "status": status.get("status", "unknown"),
        "details": status,
    }
