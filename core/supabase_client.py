# core/supabase_client.py

from typing import Optional

from supabase import create_client, Client
from core.config import settings
from core.logging_config import logger


# ============================================================
# Supabase Client Factory (service role)
# ============================================================

def get_supabase_client() -> Optional[Client]:
    """
    Creates a Supabase client using the SERVICE ROLE KEY.
    REQUIRED for:
        - auth.get_user (token validation)
        - auth.admin.create_user / delete_user
        - backoffice_users writes (bypasses row-level security)
    Only the privileged backoffice operations should use it for data.
    """
    supabase_url = settings.SUPABASE_URL
    supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY  # MUST be service-role

    if not supabase_url or not supabase_key:
        logger.error("Missing Supabase credentials")
        logger.error(f"   URL: {supabase_url}")
        logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
        return None

    try:
        return create_client(supabase_url, supabase_key)
    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# User-scoped client (anon key + caller JWT)
# ============================================================

def get_anon_client() -> Optional[Client]:
    """Anon-key client with no session (password sign-in)."""
    supabase_url = settings.SUPABASE_URL
    anon_key = settings.SUPABASE_ANON_KEY

    if not supabase_url or not anon_key:
        logger.error("Missing Supabase anon credentials")
        return None

    try:
        return create_client(supabase_url, anon_key)
    except Exception as e:
        logger.error(f"Supabase Init Error (anon client): {e}", exc_info=True)
        return None


def get_user_client(access_token: str) -> Optional[Client]:
    """
    Creates a lesser-privileged client that issues PostgREST queries
    with the caller's own JWT, so row-level security applies.
    """
    client = get_anon_client()
    if client is None:
        return None

    client.postgrest.auth(access_token)
    return client


# ============================================================
# Ping Supabase for health checks
# ============================================================

HEALTH_TABLES = ["properties", "rooms", "tenants", "payments", "notifications"]


def ping_supabase() -> dict:
    """
    Simple connectivity check.
    Does NOT query auth tables.
    """
    client = get_supabase_client()
    if client is None:
        return {"service": "Supabase", "status": "not_configured"}

    results = {}
    for t in HEALTH_TABLES:
        try:
            res = client.table(t).select("id").limit(1).execute()
            results[t] = {
                "status": "ok",
                "rows_found": len(res.data or [])
            }
        except Exception as err:
            results[t] = {"status": "error", "detail": str(err)}

    overall = "ok" if all(r["status"] == "ok" for r in results.values()) else "degraded"

    return {
        "service": "Supabase",
        "status": overall,
        "tables": results,
    }
