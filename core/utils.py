# core/utils.py

from datetime import datetime, timezone

from core.logging_config import logger


def sanitize(data: dict) -> dict:
    """
    Sanitize dictionary data before it is written to Supabase:
    - Empty strings → None
    - Strip string whitespace
    - Preserve everything else (room numbers stay strings)
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped != "" else None
            continue

        clean[k] = v

    return clean


def utc_now_iso() -> str:
    """Timestamp in the ISO format Supabase stores for timestamptz columns."""
    return datetime.now(timezone.utc).isoformat()


def to_amount(value) -> float:
    """Supabase returns numeric columns as numbers or strings."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric amount {value!r} counted as 0")
        return 0.0
