# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Variables the privileged backoffice endpoints cannot run without.
    Returns the names of the missing ones.
    """
    missing = []

    if not settings.SUPABASE_URL:
        missing.append("SUPABASE_URL")
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        missing.append("SUPABASE_SERVICE_ROLE_KEY")

    return missing


def validate_optional_config() -> List[str]:
    """Problems worth a warning; the app still starts."""
    warnings = []

    # Without it, consumer-facing routes cannot build RLS-scoped clients
    if not settings.SUPABASE_ANON_KEY:
        warnings.append("SUPABASE_ANON_KEY is not set (tenant-facing routes will fail)")

    if settings.PASSWORD_MIN_LENGTH < 8:
        warnings.append(
            f"PASSWORD_MIN_LENGTH={settings.PASSWORD_MIN_LENGTH} is below the recommended 8"
        )

    if settings.REALTIME_BRIDGE_ENABLED and not settings.SUPABASE_SERVICE_ROLE_KEY:
        warnings.append("REALTIME_BRIDGE_ENABLED without SUPABASE_SERVICE_ROLE_KEY; bridge will not start")

    return warnings


def validate_config_on_startup():
    """
    Raises RuntimeError when Supabase credentials are missing, except
    under ENV=test where it only warns.
    """
    missing_required = validate_required_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        if settings.ENV == "test":
            logger.warning(error_msg)
        else:
            logger.error(error_msg)
            raise RuntimeError(error_msg)

    for warning in validate_optional_config():
        logger.warning(f"Configuration: {warning}")

    if not missing_required:
        logger.info(f"Configuration validation passed ({settings.ENV})")
