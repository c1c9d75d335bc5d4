# core/errors.py

from typing import Optional

from core.logging_config import logger


# =================================================================
#  DOMAIN ERRORS
# =================================================================
# Every failure is scoped to the single requested operation. Routers
# render these through the AppError handler registered in main.py;
# the privileged backoffice endpoints flatten them to 400 {"message"}.
# =================================================================

class AppError(Exception):
    """Base class: carries a user-visible message and an HTTP status."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = 404
    default_message = "Resource not found"


class ValidationFailed(AppError):
    status_code = 422
    default_message = "Invalid input"


class StoreError(AppError):
    """The hosted store rejected the query (connectivity, constraint, RLS)."""

    status_code = 500
    default_message = "Database operation failed"


class CreateFailed(StoreError):
    status_code = 400
    default_message = "Create failed"


class UpdateFailed(StoreError):
    status_code = 400
    default_message = "Update failed"


class DeleteFailed(StoreError):
    status_code = 400
    default_message = "Delete failed"


# =================================================================
#  SUPABASE ERROR EXTRACTION
# =================================================================

def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors (APIError.message)
      • GoTrue (Auth) errors (AuthApiError.message)
      • Generic Python exceptions
    """

    # Case 1 — Supabase Auth / PostgREST errors
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2 — errors with args (common)
    if getattr(error, "args", None):
        return str(error.args[0])

    # Case 3 — Plain string fallback
    return str(error) or "Unknown Supabase error"


def store_error(error: Exception, operation: str, error_cls=StoreError) -> StoreError:
    """
    Wrap a Supabase exception in a StoreError subclass, keeping the
    store's own message so it reaches the caller unmodified.
    Returns the error (doesn't raise) so callers can `raise ... from e`.
    """
    detail = extract_supabase_error(error)
    logger.error(f"{operation}: {detail}")
    return error_cls(f"{operation}: {detail}")
