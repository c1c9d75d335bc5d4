from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Roomkeeper API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # Frontend Domains (SPA + backoffice console)
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:5173",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # Forward Supabase Realtime notification changes into the local feed
    REALTIME_BRIDGE_ENABLED: bool = Field(False, env="REALTIME_BRIDGE_ENABLED")

    # -------------------------------------------------
    # Backoffice account policy
    # -------------------------------------------------
    PASSWORD_MIN_LENGTH: int = Field(8, env="PASSWORD_MIN_LENGTH", description="Minimum password length for backoffice accounts")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
settings.BACKEND_CORS_ORIGINS = sorted(
    set(d.rstrip("/") for d in settings.FRONTEND_DOMAINS)
)
